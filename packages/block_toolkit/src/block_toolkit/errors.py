"""Exception types raised by the block toolkit."""

from __future__ import annotations


class BlockToolkitError(Exception):
    """Base class for block toolkit errors."""


class DescriptorError(BlockToolkitError, ValueError):
    """Extension or block descriptor is malformed."""


class ExtensionRegistrationError(BlockToolkitError, ValueError):
    """Extension could not be registered with the runtime."""


class UnknownBlockError(BlockToolkitError, LookupError):
    """Requested block is not registered."""


class TargetFilterError(BlockToolkitError, LookupError):
    """Block is not available for the requested target type."""


class MessageFormatError(BlockToolkitError, ValueError):
    """Message template could not be formatted."""
