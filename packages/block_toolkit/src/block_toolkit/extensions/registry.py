"""Extension registry with block lookup and safe invocation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from block_toolkit.coercion import coerce_argument
from block_toolkit.descriptors import BlockDefinition, ExtensionDescriptor
from block_toolkit.errors import ExtensionRegistrationError, TargetFilterError, UnknownBlockError
from block_toolkit.extensions.models import BlockError, RegisteredExtension, neutral_value
from block_toolkit.logging_utils import block_context
from block_toolkit.messages import MessageDescriptor, resolve_message
from block_toolkit.types import TargetType

logger = logging.getLogger(__name__)


def split_block_id(block_id: str) -> tuple[str, str]:
    """Split ``extensionId.opcode`` into its two parts."""
    extension_id, sep, opcode = block_id.partition(".")
    if not sep or not extension_id or not opcode:
        message = f"Block id must look like 'extensionId.opcode': {block_id!r}"
        raise UnknownBlockError(message)
    return extension_id, opcode


def coerce_arguments(block: BlockDefinition, args: Mapping[str, Any]) -> dict[str, Any]:
    """Coerce raw invocation arguments against a block's argument specs.

    Only declared arguments are kept. Message defaults resolve through the
    active message context.
    """
    coerced: dict[str, Any] = {}
    for name, spec in block.arguments.items():
        default = spec.default_value
        if isinstance(default, MessageDescriptor):
            default = resolve_message(default)
        coerced[name] = coerce_argument(spec.type, args.get(name), default)
    return coerced


class ExtensionRegistry:
    """Register extensions by id and invoke their blocks with error isolation."""

    def __init__(self, *, isolate_errors: bool = True) -> None:
        self._extensions: dict[str, RegisteredExtension] = {}
        self.isolate_errors = isolate_errors
        self.errors: list[BlockError] = []

    def __contains__(self, extension_id: object) -> bool:
        return extension_id in self._extensions

    def register(self, instance: Any, descriptor: ExtensionDescriptor) -> RegisteredExtension:
        """Register an extension instance under its descriptor's id."""
        if not isinstance(descriptor, ExtensionDescriptor):
            message = (
                f"{type(instance).__name__}.get_info() must return an ExtensionDescriptor, "
                f"got {type(descriptor).__name__}"
            )
            raise ExtensionRegistrationError(message)
        if descriptor.id in self._extensions:
            message = f"Extension already registered: {descriptor.id}"
            raise ExtensionRegistrationError(message)
        for block in descriptor.blocks:
            if not callable(getattr(instance, block.func, None)):
                message = (
                    f"Extension '{descriptor.id}' block '{block.opcode}' names handler "
                    f"'{block.func}' which {type(instance).__name__} does not implement"
                )
                raise ExtensionRegistrationError(message)
        entry = RegisteredExtension(descriptor=descriptor, instance=instance)
        self._extensions[descriptor.id] = entry
        logger.info(
            "Registered extension '%s' with %d block(s)", descriptor.id, len(descriptor.blocks)
        )
        return entry

    def get(self, extension_id: str) -> RegisteredExtension | None:
        """Get a registered extension by id."""
        return self._extensions.get(extension_id)

    def ids(self) -> list[str]:
        """Return registered extension ids in registration order."""
        return list(self._extensions)

    def blocks(
        self, target_type: TargetType | None = None
    ) -> list[tuple[RegisteredExtension, BlockDefinition]]:
        """List blocks in palette order, optionally filtered by target type."""
        listed: list[tuple[RegisteredExtension, BlockDefinition]] = []
        for entry in self._extensions.values():
            for block in entry.descriptor.blocks:
                if target_type is None or block.allows(target_type):
                    listed.append((entry, block))
        return listed

    def resolve_block(self, block_id: str) -> tuple[RegisteredExtension, BlockDefinition]:
        """Resolve a qualified block id to its extension and definition."""
        extension_id, opcode = split_block_id(block_id)
        entry = self._extensions.get(extension_id)
        if entry is None:
            message = f"Unknown extension: {extension_id}"
            raise UnknownBlockError(message)
        block = entry.descriptor.get_block(opcode)
        if block is None:
            message = f"Extension '{extension_id}' has no block '{opcode}'"
            raise UnknownBlockError(message)
        return entry, block

    def invoke(
        self,
        block_id: str,
        args: Mapping[str, Any] | None = None,
        target_type: TargetType = TargetType.SPRITE,
    ) -> Any:
        """Invoke a block handler and return its result.

        Handler exceptions are recorded in ``errors`` and the block kind's
        neutral value is returned, unless error isolation is disabled.
        """
        entry, block = self.resolve_block(block_id)
        if not block.allows(target_type):
            message = f"Block '{block_id}' is not available for {TargetType(target_type).value}"
            raise TargetFilterError(message)
        handler = entry.handler(block)
        with block_context(block_id):
            coerced = coerce_arguments(block, args or {})
            logger.debug("Invoking block with %s", coerced)
            try:
                return handler(coerced)
            except Exception as exc:
                if not self.isolate_errors:
                    raise
                logger.exception("Block '%s' failed", block_id)
                self.errors.append(
                    BlockError(extension_id=entry.id, opcode=block.opcode, message=str(exc))
                )
                return neutral_value(block.block_type)
