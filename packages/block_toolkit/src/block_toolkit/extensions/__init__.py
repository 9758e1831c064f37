"""Extension registration and invocation surface."""

from block_toolkit.extensions.base import BlockExtension
from block_toolkit.extensions.models import BlockError, RegisteredExtension
from block_toolkit.extensions.registry import ExtensionRegistry
from block_toolkit.extensions.runtime import BlockRuntime, ExtensionFactory

__all__ = [
    "BlockError",
    "BlockExtension",
    "BlockRuntime",
    "ExtensionFactory",
    "ExtensionRegistry",
    "RegisteredExtension",
]
