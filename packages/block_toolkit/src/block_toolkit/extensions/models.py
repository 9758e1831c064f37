"""Extension registry models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from block_toolkit.types import BlockType

if TYPE_CHECKING:
    from collections.abc import Callable

    from block_toolkit.descriptors import BlockDefinition, ExtensionDescriptor


@dataclass(frozen=True)
class RegisteredExtension:
    """Extension instance paired with the descriptor it reported."""

    descriptor: ExtensionDescriptor
    instance: Any

    @property
    def id(self) -> str:
        """Return the extension id."""
        return self.descriptor.id

    def handler(self, block: BlockDefinition) -> Callable[[dict[str, Any]], Any]:
        """Return the bound handler implementing a block."""
        return getattr(self.instance, block.func)


@dataclass(frozen=True)
class BlockError:
    """Captured block handler error."""

    extension_id: str
    opcode: str
    message: str


def neutral_value(block_type: BlockType) -> Any:
    """Return the value reported by a block whose handler failed."""
    if block_type is BlockType.REPORTER:
        return ""
    if block_type in (BlockType.BOOLEAN, BlockType.HAT):
        return False
    return None
