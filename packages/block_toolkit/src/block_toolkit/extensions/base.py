"""Base class for block extensions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from block_toolkit.descriptors import ExtensionDescriptor
    from block_toolkit.extensions.runtime import BlockRuntime


class BlockExtension(ABC):
    """Extension constructed by the runtime and asked once for its descriptor.

    Subclasses implement ``get_info`` and one method per block, named by the
    block's ``func``. Each handler receives a single mapping of argument id to
    coerced value.
    """

    def __init__(self, runtime: BlockRuntime) -> None:
        self.runtime = runtime

    @abstractmethod
    def get_info(self) -> ExtensionDescriptor:
        """Return this extension's metadata."""
