"""Block runtime for loading extensions and executing their blocks."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

from block_toolkit.config import Settings
from block_toolkit.errors import UnknownBlockError
from block_toolkit.extensions.base import BlockExtension
from block_toolkit.extensions.registry import ExtensionRegistry, split_block_id
from block_toolkit.logging_utils import configure_logging
from block_toolkit.messages import Message, MessageCatalog, use_messages
from block_toolkit.types import TargetType

if TYPE_CHECKING:
    from block_toolkit.descriptors import ExtensionDescriptor, MessageResolver
    from block_toolkit.extensions.models import BlockError

logger = logging.getLogger(__name__)

ExtensionFactory = Callable[..., BlockExtension]


class BlockRuntime:
    """Host handle passed to extensions; owns the registry and message catalog."""

    def __init__(
        self,
        settings: Settings | None = None,
        registry: ExtensionRegistry | None = None,
        catalog: MessageCatalog | None = None,
    ) -> None:
        self.settings = settings or Settings()
        configure_logging(self.settings.log_level)
        self.registry = registry or ExtensionRegistry(
            isolate_errors=self.settings.isolate_block_errors
        )
        if catalog is None and self.settings.translations_file:
            catalog = MessageCatalog.from_file(self.settings.translations_file)
        self.catalog = catalog or MessageCatalog()

    @property
    def locale(self) -> str:
        """Return the locale used to resolve messages."""
        return self.settings.locale

    @property
    def errors(self) -> list[BlockError]:
        """Return collected block errors."""
        return self.registry.errors

    def load_extension(self, factory: ExtensionFactory) -> ExtensionDescriptor:
        """Construct an extension, request its descriptor once, and register it."""
        logger.debug("Loading extension from %s", getattr(factory, "__name__", factory))
        instance = factory(self)
        descriptor = instance.get_info()
        self.registry.register(instance, descriptor)
        return descriptor

    def load_extensions(self, factories: Iterable[ExtensionFactory]) -> list[ExtensionDescriptor]:
        """Load extensions from the provided factories."""
        return [self.load_extension(factory) for factory in factories]

    def resolver(self, extension_id: str) -> MessageResolver:
        """Return a message resolver for an extension's namespace."""

        def _resolve(message: Message) -> str:
            return self.catalog.resolve(message, self.locale, extension_id)

        return _resolve

    def execute(
        self,
        block_id: str,
        args: Mapping[str, Any] | None = None,
        target_type: TargetType = TargetType.SPRITE,
    ) -> Any:
        """Execute a block by its qualified id (``extensionId.opcode``)."""
        extension_id, _ = split_block_id(block_id)
        with use_messages(self.catalog, self.locale, namespace=extension_id):
            return self.registry.invoke(block_id, args, target_type)

    def describe(self, extension_id: str) -> dict[str, Any]:
        """Render a registered extension's descriptor in the current locale."""
        entry = self.registry.get(extension_id)
        if entry is None:
            message = f"Unknown extension: {extension_id}"
            raise UnknownBlockError(message)
        return entry.descriptor.to_dict(self.resolver(extension_id))

    def palette(self, target_type: TargetType | None = None) -> list[dict[str, Any]]:
        """List rendered blocks in palette order for a target type."""
        entries: list[dict[str, Any]] = []
        for entry, block in self.registry.blocks(target_type):
            payload = block.to_dict(self.resolver(entry.id))
            payload["id"] = f"{entry.id}.{block.opcode}"
            entries.append(payload)
        return entries
