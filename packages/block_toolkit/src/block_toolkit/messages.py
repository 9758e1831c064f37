"""Localizable messages and template formatting.

Any user-visible string in an extension descriptor may be given either as a
plain string, which is never translated, or as a ``MessageDescriptor`` which
the host resolves against its translation catalog. Message ids are namespaced
per extension so that two extensions can use the same id without colliding.

Two placeholder styles are used:
- block text: ``[MACRO_CASE]`` placeholders mark argument inputs
- message templates: ``{NAME}`` placeholders are substituted by name
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from block_toolkit.coercion import to_string
from block_toolkit.errors import DescriptorError, MessageFormatError

logger = logging.getLogger(__name__)

PlaceholderStyle = Literal["block", "message"]

_BLOCK_PLACEHOLDER = re.compile(r"\[([A-Za-z_][A-Za-z0-9_]*)\]")
_MESSAGE_TOKEN = re.compile(r"\{\{|\}\}|\{([A-Za-z_][A-Za-z0-9_]*)\}")


@dataclass(frozen=True)
class MessageDescriptor:
    """Reference to a translatable message with its default template."""

    id: str
    default: str
    description: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            msg = "MessageDescriptor.id must be a non-empty string"
            raise DescriptorError(msg)
        if not isinstance(self.default, str):
            msg = f"MessageDescriptor '{self.id}' default must be a string"
            raise DescriptorError(msg)


Message = str | MessageDescriptor


def default_text(message: Message) -> str:
    """Return the untranslated text of a message."""
    return message.default if isinstance(message, MessageDescriptor) else message


def placeholders(template: str, style: PlaceholderStyle = "block") -> tuple[str, ...]:
    """Return placeholder names in order of first appearance."""
    if style == "block":
        names = [match.group(1) for match in _BLOCK_PLACEHOLDER.finditer(template)]
    else:
        names = [
            match.group(1)
            for match in _MESSAGE_TOKEN.finditer(template)
            if match.group(1) is not None
        ]
    return tuple(dict.fromkeys(names))


def format_template(template: str, values: Mapping[str, Any]) -> str:
    """Substitute ``{NAME}`` placeholders by name.

    ``{{`` and ``}}`` produce literal braces. Values are rendered with the
    host's string cast, so ``3.0`` becomes ``"3"``.

    Raises:
        MessageFormatError: If a placeholder has no value.
    """

    def _replace(match: re.Match[str]) -> str:
        token = match.group(0)
        if token == "{{":
            return "{"
        if token == "}}":
            return "}"
        name = match.group(1)
        if name not in values:
            message = f"No value for placeholder '{name}' in template {template!r}"
            raise MessageFormatError(message)
        return to_string(values[name])

    return _MESSAGE_TOKEN.sub(_replace, template)


def normalize_locale(locale: str) -> str:
    """Normalize a locale tag to lowercase with ``-`` separators."""
    return locale.strip().replace("_", "-").lower()


def _locale_chain(locale: str) -> list[str]:
    normalized = normalize_locale(locale)
    chain = [normalized]
    if "-" in normalized:
        chain.append(normalized.split("-", 1)[0])
    return chain


def _same_placeholders(left: str, right: str) -> bool:
    return set(placeholders(left, "block")) == set(placeholders(right, "block")) and set(
        placeholders(left, "message")
    ) == set(placeholders(right, "message"))


class MessageCatalog:
    """Translated message templates keyed by locale and namespaced message id."""

    def __init__(self, translations: Mapping[str, Mapping[str, str]] | None = None) -> None:
        self._translations: dict[str, dict[str, str]] = {}
        for locale, messages in (translations or {}).items():
            for key, template in messages.items():
                self.add(locale, key, template)

    @classmethod
    def from_file(cls, path: str | Path) -> MessageCatalog:
        """Load a catalog from a JSON file shaped ``{locale: {key: template}}``."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            msg = f"Translations file must contain an object: {path}"
            raise ValueError(msg)
        for locale, messages in data.items():
            if not isinstance(messages, dict) or not all(
                isinstance(value, str) for value in messages.values()
            ):
                msg = f"Translations for locale '{locale}' must map ids to strings"
                raise ValueError(msg)
        return cls(data)

    def add(self, locale: str, key: str, template: str) -> None:
        """Add or replace a translation."""
        self._translations.setdefault(normalize_locale(locale), {})[key] = template

    def locales(self) -> list[str]:
        """Return locales with at least one translation."""
        return sorted(self._translations)

    def lookup(self, key: str, locale: str) -> str | None:
        """Return the translation for a key, falling back to the base language."""
        for candidate in _locale_chain(locale):
            template = self._translations.get(candidate, {}).get(key)
            if template is not None:
                return template
        return None

    def resolve(self, message: Message, locale: str, namespace: str | None = None) -> str:
        """Resolve a message to the template for a locale.

        Plain strings are returned unchanged. A translation whose placeholders
        differ from the default template is ignored.
        """
        if not isinstance(message, MessageDescriptor):
            return message
        key = f"{namespace}.{message.id}" if namespace else message.id
        translated = self.lookup(key, locale)
        if translated is None:
            return message.default
        if not _same_placeholders(translated, message.default):
            logger.warning(
                "Ignoring %s translation of '%s': placeholders differ from default",
                locale,
                key,
            )
            return message.default
        return translated


@dataclass(frozen=True)
class MessageContext:
    """Catalog, locale, and namespace used to resolve messages."""

    catalog: MessageCatalog
    locale: str
    namespace: str | None = None

    def resolve(self, message: Message) -> str:
        """Resolve a message in this context."""
        return self.catalog.resolve(message, self.locale, self.namespace)


_ACTIVE_CONTEXT: ContextVar[MessageContext | None] = ContextVar(
    "block_toolkit_message_context", default=None
)


@contextmanager
def use_messages(
    catalog: MessageCatalog, locale: str, namespace: str | None = None
) -> Iterator[MessageContext]:
    """Activate a message context for the current thread or task."""
    context = MessageContext(catalog=catalog, locale=locale, namespace=namespace)
    token = _ACTIVE_CONTEXT.set(context)
    try:
        yield context
    finally:
        _ACTIVE_CONTEXT.reset(token)


def active_context() -> MessageContext | None:
    """Return the active message context, if any."""
    return _ACTIVE_CONTEXT.get()


def resolve_message(message: Message) -> str:
    """Resolve a message through the active context, or to its default."""
    context = _ACTIVE_CONTEXT.get()
    if context is None:
        return default_text(message)
    return context.resolve(message)


def format_message(message: Message, values: Mapping[str, Any] | None = None) -> str:
    """Resolve a message and substitute its placeholders by name."""
    template = resolve_message(message)
    if values is None:
        return template
    return format_template(template, values)
