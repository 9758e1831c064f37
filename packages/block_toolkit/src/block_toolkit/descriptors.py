"""Extension descriptor data model.

An extension describes itself with an ``ExtensionDescriptor``: its id, display
name, optional icons and documentation link, and the ordered list of blocks it
implements. Descriptors validate themselves on construction so that a
malformed extension fails loudly at registration rather than at run time.
"""

from __future__ import annotations

import base64
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from block_toolkit.errors import DescriptorError
from block_toolkit.messages import Message, MessageDescriptor, default_text, placeholders
from block_toolkit.types import ALL_TARGET_TYPES, ArgumentType, BlockType, TargetType

MessageResolver = Callable[[Message], str]

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_MACRO_CASE = re.compile(r"^[A-Z][A-Z0-9_]*$")
_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


def data_uri(data: bytes, mime_type: str = "image/png") -> str:
    """Encode raw image bytes as a data URI usable for extension icons."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def _default_resolver(message: Message) -> str:
    return default_text(message)


@dataclass(frozen=True)
class ArgumentSpec:
    """Type and default value of one block argument."""

    type: ArgumentType = ArgumentType.STRING
    default_value: Any = None
    menu: str | None = None

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "type", ArgumentType(self.type))
        except ValueError as exc:
            msg = f"Unknown argument type: {self.type!r}"
            raise DescriptorError(msg) from exc

    def to_dict(self, resolve: MessageResolver = _default_resolver) -> dict[str, Any]:
        """Render the argument in the host wire shape."""
        payload: dict[str, Any] = {"type": self.type.value}
        if self.default_value is not None:
            default = self.default_value
            if isinstance(default, MessageDescriptor):
                default = resolve(default)
            payload["defaultValue"] = default
        if self.menu is not None:
            payload["menu"] = self.menu
        return payload


@dataclass(frozen=True)
class BlockDefinition:
    """One block implemented by an extension."""

    opcode: str
    block_type: BlockType
    text: Message
    arguments: Mapping[str, ArgumentSpec] = field(default_factory=dict)
    func: str | None = None
    branch_count: int = 0
    terminal: bool = False
    block_all_threads: bool = False
    filter: tuple[TargetType, ...] = ALL_TARGET_TYPES

    def __post_init__(self) -> None:
        if not isinstance(self.opcode, str):
            msg = f"Block opcode must be a string: {self.opcode!r}"
            raise DescriptorError(msg)
        if not isinstance(self.text, (str, MessageDescriptor)):
            msg = f"Block '{self.opcode}' text must be a string or MessageDescriptor"
            raise DescriptorError(msg)
        if not _IDENTIFIER.match(self.opcode):
            msg = f"Block opcode must be an identifier: {self.opcode!r}"
            raise DescriptorError(msg)
        try:
            object.__setattr__(self, "block_type", BlockType(self.block_type))
        except ValueError as exc:
            msg = f"Block '{self.opcode}' has unknown block type: {self.block_type!r}"
            raise DescriptorError(msg) from exc
        if self.func is None:
            object.__setattr__(self, "func", self.opcode)
        if self.branch_count < 0:
            msg = f"Block '{self.opcode}' has a negative branch count"
            raise DescriptorError(msg)
        try:
            targets = tuple(dict.fromkeys(TargetType(target) for target in self.filter))
        except ValueError as exc:
            msg = f"Block '{self.opcode}' has an unknown target type in its filter"
            raise DescriptorError(msg) from exc
        if not targets:
            msg = f"Block '{self.opcode}' filter must name at least one target type"
            raise DescriptorError(msg)
        object.__setattr__(self, "filter", targets)
        object.__setattr__(self, "arguments", MappingProxyType(dict(self.arguments)))
        self.validate()

    def validate(self) -> None:
        """Check that text placeholders and argument specs match one to one."""
        referenced = placeholders(default_text(self.text), "block")
        for name in referenced:
            if not _MACRO_CASE.match(name):
                msg = f"Block '{self.opcode}' placeholder [{name}] must be MACRO_CASE"
                raise DescriptorError(msg)
        missing = [name for name in referenced if name not in self.arguments]
        if missing:
            msg = f"Block '{self.opcode}' text references undeclared arguments: {missing}"
            raise DescriptorError(msg)
        unused = [name for name in self.arguments if name not in referenced]
        if unused:
            msg = f"Block '{self.opcode}' declares arguments missing from its text: {unused}"
            raise DescriptorError(msg)
        for name, spec in self.arguments.items():
            if not isinstance(spec, ArgumentSpec):
                msg = f"Block '{self.opcode}' argument '{name}' must be an ArgumentSpec"
                raise DescriptorError(msg)

    @property
    def argument_names(self) -> tuple[str, ...]:
        """Argument ids in the order they appear in the default text."""
        return placeholders(default_text(self.text), "block")

    @property
    def effective_branch_count(self) -> int:
        """Number of child branches the host should render."""
        if not self.block_type.has_branches:
            return 0
        if self.block_type is BlockType.LOOP:
            return max(self.branch_count, 1)
        return self.branch_count

    def allows(self, target_type: TargetType) -> bool:
        """Return whether the block may run on the given target type."""
        return TargetType(target_type) in self.filter

    def to_dict(self, resolve: MessageResolver = _default_resolver) -> dict[str, Any]:
        """Render the block in the host wire shape."""
        return {
            "opcode": self.opcode,
            "blockType": self.block_type.value,
            "branchCount": self.effective_branch_count,
            "terminal": self.terminal,
            "blockAllThreads": self.block_all_threads,
            "text": resolve(self.text),
            "arguments": {
                name: spec.to_dict(resolve) for name, spec in self.arguments.items()
            },
            "func": self.func,
            "filter": [target.value for target in self.filter],
        }


@dataclass(frozen=True)
class ExtensionDescriptor:
    """Static metadata describing an extension and its blocks."""

    id: str
    name: Message
    blocks: tuple[BlockDefinition, ...]
    block_icon_uri: str | None = None
    menu_icon_uri: str | None = None
    docs_uri: str | None = None
    color1: str | None = None
    color2: str | None = None
    color3: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.id, str):
            msg = f"Extension id must be a string: {self.id!r}"
            raise DescriptorError(msg)
        if not isinstance(self.name, (str, MessageDescriptor)):
            msg = f"Extension '{self.id}' name must be a string or MessageDescriptor"
            raise DescriptorError(msg)
        if not _IDENTIFIER.match(self.id):
            msg = f"Extension id must be an identifier without dots: {self.id!r}"
            raise DescriptorError(msg)
        if not default_text(self.name).strip():
            msg = f"Extension '{self.id}' must have a non-empty name"
            raise DescriptorError(msg)
        blocks = tuple(self.blocks)
        seen: set[str] = set()
        for block in blocks:
            if not isinstance(block, BlockDefinition):
                msg = f"Extension '{self.id}' blocks must be BlockDefinition instances"
                raise DescriptorError(msg)
            if block.opcode in seen:
                msg = f"Extension '{self.id}' declares opcode '{block.opcode}' twice"
                raise DescriptorError(msg)
            seen.add(block.opcode)
        object.__setattr__(self, "blocks", blocks)
        for label in ("color1", "color2", "color3"):
            value = getattr(self, label)
            if value is not None and not _HEX_COLOR.match(value):
                msg = f"Extension '{self.id}' {label} must be a #rrggbb color"
                raise DescriptorError(msg)

    def get_block(self, opcode: str) -> BlockDefinition | None:
        """Return the block with the given opcode, if declared."""
        for block in self.blocks:
            if block.opcode == opcode:
                return block
        return None

    @property
    def opcodes(self) -> list[str]:
        """Block opcodes in palette order."""
        return [block.opcode for block in self.blocks]

    def to_dict(self, resolve: MessageResolver = _default_resolver) -> dict[str, Any]:
        """Render the descriptor in the host wire shape."""
        payload: dict[str, Any] = {"id": self.id, "name": resolve(self.name)}
        optional = {
            "blockIconURI": self.block_icon_uri,
            "menuIconURI": self.menu_icon_uri,
            "docsURI": self.docs_uri,
            "color1": self.color1,
            "color2": self.color2,
            "color3": self.color3,
        }
        payload.update({key: value for key, value in optional.items() if value is not None})
        payload["blocks"] = [block.to_dict(resolve) for block in self.blocks]
        return payload
