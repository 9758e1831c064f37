"""Enumerations shared by extension descriptors."""

from __future__ import annotations

from enum import Enum


class BlockType(str, Enum):
    """Kind of block, controlling its shape and execution semantics."""

    BOOLEAN = "Boolean"
    BUTTON = "button"
    COMMAND = "command"
    CONDITIONAL = "conditional"
    EVENT = "event"
    HAT = "hat"
    LOOP = "loop"
    REPORTER = "reporter"

    @property
    def has_branches(self) -> bool:
        """Whether the block controls child branches."""
        return self in (BlockType.CONDITIONAL, BlockType.LOOP)


class ArgumentType(str, Enum):
    """Type of a block argument, which is also the shape of its input."""

    ANGLE = "angle"
    BOOLEAN = "Boolean"
    COLOR = "color"
    NUMBER = "number"
    STRING = "string"
    MATRIX = "matrix"
    NOTE = "note"
    IMAGE = "image"
    COSTUME = "costume"
    SOUND = "sound"


class TargetType(str, Enum):
    """Kind of runnable entity a block may be used on."""

    SPRITE = "sprite"
    STAGE = "stage"


ALL_TARGET_TYPES: tuple[TargetType, ...] = (TargetType.SPRITE, TargetType.STAGE)
