"""The "jdeduq Blocks" extension: a single "letter N of TEXT" reporter."""

from __future__ import annotations

import math
from typing import Any

from block_toolkit.coercion import to_number, to_string
from block_toolkit.descriptors import ArgumentSpec, BlockDefinition, ExtensionDescriptor
from block_toolkit.extensions.base import BlockExtension
from block_toolkit.messages import MessageDescriptor, format_message
from block_toolkit.types import ArgumentType, BlockType, TargetType

EXTENSION_ID = "jdeduqBlocks"

# 9x5 PNG used for both the block edge and the category menu
ICON_URI = (
    "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAkAAAAFCAAAAACyOJm3AAAAFklEQVQYV2P4DwMMEMgAI/"
    "+DEUIMBgAEWB7i7uidhAAAAABJRU5ErkJggg=="
)

EMPTY_LETTER = ""
DEFAULT_TEXT = "text"

NAME_MESSAGE = MessageDescriptor(
    id="JDEduq",
    default="jdeduq Blocks",
    description='The name of the "jdeduq Blocks" extension',
)
TEXT_MESSAGE = MessageDescriptor(
    id="myReporter",
    default="letter [LETTER_NUM] of [TEXT]",
    description='Label on the "myReporter" block',
)
TEXT_DEFAULT_MESSAGE = MessageDescriptor(
    id="myReporter.TEXT_default",
    default=DEFAULT_TEXT,
    description='Default for "TEXT" argument of "jdeduqBlocks.myReporter"',
)
RESULT_MESSAGE = MessageDescriptor(
    id="myReporter.result",
    default="Letter {LETTER_NUM} of {TEXT} is {LETTER}.",
    description='The text template for the "myReporter" block result',
)


def letter_of(text: str, letter_num: Any) -> str:
    """Return the character at a 1-based position, or ``EMPTY_LETTER``.

    The position is cast to a number and truncated toward zero. Positions
    below 1 or past the end of the text, and positions that are not finite
    numbers, select nothing. Characters are code points, so astral symbols
    count as one letter.
    """
    position = to_number(letter_num)
    if not math.isfinite(position):
        return EMPTY_LETTER
    index = int(position) - 1
    if index < 0 or index >= len(text):
        return EMPTY_LETTER
    return text[index]


class JDEduqBlocks(BlockExtension):
    """Reporter blocks for picking letters out of text."""

    def get_info(self) -> ExtensionDescriptor:
        """Return this extension's metadata."""
        return ExtensionDescriptor(
            id=EXTENSION_ID,
            name=NAME_MESSAGE,
            block_icon_uri=ICON_URI,
            menu_icon_uri=ICON_URI,
            blocks=(
                BlockDefinition(
                    opcode="myReporter",
                    block_type=BlockType.REPORTER,
                    branch_count=0,
                    terminal=True,
                    block_all_threads=False,
                    text=TEXT_MESSAGE,
                    arguments={
                        "LETTER_NUM": ArgumentSpec(type=ArgumentType.STRING, default_value="1"),
                        "TEXT": ArgumentSpec(
                            type=ArgumentType.STRING, default_value=TEXT_DEFAULT_MESSAGE
                        ),
                    },
                    func="my_reporter",
                    filter=(TargetType.SPRITE,),
                ),
            ),
        )

    def my_reporter(self, args: dict[str, Any]) -> str:
        """Report which letter sits at LETTER_NUM in TEXT."""
        text = args.get("TEXT")
        text = DEFAULT_TEXT if text is None else to_string(text)
        letter_num = args.get("LETTER_NUM", "1")
        return format_message(
            RESULT_MESSAGE,
            {
                "LETTER_NUM": letter_num,
                "TEXT": text,
                "LETTER": letter_of(text, letter_num),
            },
        )
