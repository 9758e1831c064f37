"""Extensions bundled with the toolkit."""

from block_toolkit.builtin.jdeduq import JDEduqBlocks

BUILTIN_EXTENSIONS = (JDEduqBlocks,)

__all__ = [
    "BUILTIN_EXTENSIONS",
    "JDEduqBlocks",
]
