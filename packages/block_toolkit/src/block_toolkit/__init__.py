from block_toolkit.builtin import BUILTIN_EXTENSIONS, JDEduqBlocks
from block_toolkit.config import Settings, load_settings
from block_toolkit.descriptors import ArgumentSpec, BlockDefinition, ExtensionDescriptor, data_uri
from block_toolkit.errors import (
    BlockToolkitError,
    DescriptorError,
    ExtensionRegistrationError,
    MessageFormatError,
    TargetFilterError,
    UnknownBlockError,
)
from block_toolkit.extensions import (
    BlockError,
    BlockExtension,
    BlockRuntime,
    ExtensionRegistry,
)
from block_toolkit.messages import (
    MessageCatalog,
    MessageDescriptor,
    format_message,
    format_template,
    use_messages,
)
from block_toolkit.types import ArgumentType, BlockType, TargetType

__all__ = [
    "BUILTIN_EXTENSIONS",
    "ArgumentSpec",
    "ArgumentType",
    "BlockDefinition",
    "BlockError",
    "BlockExtension",
    "BlockRuntime",
    "BlockToolkitError",
    "BlockType",
    "DescriptorError",
    "ExtensionDescriptor",
    "ExtensionRegistrationError",
    "ExtensionRegistry",
    "JDEduqBlocks",
    "MessageCatalog",
    "MessageDescriptor",
    "MessageFormatError",
    "Settings",
    "TargetFilterError",
    "TargetType",
    "UnknownBlockError",
    "data_uri",
    "format_message",
    "format_template",
    "load_settings",
    "use_messages",
]
