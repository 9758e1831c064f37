from __future__ import annotations

import logging

import pytest
from block_toolkit.descriptors import ArgumentSpec, BlockDefinition, ExtensionDescriptor
from block_toolkit.errors import ExtensionRegistrationError, TargetFilterError, UnknownBlockError
from block_toolkit.extensions import BlockExtension, ExtensionRegistry
from block_toolkit.extensions.registry import coerce_arguments, split_block_id
from block_toolkit.types import ArgumentType, BlockType, TargetType


class EchoBlocks(BlockExtension):
    def get_info(self) -> ExtensionDescriptor:
        return ExtensionDescriptor(
            id="echo",
            name="Echo",
            blocks=(
                BlockDefinition(
                    opcode="say",
                    block_type=BlockType.REPORTER,
                    text="say [MSG]",
                    arguments={"MSG": ArgumentSpec(default_value="hi")},
                ),
                BlockDefinition(
                    opcode="isBig",
                    block_type=BlockType.BOOLEAN,
                    text="is [N] big",
                    arguments={"N": ArgumentSpec(type=ArgumentType.NUMBER, default_value=0)},
                    func="is_big",
                ),
                BlockDefinition(opcode="fail", block_type=BlockType.REPORTER, text="fail"),
                BlockDefinition(
                    opcode="stageOnly",
                    block_type=BlockType.COMMAND,
                    text="stage only",
                    func="stage_only",
                    filter=(TargetType.STAGE,),
                ),
            ),
        )

    def say(self, args):
        return args["MSG"]

    def is_big(self, args):
        return args["N"] > 10

    def fail(self, args):
        raise RuntimeError("boom")

    def stage_only(self, args):
        return None


def _registry(**kwargs) -> ExtensionRegistry:
    registry = ExtensionRegistry(**kwargs)
    extension = EchoBlocks(runtime=None)
    registry.register(extension, extension.get_info())
    return registry


def test_register_and_get_extension() -> None:
    registry = _registry()
    entry = registry.get("echo")
    assert entry is not None
    assert entry.id == "echo"
    assert isinstance(entry.instance, EchoBlocks)
    assert "echo" in registry
    assert registry.ids() == ["echo"]


def test_duplicate_extension_id_rejected() -> None:
    registry = _registry()
    extension = EchoBlocks(runtime=None)
    with pytest.raises(ExtensionRegistrationError, match="already registered"):
        registry.register(extension, extension.get_info())


def test_missing_handler_rejected() -> None:
    class Broken(EchoBlocks):
        say = None

    registry = ExtensionRegistry()
    extension = Broken(runtime=None)
    with pytest.raises(ExtensionRegistrationError, match="'say'"):
        registry.register(extension, extension.get_info())
    assert "echo" not in registry


def test_descriptor_type_checked() -> None:
    registry = ExtensionRegistry()
    with pytest.raises(ExtensionRegistrationError, match="ExtensionDescriptor"):
        registry.register(object(), {"id": "echo"})


def test_invoke_reporter_with_default() -> None:
    registry = _registry()
    assert registry.invoke("echo.say", {}) == "hi"
    assert registry.invoke("echo.say", {"MSG": 3.0}) == "3"


def test_invoke_boolean_with_coercion() -> None:
    registry = _registry()
    assert registry.invoke("echo.isBig", {"N": "12"}) is True
    assert registry.invoke("echo.isBig", {"N": "lots"}) is False


def test_handler_error_is_isolated(caplog) -> None:
    registry = _registry()
    with caplog.at_level(logging.ERROR, logger="block_toolkit.extensions.registry"):
        assert registry.invoke("echo.fail") == ""
    assert registry.errors[0].extension_id == "echo"
    assert registry.errors[0].opcode == "fail"
    assert registry.errors[0].message == "boom"
    assert "echo.fail" in caplog.text


def test_handler_error_propagates_without_isolation() -> None:
    registry = _registry(isolate_errors=False)
    with pytest.raises(RuntimeError, match="boom"):
        registry.invoke("echo.fail")
    assert registry.errors == []


def test_unknown_blocks() -> None:
    registry = _registry()
    with pytest.raises(UnknownBlockError, match="Unknown extension"):
        registry.invoke("missing.say")
    with pytest.raises(UnknownBlockError, match="no block"):
        registry.invoke("echo.shout")
    with pytest.raises(UnknownBlockError):
        registry.invoke("say")


def test_target_filter_enforced() -> None:
    registry = _registry()
    with pytest.raises(TargetFilterError, match="sprite"):
        registry.invoke("echo.stageOnly")
    assert registry.invoke("echo.stageOnly", target_type=TargetType.STAGE) is None


def test_blocks_listed_in_palette_order() -> None:
    registry = _registry()
    assert [block.opcode for _, block in registry.blocks()] == [
        "say",
        "isBig",
        "fail",
        "stageOnly",
    ]
    sprite_blocks = [block.opcode for _, block in registry.blocks(TargetType.SPRITE)]
    assert "stageOnly" not in sprite_blocks


def test_coerce_arguments_keeps_declared_only() -> None:
    block = EchoBlocks(runtime=None).get_info().get_block("say")
    assert coerce_arguments(block, {"MSG": "yo", "EXTRA": 1}) == {"MSG": "yo"}


def test_split_block_id() -> None:
    assert split_block_id("echo.say") == ("echo", "say")
    with pytest.raises(UnknownBlockError):
        split_block_id("echo.")
