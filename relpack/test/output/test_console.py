"""Tests for relpack.output.console module."""

from __future__ import annotations

import pytest

from relpack.output.console import MockConsole, RichConsole, Style, format_command


class TestStyle:
    def test_str_conversion(self) -> None:
        assert str(Style.SUCCESS) == "success"
        assert str(Style.DIM) == "dim"


class TestFormatCommand:
    def test_plain(self) -> None:
        assert format_command(["tar", "-caf", "demo-linux.tar.xz", "demo"]) == (
            "tar -caf demo-linux.tar.xz demo"
        )

    def test_quotes_spaces(self) -> None:
        assert format_command(["mv", "a b.zip", "."]) == "mv 'a b.zip' ."


class TestMockConsole:
    def test_prefixes_and_styles(self) -> None:
        console = MockConsole()
        console.success("published")
        console.error("build failed")
        console.warning("careful")
        console.info("note")

        assert console.messages == [
            "OK published",
            "error: build failed",
            "warning: careful",
            "info: note",
        ]
        assert console.has_error()
        assert console.has_success()

    def test_commands(self) -> None:
        console = MockConsole()
        console.header("Release linux")
        console.command(["cargo", "build", "--release"])

        assert console.commands == ["cargo build --release"]
        assert console.outputs[1].style == Style.DIM

    def test_find(self) -> None:
        console = MockConsole()
        console.print("demo-linux.tar.xz")
        console.print("demo-windows.zip")
        assert len(console.find("demo-")) == 2


class TestRichConsole:
    def test_markup_in_messages_is_not_interpreted(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        console = RichConsole()
        console.error("[linux] build failed")
        console.command(["zip", "-9", "[x].zip"])

        out = capsys.readouterr().out
        assert "[linux] build failed" in out
        assert "[x].zip" in out
