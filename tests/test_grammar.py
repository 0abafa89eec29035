from __future__ import annotations

from pathlib import Path

import pytest
from lark import Tree

from sweet import GrammarError, MainSectionError, ParserSettings, SwhkdParser
from sweet.grammar import strip_comments


class _NoContentGrammar:
    def parse(self, text: str, *, source: str = "<anonymous>") -> Tree:
        return Tree("start", [])


def test_strip_comments_keeps_line_numbers() -> None:
    text = "a\n    echo a\n# off\n    echo off\n\n    echo still off\nb\n    echo b   \n"

    assert strip_comments(text) == "a\n    echo a\n\n\n\n\nb\n    echo b\n"


def test_indented_comment_does_not_swallow_following_lines() -> None:
    text = "a\n    # note\nb\n    echo b"

    assert strip_comments(text) == "a\n\nb\n    echo b\n"


def test_configured_comment_marker() -> None:
    parser = SwhkdParser(settings=ParserSettings(comment_marker=";"))

    result = parser.from_text("; t\n    firefox\nw\n    kitty\n")

    assert [b.command for b in result.bindings] == ["kitty"]


def test_default_marker_is_not_special_under_other_marker() -> None:
    parser = SwhkdParser(settings=ParserSettings(comment_marker=";"))

    with pytest.raises(GrammarError):
        parser.from_text("# t\nw\n    kitty\n")


def test_blank_comment_marker_rejected() -> None:
    with pytest.raises(ValueError):
        ParserSettings(comment_marker="  ")


def test_settings_from_toml(tmp_path: Path) -> None:
    path = tmp_path / "settings.toml"
    path.write_text('[parser]\ncomment_marker = "//"\nencoding = "latin-1"\n', encoding="utf-8")

    settings = ParserSettings.from_toml(path)

    assert settings.comment_marker == "//"
    assert settings.encoding == "latin-1"


def test_settings_from_toml_defaults(tmp_path: Path) -> None:
    path = tmp_path / "settings.toml"
    path.write_text("", encoding="utf-8")

    assert ParserSettings.from_toml(path) == ParserSettings()


def test_missing_main_section() -> None:
    parser = SwhkdParser(grammar=_NoContentGrammar())

    with pytest.raises(MainSectionError):
        parser.from_text("a\n    echo a")


def test_grammar_error_is_located() -> None:
    with pytest.raises(GrammarError) as excinfo:
        SwhkdParser().from_text("a\n    echo a\n\nsuper + + b\n    echo b\n")

    err = excinfo.value
    assert err.span.source == "<anonymous>"
    assert err.span.line == 4
    assert str(err).startswith("<anonymous>:4:")


def test_unterminated_mode_is_rejected() -> None:
    with pytest.raises(GrammarError):
        SwhkdParser().from_text("mode music\na\n    echo a\n")
