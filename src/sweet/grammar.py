from __future__ import annotations

import functools
import logging
from typing import Protocol

from lark import Lark, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from .errors import ANONYMOUS_SOURCE, GrammarError, SourceSpan


logger = logging.getLogger(__name__)


class Grammar(Protocol):
    """Turns config text into a syntax tree rooted at `start`."""

    def parse(self, text: str, *, source: str = ANONYMOUS_SOURCE) -> Tree: ...


def strip_comments(text: str, marker: str = "#") -> str:
    """Blank out comment lines, keeping line numbers intact.

    A line whose first non-blank characters are `marker` is a comment. An
    unindented comment also owns the indented lines below it, so commenting out
    a trigger comments out its command too. Trailing whitespace is dropped from
    every line and the result always ends with a newline.
    """

    lines: list[str] = []
    in_comment_body = False
    for line in text.splitlines():
        stripped = line.strip()
        indented = line[:1] in (" ", "\t")
        if in_comment_body and (indented or not stripped):
            lines.append("")
            continue
        in_comment_body = False
        if stripped.startswith(marker):
            in_comment_body = not indented
            lines.append("")
            continue
        lines.append(line.rstrip())
    return "\n".join(lines) + "\n"


@functools.lru_cache(maxsize=None)
def _load() -> Lark:
    return Lark.open(
        "sweet.lark",
        rel_to=__file__,
        parser="lalr",
        lexer="contextual",
        propagate_positions=True,
        maybe_placeholders=False,
    )


class SwhkdGrammar:
    """The bundled lark grammar (`sweet.lark`)."""

    def __init__(self, *, comment_marker: str = "#") -> None:
        self._comment_marker = comment_marker
        self._lark = _load()

    def parse(self, text: str, *, source: str = ANONYMOUS_SOURCE) -> Tree:
        prepared = strip_comments(text, self._comment_marker)
        try:
            return self._lark.parse(prepared)
        except UnexpectedInput as err:
            logger.debug("grammar rejected %s at %s:%s", source, err.line, err.column)
            raise GrammarError(
                _describe(err),
                SourceSpan(source=source, line=_position(err.line), column=_position(err.column)),
                context=_context(err, prepared),
            ) from err


def _position(value: object) -> int:
    # lark reports -1 or "?" when the failure has no position (e.g. EOF)
    if isinstance(value, int) and value > 0:
        return value
    return 1


def _context(err: UnexpectedInput, text: str) -> str:
    if not isinstance(err.pos_in_stream, int) or err.pos_in_stream < 0:
        return ""
    return err.get_context(text)


def _describe(err: UnexpectedInput) -> str:
    if isinstance(err, UnexpectedCharacters):
        return f"unexpected character {err.char!r}"
    if isinstance(err, UnexpectedEOF):
        return "unexpected end of input"
    if isinstance(err, UnexpectedToken):
        if err.token.type == "$END":
            return "unexpected end of input"
        expected = ", ".join(sorted(err.expected))
        return f"unexpected {err.token.type} {str(err.token)!r}, expected one of: {expected}"
    return "unable to parse grammar from invalid contents"
