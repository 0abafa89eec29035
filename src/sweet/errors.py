from __future__ import annotations

from pathlib import Path
from typing import Optional

from lark.tree import Meta
from pydantic import BaseModel, ConfigDict


ANONYMOUS_SOURCE = "<anonymous>"


class SourceSpan(BaseModel):
    """Location of a syntax node inside a config source."""

    model_config = ConfigDict(frozen=True)

    source: str = ANONYMOUS_SOURCE
    line: int
    column: int
    end_line: Optional[int] = None
    end_column: Optional[int] = None

    @classmethod
    def from_meta(cls, meta: Meta, source: str) -> "SourceSpan":
        return cls(
            source=source,
            line=meta.line,
            column=meta.column,
            end_line=meta.end_line,
            end_column=meta.end_column,
        )

    def __str__(self) -> str:
        return f"{self.source}:{self.line}:{self.column}"


class ParseError(Exception):
    """Base class for every user-facing config compilation failure."""


class LocatedError(ParseError):
    def __init__(self, message: str, span: SourceSpan) -> None:
        super().__init__(f"{span}: {message}")
        self.message = message
        self.span = span


class GrammarError(LocatedError):
    """Source text does not match the config grammar."""

    def __init__(self, message: str, span: SourceSpan, context: str = "") -> None:
        super().__init__(message, span)
        self.context = context

    def __str__(self) -> str:
        text = super().__str__()
        if self.context:
            return f"{text}\n{self.context.rstrip()}"
        return text


class MainSectionError(ParseError):
    def __init__(self, source: str = ANONYMOUS_SOURCE) -> None:
        super().__init__(f"{source}: hotkey config must contain one and only one main section")
        self.source = source


class CardinalityError(LocatedError):
    """A binding expands to a different number of triggers than commands."""

    def __init__(self, binding_variants: int, command_variants: int, span: SourceSpan) -> None:
        super().__init__(
            f"the number of possible binding variants {binding_variants} does not "
            f"equal the number of possible command variants {command_variants}.",
            span,
        )
        self.binding_variants = binding_variants
        self.command_variants = command_variants


class RangeBoundsError(LocatedError):
    """Range endpoints are unparsable, non-ASCII or not strictly ascending."""


class ReadingConfigError(ParseError):
    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(f"unable to read config file {str(path)!r}: {reason}")
        self.path = str(path)


class GrammarContractError(RuntimeError):
    """The grammar produced a tree the compiler was promised it never would.

    This is a defect in the grammar, not in the user's config, which is why it
    does not derive from ParseError.
    """
