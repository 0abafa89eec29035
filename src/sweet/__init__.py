from __future__ import annotations

from .config import ParserSettings
from .errors import (
    CardinalityError,
    GrammarContractError,
    GrammarError,
    MainSectionError,
    ParseError,
    RangeBoundsError,
    ReadingConfigError,
    SourceSpan,
)
from .grammar import SwhkdGrammar
from .ir import Binding, Definition, Key, KeyAttribute, Mode, Modifier, ParseResult
from .parser import SwhkdParser

__all__ = [
    "Binding",
    "CardinalityError",
    "Definition",
    "GrammarContractError",
    "GrammarError",
    "Key",
    "KeyAttribute",
    "MainSectionError",
    "Mode",
    "Modifier",
    "ParseError",
    "ParseResult",
    "ParserSettings",
    "RangeBoundsError",
    "ReadingConfigError",
    "SourceSpan",
    "SwhkdGrammar",
    "SwhkdParser",
]
