from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

from lark import Tree

from .binding import compile_binding
from .config import ParserSettings
from .definition import compile_unbind
from .errors import ANONYMOUS_SOURCE, GrammarContractError, MainSectionError, ReadingConfigError
from .grammar import Grammar, SwhkdGrammar
from .imports import ImportResolver
from .ir import Binding, Definition, Mode, ParseResult
from .mode import compile_mode


logger = logging.getLogger(__name__)


class SwhkdParser:
    """Compile hotkey config text (or a config file) into a ParseResult."""

    def __init__(
        self,
        *,
        settings: Optional[ParserSettings] = None,
        grammar: Optional[Grammar] = None,
    ) -> None:
        self.settings = settings or ParserSettings()
        self.grammar = grammar or SwhkdGrammar(comment_marker=self.settings.comment_marker)

    def parse(self, config: str | os.PathLike[str]) -> ParseResult:
        """`str` is config text, anything path-like is a config file."""

        if isinstance(config, str):
            return self.from_text(config)
        return self.from_path(config)

    def from_text(self, text: str) -> ParseResult:
        root = self.compile_source(text, source=ANONYMOUS_SOURCE, base_dir=Path.cwd())
        return ImportResolver(self._load_import).resolve(root)

    def from_path(self, path: str | os.PathLike[str]) -> ParseResult:
        path = _absolute(Path(path))
        root = self._load_import(str(path))
        return ImportResolver(self._load_import).resolve(root, root_path=str(path))

    def compile_source(self, text: str, *, source: str, base_dir: Path) -> ParseResult:
        """Compile one source on its own; `imports` holds the paths it includes."""

        tree = self.grammar.parse(text, source=source)
        contents = [c for c in tree.children if isinstance(c, Tree) and c.data == "content"]
        if len(contents) != 1:
            raise MainSectionError(source)

        bindings: List[Binding] = []
        unbinds: List[Definition] = []
        imports: List[str] = []
        modes: List[Mode] = []
        for decl in contents[0].children:
            if decl.data == "binding":
                bindings.extend(compile_binding(decl, source=source))
            elif decl.data == "unbind":
                unbinds.extend(compile_unbind(decl, source=source))
            elif decl.data == "mode":
                modes.append(compile_mode(decl, source=source))
            elif decl.data == "import":
                imports.extend(str(_absolute(Path(p).expanduser(), base_dir)) for p in decl.children)
            else:
                raise GrammarContractError(f"unexpected declaration {decl.data!r} in {source}")

        logger.debug(
            "compiled %s: %d binding(s), %d unbind(s), %d mode(s), %d include(s)",
            source,
            len(bindings),
            len(unbinds),
            len(modes),
            len(imports),
        )
        return ParseResult(bindings=bindings, unbinds=unbinds, imports=imports, modes=modes)

    def _load_import(self, path: str) -> ParseResult:
        try:
            text = Path(path).read_text(encoding=self.settings.encoding)
        except (OSError, UnicodeDecodeError) as err:
            raise ReadingConfigError(path, str(err)) from err
        return self.compile_source(text, source=path, base_dir=Path(path).parent)


def _absolute(path: Path, base_dir: Optional[Path] = None) -> Path:
    if not path.is_absolute():
        path = (base_dir or Path.cwd()) / path
    return path.resolve()
