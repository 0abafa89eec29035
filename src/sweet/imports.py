from __future__ import annotations

import logging
from typing import Callable, List, Optional, Set

from .ir import Binding, Definition, Mode, ParseResult


logger = logging.getLogger(__name__)


class ImportResolver:
    """Merge the files a config includes, each distinct path at most once.

    `load` compiles a single file without following its includes; the resolver
    drives the include graph itself with a worklist, always taking the
    smallest pending path so the merge order is reproducible. The seen set
    lives as long as the resolver, which makes cycles terminate.
    """

    def __init__(self, load: Callable[[str], ParseResult]) -> None:
        self._load = load
        self.seen: Set[str] = set()

    def resolve(self, root: ParseResult, *, root_path: Optional[str] = None) -> ParseResult:
        if root_path is not None:
            self.seen.add(root_path)

        bindings: List[Binding] = list(root.bindings)
        unbinds: List[Definition] = list(root.unbinds)
        modes: List[Mode] = list(root.modes)
        closure: Set[str] = set()
        pending: Set[str] = set(root.imports)

        while pending:
            path = min(pending)
            pending.remove(path)
            if path in self.seen:
                logger.debug("skipping already included %s", path)
                continue
            self.seen.add(path)
            closure.add(path)

            logger.debug("including %s", path)
            child = self._load(path)
            bindings.extend(child.bindings)
            unbinds.extend(child.unbinds)
            modes.extend(child.modes)
            pending.update(child.imports)

        return ParseResult(
            bindings=bindings,
            unbinds=unbinds,
            imports=sorted(closure),
            modes=modes,
        )
