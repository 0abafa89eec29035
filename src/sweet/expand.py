from __future__ import annotations

import itertools
import math
from typing import Iterator, List, Sequence, Tuple, TypeVar

from lark import Token, Tree

from .errors import RangeBoundsError, SourceSpan


T = TypeVar("T")


def cartesian_product(variants: Sequence[Sequence[T]]) -> Iterator[Tuple[T, ...]]:
    """Lazily yield one tuple per combination, first slot varying slowest."""

    return itertools.product(*variants)


def product_size(variants: Sequence[Sequence[object]]) -> int:
    """Number of tuples `cartesian_product(variants)` would yield."""

    return math.prod(len(v) for v in variants)


class Bounds:
    """An inclusive `lower-upper` range taken from a `key_range` or `range` node."""

    def __init__(self, node: Tree, *, source: str) -> None:
        self.span = SourceSpan.from_meta(node.meta, source)
        self.lower, self.upper = _endpoints(node, self.span)

    def expand_keys(self) -> List[str]:
        """Every character from lower to upper; both ends must be one ASCII char."""

        lower, upper = self._ascii_chars()
        return [chr(c) for c in range(ord(lower), ord(upper) + 1)]

    def expand_commands(self) -> List[str]:
        """Like `expand_keys`, but integer endpoints count numerically (`1-12`)."""

        if _is_number(self.lower) and _is_number(self.upper):
            lower, upper = int(self.lower), int(self.upper)
            if lower >= upper:
                raise RangeBoundsError(
                    f"range lower bound {lower} must be less than upper bound {upper}", self.span
                )
            return [str(n) for n in range(lower, upper + 1)]
        return self.expand_keys()

    def _ascii_chars(self) -> Tuple[str, str]:
        for bound in (self.lower, self.upper):
            if len(bound) != 1:
                raise RangeBoundsError(
                    f"range bound {bound!r} must be a single character", self.span
                )
            if not bound.isascii():
                raise RangeBoundsError(f"range bound {bound!r} is not ascii", self.span)
        if self.lower >= self.upper:
            raise RangeBoundsError(
                f"range lower bound {self.lower!r} must be less than upper bound {self.upper!r}",
                self.span,
            )
        return self.lower, self.upper


def _is_number(bound: str) -> bool:
    return bound.isascii() and bound.isdigit()


def _endpoints(node: Tree, span: SourceSpan) -> Tuple[str, str]:
    tokens = [child for child in node.children if isinstance(child, Token)]
    if len(tokens) == 2:
        return str(tokens[0]), str(tokens[1])
    if len(tokens) == 1:
        # command ranges arrive as a single `lower-upper` token
        lower, sep, upper = str(tokens[0]).partition("-")
        if sep and lower and upper:
            return lower, upper
    raise RangeBoundsError(f"unable to parse range bounds from {node_text(node)!r}", span)


def node_text(node: Tree) -> str:
    """Concatenated text of the named tokens kept under a node."""

    return "".join(str(t) for t in node.scan_values(lambda v: isinstance(v, Token)))
