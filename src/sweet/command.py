from __future__ import annotations

from typing import Iterator, List

from lark import Tree

from .expand import Bounds, cartesian_product, node_text, product_size


class CommandUncompiled:
    """Collects the fragments of one command; each fragment is a list of variants."""

    def __init__(self, *, source: str) -> None:
        self.source = source
        self.fragments: List[List[str]] = []

    def ingest(self, node: Tree) -> None:
        for fragment in node.children:
            if fragment.data == "command_standalone":
                self.fragments.append([node_text(fragment)])
            elif fragment.data == "command_shorthand":
                self.fragments.append(self._shorthand_variants(fragment))

    def _shorthand_variants(self, node: Tree) -> List[str]:
        variants: List[str] = []
        for component in node.children:
            if component.data == "command_component":
                variants.append(node_text(component))
            elif component.data == "range":
                variants.extend(Bounds(component, source=self.source).expand_commands())
        return variants

    def __len__(self) -> int:
        return product_size(self.fragments)

    def compile(self) -> Iterator[str]:
        for parts in cartesian_product(self.fragments):
            yield "".join(parts)
