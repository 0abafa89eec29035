from __future__ import annotations

from typing import Iterator, List

from lark import Token, Tree

from .errors import GrammarContractError
from .expand import Bounds, cartesian_product, node_text, product_size
from .ir import Definition, Key, KeyAttribute, Modifier


# Characters the grammar lets a backslash escape.
ESCAPABLE = frozenset("{},\\-+~@")

# `{_,shift}`: the `_` variant means "no modifier in this slot".
OMISSION = Modifier("_")


def unescape(text: str) -> str:
    if len(text) != 2 or text[0] != "\\":
        return text
    if text[1] not in ESCAPABLE:
        raise GrammarContractError(f"grammar produced an invalid escape sequence {text!r}")
    return text[1]


def parse_key(node: Tree) -> Key:
    """Build a Key from a `key_normal` / `key_in_shorthand` node."""

    attribute = KeyAttribute.NONE
    key = ""
    for child in node.children:
        if isinstance(child, Token):
            if child.type == "KEY":
                key = unescape(str(child))
        elif child.data == "send":
            attribute |= KeyAttribute.SEND
        elif child.data == "on_release":
            attribute |= KeyAttribute.ON_RELEASE
    return Key(key=key, attribute=attribute)


class DefinitionUncompiled:
    """Collects the modifier slots and keys of one trigger before expansion.

    Every entry of `modifiers` is one slot of alternatives; each concrete
    Definition picks one modifier from every slot.
    """

    def __init__(self, *, source: str) -> None:
        self.source = source
        self.modifiers: List[List[Modifier]] = []
        self.keys: List[Key] = []

    def ingest(self, node: Tree | Token) -> None:
        if not isinstance(node, Tree):
            return

        if node.data == "modifier":
            self.modifiers.append([Modifier(node_text(node))])
        elif node.data in ("modifier_shorthand", "modifier_omit_shorthand"):
            self.modifiers.append([_modifier_variant(child) for child in node.children])
        elif node.data == "shorthand":
            for item in node.children:
                if item.data == "key_in_shorthand":
                    self.keys.append(parse_key(item))
                elif item.data == "key_range":
                    self.keys.extend(
                        Key(key=key) for key in Bounds(item, source=self.source).expand_keys()
                    )
        elif node.data == "key_normal":
            self.keys.append(parse_key(node))

    def __len__(self) -> int:
        if not self.modifiers:
            return len(self.keys)
        return product_size(self.modifiers) * len(self.keys)

    def compile(self) -> Iterator[Definition]:
        if not self.modifiers:
            for key in self.keys:
                yield Definition(modifiers=[], key=key)
            return

        for *modifiers, key in cartesian_product([*self.modifiers, self.keys]):
            yield Definition(modifiers=[m for m in modifiers if m != OMISSION], key=key)


def _modifier_variant(child: Tree | Token) -> Modifier:
    if isinstance(child, Token):
        # OMISSION is the only bare token the grammar leaves in a modifier group
        return OMISSION
    return Modifier(node_text(child))


def compile_unbind(node: Tree, *, source: str) -> List[Definition]:
    """Definitions an `ignore ...` declaration removes."""

    uncompiled = DefinitionUncompiled(source=source)
    for child in node.children:
        uncompiled.ingest(child)
    return list(uncompiled.compile())
