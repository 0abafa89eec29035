from __future__ import annotations

from typing import List

from lark import Tree

from .binding import compile_binding
from .definition import compile_unbind
from .expand import node_text
from .ir import Binding, Definition, Mode


def compile_mode(node: Tree, *, source: str) -> Mode:
    name = ""
    oneoff = False
    swallow = False
    bindings: List[Binding] = []
    unbinds: List[Definition] = []

    for component in node.children:
        if component.data == "modename":
            name = node_text(component)
        elif component.data == "binding":
            bindings.extend(compile_binding(component, source=source))
        elif component.data == "unbind":
            unbinds.extend(compile_unbind(component, source=source))
        elif component.data == "oneoff":
            oneoff = True
        elif component.data == "swallow":
            swallow = True

    return Mode(name=name, oneoff=oneoff, swallow=swallow, bindings=bindings, unbinds=unbinds)
