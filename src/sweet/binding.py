from __future__ import annotations

import logging
from typing import List

from lark import Tree

from .command import CommandUncompiled
from .definition import DefinitionUncompiled
from .errors import CardinalityError, SourceSpan
from .ir import Binding


logger = logging.getLogger(__name__)


def compile_binding(node: Tree, *, source: str) -> List[Binding]:
    """Expand one binding declaration into concrete Bindings.

    Trigger variants and command variants are paired by position, so
    `{a,b} + x` bound to `cmd-{1,2}` yields `(a, cmd-1)` and `(b, cmd-2)`.
    Both sides must expand to the same number of variants.
    """

    definitions = DefinitionUncompiled(source=source)
    commands = CommandUncompiled(source=source)
    for child in node.children:
        if isinstance(child, Tree) and child.data == "command":
            commands.ingest(child)
        else:
            definitions.ingest(child)

    bind_len = len(definitions)
    command_len = len(commands)
    if bind_len != command_len:
        raise CardinalityError(bind_len, command_len, SourceSpan.from_meta(node.meta, source))

    bindings = [
        Binding(definition=definition, command=command)
        for definition, command in zip(definitions.compile(), commands.compile())
    ]
    logger.debug("%s:%s expanded to %d binding(s)", source, node.meta.line, len(bindings))
    return bindings
