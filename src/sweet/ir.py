from __future__ import annotations

from enum import IntFlag
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, GetCoreSchemaHandler
from pydantic_core import core_schema


class KeyAttribute(IntFlag):
    """How a key takes part in its trigger; SEND and ON_RELEASE may combine."""

    NONE = 0
    SEND = 1
    ON_RELEASE = 2


class Modifier(str):
    """Modifier token, kept exactly as written in the config."""

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(cls, core_schema.str_schema())

    def __repr__(self) -> str:
        return f"Modifier({str.__repr__(self)})"


class Key(BaseModel):
    """A concrete key plus its attribute flags."""

    model_config = ConfigDict(frozen=True)

    key: str
    attribute: KeyAttribute = KeyAttribute.NONE

    def __repr__(self) -> str:
        return f"Key(key={self.key!r}, attribute={self.attribute.name or 'NONE'})"


class Definition(BaseModel):
    """One concrete trigger: ordered modifiers + a key."""

    model_config = ConfigDict(frozen=True)

    modifiers: List[Modifier] = Field(default_factory=list)
    key: Key

    def __str__(self) -> str:
        parts = [repr(m) for m in self.modifiers] + [repr(self.key)]
        return "[" + ", ".join(parts) + "]"


class Binding(BaseModel):
    """Trigger -> shell command."""

    model_config = ConfigDict(frozen=True)

    definition: Definition
    command: str

    def __str__(self) -> str:
        return f"Binding {self.definition} → {self.command}"


class Mode(BaseModel):
    """Named group of bindings; `oneoff` exits after one binding fires,
    `swallow` keeps the triggering keypress from other consumers."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    oneoff: bool = False
    swallow: bool = False
    bindings: List[Binding] = Field(default_factory=list)
    unbinds: List[Definition] = Field(default_factory=list)


class ParseResult(BaseModel):
    """Everything a config (and the files it includes) compiles to.

    `imports` is the sorted, deduplicated closure of every resolved include
    path.
    """

    model_config = ConfigDict(frozen=True)

    bindings: List[Binding] = Field(default_factory=list)
    unbinds: List[Definition] = Field(default_factory=list)
    imports: List[str] = Field(default_factory=list)
    modes: List[Mode] = Field(default_factory=list)
