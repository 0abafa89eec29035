from __future__ import annotations

from pathlib import Path
import tomllib

from pydantic import BaseModel, ConfigDict, field_validator


class ParserSettings(BaseModel):
    """Knobs applied to the root config and every file it includes."""

    model_config = ConfigDict(frozen=True)

    comment_marker: str = "#"
    encoding: str = "utf-8"

    @field_validator("comment_marker")
    @classmethod
    def _marker_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("comment marker must not be blank")
        return value

    @classmethod
    def from_toml(cls, path: str | Path) -> "ParserSettings":
        """Load settings from the `[parser]` table of a TOML file."""

        path = Path(path)
        data = tomllib.loads(path.read_text(encoding="utf-8"))
        return cls.model_validate(data.get("parser", {}))
