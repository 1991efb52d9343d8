# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""
Color — sRGB triple with an optional display name.

Accepted spellings:
  - "#rrggbb" hex literal (case-insensitive)
  - a CSS color name from the fixed palette ("crimson", "DodgerBlue", ...)

Anything else is rejected. Equality and hashing only look at the RGB value;
the name is retained so a configuration dumps back the way it was written.
"""

from __future__ import annotations

import re
from typing import Any, Optional, Tuple

from pydantic import BaseModel, Field, model_serializer, model_validator

from blockprompt.protocols.palette import lookup

_HEX_RE = re.compile(r"#([0-9a-fA-F]{6})")


class InvalidColorError(ValueError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(
            f"Invalid color {value!r}: expected a hexadecimal sRGB color "
            f"(e.g. \"#ff00fe\") or a CSS color name"
        )


class Color(BaseModel):
    """An RGB color. Immutable."""

    r: int = Field(..., ge=0, le=255)
    g: int = Field(..., ge=0, le=255)
    b: int = Field(..., ge=0, le=255)
    name: Optional[str] = Field(default=None, description="Display name, not part of equality")

    model_config = {"frozen": True}

    @classmethod
    def parse(cls, text: str) -> Color:
        """Parse a hex literal or palette name, raising InvalidColorError."""
        return cls(**_parse_fields(text))

    @classmethod
    def rgb(cls, r: int, g: int, b: int) -> Color:
        return cls(r=r, g=g, b=b)

    @property
    def as_rgb(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    # ── Validators ──────────────────────────────────────────────

    @model_validator(mode="before")
    @classmethod
    def accept_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return _parse_fields(data)
        return data

    @model_serializer
    def to_string(self) -> str:
        return self.name if self.name else self.hex

    # ── Identity ────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return self.as_rgb == other.as_rgb

    def __hash__(self) -> int:
        return hash(self.as_rgb)

    def __str__(self) -> str:
        return self.to_string()


def _parse_fields(text: str) -> dict:
    match = _HEX_RE.fullmatch(text)
    if match:
        n = int(match.group(1), 16)
        return {"r": (n >> 16) & 0xFF, "g": (n >> 8) & 0xFF, "b": n & 0xFF}
    rgb = lookup(text)
    if rgb is None:
        raise InvalidColorError(text)
    r, g, b = rgb
    return {"r": r, "g": g, "b": b, "name": text}


# Colors used by the built-in prompts
CRIMSON = Color.parse("crimson")
DODGERBLUE = Color.parse("dodgerblue")
TEAL = Color.parse("teal")
BLACK = Color.parse("black")
