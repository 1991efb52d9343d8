# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""
blockprompt Protocol Schema — what producers emit.

A prompt is an ordered list of Fragments. Each Fragment carries its text and
a Style. A Style channel left as None inherits from an enclosing default;
the only way that default gets applied is Style.overlay(), typically via a
`styled` producer. Whatever is still None once generation finishes means
"terminal default" to the renderer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from blockprompt.protocols.color import Color


class Style(BaseModel):
    """Foreground/background pair; both optional."""

    foreground: Optional[Color] = Field(default=None, description="Text color")
    background: Optional[Color] = Field(default=None, description="Background color")

    model_config = {"frozen": True, "extra": "forbid"}

    @model_validator(mode="before")
    @classmethod
    def accept_bare_color(cls, data: Any) -> Any:
        """A bare color ("crimson") is shorthand for a foreground-only style."""
        if isinstance(data, (str, Color)):
            return {"foreground": data}
        return data

    @classmethod
    def fg(cls, color: Color | str) -> Style:
        return cls(foreground=color)

    def overlay(self, default: Style) -> Style:
        """Fill missing channels from default; channels already set win."""
        return Style(
            foreground=self.foreground if self.foreground is not None else default.foreground,
            background=self.background if self.background is not None else default.background,
        )

    @property
    def is_complete(self) -> bool:
        return self.foreground is not None and self.background is not None

    @property
    def is_plain(self) -> bool:
        return self.foreground is None and self.background is None

    def _key(self) -> tuple:
        return (
            self.foreground.as_rgb if self.foreground is not None else None,
            self.background.as_rgb if self.background is not None else None,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Style):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())


class Symbol(BaseModel):
    """Text with an optional fallback for terminals without fancy glyphs."""

    regular: str
    fallback: Optional[str] = None

    model_config = {"frozen": True, "extra": "forbid"}

    @model_validator(mode="before")
    @classmethod
    def accept_plain_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"regular": data}
        return data

    def as_str(self, regular: bool) -> str:
        if regular or self.fallback is None:
            return self.regular
        return self.fallback


@dataclass(frozen=True)
class Fragment:
    """One piece of styled prompt text."""

    text: str
    style: Style = field(default_factory=Style)

    def overlay(self, default: Style) -> Fragment:
        return Fragment(self.text, self.style.overlay(default))
