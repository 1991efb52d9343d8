# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""
Renderer — Fragments to 24-bit ANSI text for a shell prompt.

Escape sequences are only written when the style actually changes between
adjacent fragments. A channel that is None is the terminal default.

zsh needs non-printing sequences wrapped in %{...%} so it can compute the
prompt width, and a literal % written as %%.
"""

from __future__ import annotations

from typing import Iterable, List, Literal, Optional

from blockprompt.protocols.color import Color
from blockprompt.protocols.schema import Fragment, Style

Shell = Literal["generic", "zsh"]

RESET = "\x1b[0m"


def _sgr(style: Style) -> str:
    codes: List[str] = []
    if style.foreground is not None:
        codes.append(_channel(38, style.foreground))
    if style.background is not None:
        codes.append(_channel(48, style.background))
    if not codes:
        return ""
    return "\x1b[" + ";".join(codes) + "m"


def _channel(base: int, color: Color) -> str:
    r, g, b = color.as_rgb
    return f"{base};2;{r};{g};{b}"


def style_transition(previous: Style, current: Style) -> str:
    """Escape sequence that switches the terminal from previous to current."""
    if previous == current:
        return ""
    dropped = (
        (previous.foreground is not None and current.foreground is None)
        or (previous.background is not None and current.background is None)
    )
    if dropped:
        return RESET + _sgr(current)
    changed = Style(
        foreground=current.foreground if current.foreground != previous.foreground else None,
        background=current.background if current.background != previous.background else None,
    )
    return _sgr(changed)


def render(fragments: Iterable[Fragment], shell: Shell = "generic") -> str:
    """Render fragments for the given shell."""
    parts: List[str] = []
    previous = Style()
    for fragment in fragments:
        escape = style_transition(previous, fragment.style)
        if escape:
            parts.append(_wrap(escape, shell))
        parts.append(_escape_text(fragment.text, shell))
        previous = fragment.style
    if not previous.is_plain:
        parts.append(_wrap(RESET, shell))
    return "".join(parts)


def _wrap(escape: str, shell: Shell) -> str:
    if shell == "zsh":
        return "%{" + escape + "%}"
    return escape


def _escape_text(text: str, shell: Shell) -> str:
    if shell == "zsh":
        return text.replace("%", "%%")
    return text


def detect_shell(zsh: bool) -> Shell:
    return "zsh" if zsh else "generic"
