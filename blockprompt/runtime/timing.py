# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""
Timing State — Carried between shell hooks to measure command duration.

The shell keeps an opaque string and passes it back on every call:

    preexec:  blockprompt store --state "$S" --start-timer --prev-exit-code 0
    precmd:   blockprompt store --state "$S" --stop-timer --prev-exit-code $?

The string is URL-safe base64 of compact JSON. Timestamps come from
time.monotonic(), which is system-wide on the platforms the hooks target.
"""

from __future__ import annotations

import base64
import binascii
import time
from datetime import timedelta
from typing import Callable, Literal, Optional

from pydantic import BaseModel, Field, ValidationError

from blockprompt.core.errors import StateError

Clock = Callable[[], float]


class CmdDuration(BaseModel):
    """unknown, started_at(seconds) or elapsed(seconds)."""

    kind: Literal["unknown", "started_at", "elapsed"] = "unknown"
    seconds: Optional[float] = Field(default=None, ge=0)

    @classmethod
    def unknown(cls) -> CmdDuration:
        return cls()

    @classmethod
    def started_at(cls, seconds: float) -> CmdDuration:
        return cls(kind="started_at", seconds=seconds)

    @classmethod
    def elapsed(cls, seconds: float) -> CmdDuration:
        return cls(kind="elapsed", seconds=seconds)


class PromptState(BaseModel):
    prev_exit_code: int = 0
    prev_cmd_duration: CmdDuration = Field(default_factory=CmdDuration)

    def start_timer(self, clock: Clock = time.monotonic) -> PromptState:
        return self.model_copy(update={"prev_cmd_duration": CmdDuration.started_at(clock())})

    def stop_timer(self, clock: Clock = time.monotonic) -> PromptState:
        """Turn a running timer into an elapsed duration; anything else becomes unknown."""
        current = self.prev_cmd_duration
        if current.kind != "started_at" or current.seconds is None:
            return self.model_copy(update={"prev_cmd_duration": CmdDuration.unknown()})
        elapsed = max(clock() - current.seconds, 0.0)
        return self.model_copy(update={"prev_cmd_duration": CmdDuration.elapsed(elapsed)})

    def with_exit_code(self, code: int) -> PromptState:
        return self.model_copy(update={"prev_exit_code": code})

    def resolved_duration(self) -> Optional[timedelta]:
        """The previous command's duration, or None unless a timer was stopped."""
        current = self.prev_cmd_duration
        if current.kind == "elapsed" and current.seconds is not None:
            return timedelta(seconds=current.seconds)
        return None


def encode_state(state: PromptState) -> str:
    raw = state.model_dump_json(exclude_none=True).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii")


def decode_state(text: Optional[str]) -> PromptState:
    """Decode a state string; empty or missing means the default state."""
    text = (text or "").strip()
    if not text:
        return PromptState()
    try:
        raw = base64.urlsafe_b64decode(text.encode("ascii"))
    except (binascii.Error, UnicodeEncodeError, ValueError) as e:
        raise StateError("Failed to decode state") from e
    try:
        return PromptState.model_validate_json(raw)
    except ValidationError as e:
        raise StateError("Failed to parse state") from e
