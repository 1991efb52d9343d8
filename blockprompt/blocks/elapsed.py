# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""Elapsed — How long the previous command took."""

from __future__ import annotations

from datetime import timedelta
from typing import List, Literal

from pydantic import Field

from blockprompt.blocks.base import BlockProducer, prefixed
from blockprompt.core.context import PromptContext
from blockprompt.protocols.duration import Duration, format_duration
from blockprompt.protocols.schema import Fragment, Style, Symbol


class Elapsed(BlockProducer):
    """Shown only when the previous command ran for at least `threshold`."""

    type: Literal["elapsed"] = "elapsed"
    style: Style = Field(default_factory=Style)
    prefix: Symbol = Field(default_factory=lambda: Symbol(regular="\ufa1a", fallback="[took]"))
    threshold: Duration = Field(default=timedelta(seconds=2))

    def produce(self, context: PromptContext) -> List[Fragment]:
        elapsed = context.prev_cmd_duration
        if elapsed is None or elapsed < self.threshold:
            return []
        return prefixed(context.symbol_str(self.prefix), format_duration(elapsed), self.style)
