# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""Exit Status Symbol — Fixed text whose style depends on the previous exit code."""

from __future__ import annotations

from typing import List, Literal

from pydantic import Field

from blockprompt.blocks.base import BlockProducer
from blockprompt.core.context import PromptContext
from blockprompt.protocols.schema import Fragment, Style


class ExitStatusSymbol(BlockProducer):
    type: Literal["exit_status_symbol"] = "exit_status_symbol"
    contents: str
    style: Style = Field(default_factory=Style, description="Style after a successful command")
    error_style: Style = Field(default_factory=Style, description="Style after a failed command")

    def produce(self, context: PromptContext) -> List[Fragment]:
        if not self.contents:
            return []
        style = self.style if context.prev_exit_code == 0 else self.error_style
        return [Fragment(self.contents, style)]
