# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""Exit Code — Exit status of the previous command, when it failed."""

from __future__ import annotations

from typing import List, Literal

from pydantic import Field

from blockprompt.blocks.base import BlockProducer, prefixed
from blockprompt.core.context import PromptContext
from blockprompt.protocols.schema import Fragment, Style


class ExitCode(BlockProducer):
    type: Literal["exit_code"] = "exit_code"
    style: Style = Field(default_factory=Style)
    prefix: str = "\uf071"

    def produce(self, context: PromptContext) -> List[Fragment]:
        code = context.prev_exit_code
        if code == 0:
            return []
        return prefixed(self.prefix, str(code), self.style)
