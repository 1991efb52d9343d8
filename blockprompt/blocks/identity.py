# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""Identity — Current user and host name."""

from __future__ import annotations

from typing import List, Literal

from pydantic import Field

from blockprompt.blocks.base import BlockProducer, prefixed
from blockprompt.core.context import PromptContext
from blockprompt.protocols.schema import Fragment, Style


class Username(BlockProducer):
    type: Literal["username"] = "username"
    style: Style = Field(default_factory=Style)
    prefix: str = ""

    def produce(self, context: PromptContext) -> List[Fragment]:
        if not context.username:
            return []
        return prefixed(self.prefix, context.username, self.style)


class Hostname(BlockProducer):
    type: Literal["hostname"] = "hostname"
    style: Style = Field(default_factory=Style)
    prefix: str = ""

    def produce(self, context: PromptContext) -> List[Fragment]:
        if not context.hostname:
            return []
        return prefixed(self.prefix, context.hostname, self.style)
