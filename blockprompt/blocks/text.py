# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""Literal text blocks."""

from __future__ import annotations

from typing import List, Literal

from pydantic import Field

from blockprompt.blocks.base import BlockProducer
from blockprompt.core.context import PromptContext
from blockprompt.protocols.schema import Fragment, Style


class Text(BlockProducer):
    type: Literal["text"] = "text"
    contents: str
    style: Style = Field(default_factory=Style)

    def produce(self, context: PromptContext) -> List[Fragment]:
        if not self.contents:
            return []
        return [Fragment(self.contents, self.style)]


class Newline(BlockProducer):
    type: Literal["newline"] = "newline"

    def produce(self, context: PromptContext) -> List[Fragment]:
        return [Fragment("\n")]


class Space(BlockProducer):
    type: Literal["space"] = "space"

    def produce(self, context: PromptContext) -> List[Fragment]:
        return [Fragment(" ")]
