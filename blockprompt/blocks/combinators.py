# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""
Combinators — Producers built from other producers.

  sequence   concatenation, in order
  or         first child with a non-empty result (later children not run)
  separated  separator between consecutive non-empty child results
  styled     default style overlaid on every fragment of one child

Children are any member of the Producer union, defined at the bottom of
this module because it has to include the combinators themselves.
"""

from __future__ import annotations

from typing import Annotated, List, Literal, Union

from pydantic import Field

from blockprompt.blocks.base import BlockProducer
from blockprompt.blocks.elapsed import Elapsed
from blockprompt.blocks.exit_code import ExitCode
from blockprompt.blocks.exit_status import ExitStatusSymbol
from blockprompt.blocks.git import GitHead, GitPath
from blockprompt.blocks.identity import Hostname, Username
from blockprompt.blocks.pwd import WorkingDirectory
from blockprompt.blocks.text import Newline, Space, Text
from blockprompt.core.context import PromptContext
from blockprompt.protocols.schema import Fragment, Style


class Sequence(BlockProducer):
    type: Literal["sequence"] = "sequence"
    producers: List[Producer] = Field(default_factory=list)

    def produce(self, context: PromptContext) -> List[Fragment]:
        fragments: List[Fragment] = []
        for producer in self.producers:
            fragments.extend(producer.produce(context))
        return fragments


class Or(BlockProducer):
    type: Literal["or"] = "or"
    producers: List[Producer] = Field(default_factory=list)

    def produce(self, context: PromptContext) -> List[Fragment]:
        for producer in self.producers:
            fragments = producer.produce(context)
            if fragments:
                return fragments
        return []


class Separated(BlockProducer):
    type: Literal["separated"] = "separated"
    producers: List[Producer] = Field(default_factory=list)
    separator: str = " | "
    separator_style: Style = Field(default_factory=Style)

    def produce(self, context: PromptContext) -> List[Fragment]:
        fragments: List[Fragment] = []
        for producer in self.producers:
            produced = producer.produce(context)
            if not produced:
                continue
            if fragments:
                fragments.append(Fragment(self.separator, self.separator_style))
            fragments.extend(produced)
        return fragments


class Styled(BlockProducer):
    type: Literal["styled"] = "styled"
    producer: Producer
    style: Style = Field(default_factory=Style)

    def produce(self, context: PromptContext) -> List[Fragment]:
        return [fragment.overlay(self.style) for fragment in self.producer.produce(context)]


Producer = Annotated[
    Union[
        Elapsed,
        ExitCode,
        ExitStatusSymbol,
        GitHead,
        GitPath,
        Hostname,
        Newline,
        Or,
        Separated,
        Sequence,
        Space,
        Styled,
        Text,
        Username,
        WorkingDirectory,
    ],
    Field(discriminator="type"),
]

Sequence.model_rebuild()
Or.model_rebuild()
Separated.model_rebuild()
Styled.model_rebuild()
