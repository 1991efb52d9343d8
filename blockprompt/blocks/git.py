# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""
Git blocks — Current branch and repository-relative path.

Both touch context.repo(), which runs repository discovery once per
context. A RepositoryError from discovery or from reading HEAD propagates.
"""

from __future__ import annotations

from typing import List, Literal

from pydantic import Field

from blockprompt.blocks.base import BlockProducer, prefixed
from blockprompt.core.context import PromptContext
from blockprompt.protocols.schema import Fragment, Style


class GitHead(BlockProducer):
    type: Literal["git_head"] = "git_head"
    style: Style = Field(default_factory=Style)
    prefix: str = "\ue725"

    def produce(self, context: PromptContext) -> List[Fragment]:
        repo = context.repo()
        if repo is None:
            return []
        name = repo.head_name()
        if name is None:
            return []
        return prefixed(self.prefix, name, self.style)


class GitPath(BlockProducer):
    """Working directory relative to the root of its repository's work tree."""

    type: Literal["git_path"] = "git_path"
    style: Style = Field(default_factory=Style)

    def produce(self, context: PromptContext) -> List[Fragment]:
        if context.working_dir is None:
            return []
        repo = context.repo()
        if repo is None:
            return []
        path = repo.relative_path(context.working_dir)
        if path is None:
            return []
        return [Fragment(str(path), self.style)]
