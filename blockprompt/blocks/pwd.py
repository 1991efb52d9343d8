# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""Working Directory — The current directory, home optionally shown as ~."""

from __future__ import annotations

from pathlib import Path
from typing import List, Literal, Optional

from pydantic import Field

from blockprompt.blocks.base import BlockProducer, prefixed
from blockprompt.core.context import PromptContext
from blockprompt.protocols.schema import Fragment, Style


class WorkingDirectory(BlockProducer):
    type: Literal["working_directory"] = "working_directory"
    style: Style = Field(default_factory=Style)
    home_as_tilde: bool = True
    prefix: str = "\uf07c"

    def produce(self, context: PromptContext) -> List[Fragment]:
        pwd = context.working_dir
        if pwd is None:
            return []
        if self.home_as_tilde:
            text = tilde_path(pwd, context.home_dir)
        else:
            text = str(pwd)
        return prefixed(self.prefix, text, self.style)


def tilde_path(path: Path, home: Optional[Path]) -> str:
    """Replace a leading home directory with ~."""
    if home is None:
        return str(path)
    try:
        rest = path.relative_to(home)
    except ValueError:
        return str(path)
    if rest == Path("."):
        return "~"
    return str(Path("~") / rest)
