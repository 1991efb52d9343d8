# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""
Shared test fixtures for all blockprompt tests.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import pytest

from blockprompt.core.context import PromptContext


@dataclass(frozen=True)
class FakeRepository:
    """Stands in for GitRepository without running git."""

    work_tree: Optional[Path]
    head: Optional[str] = "main"
    bare: bool = False

    def head_name(self) -> Optional[str]:
        return self.head

    def relative_path(self, path: Path) -> Optional[Path]:
        if self.bare or self.work_tree is None:
            return None
        try:
            return path.relative_to(self.work_tree)
        except ValueError:
            return None


@pytest.fixture
def no_repo():
    """Discoverer that never finds a repository."""
    return lambda path: None


@pytest.fixture
def make_context(no_repo):
    """Factory for PromptContext with deterministic identity and no git by default."""

    def _make(**overrides) -> PromptContext:
        params = {
            "working_dir": Path("/home/u/proj"),
            "prev_exit_code": 0,
            "prev_cmd_duration": None,
            "home_dir": Path("/home/u"),
            "username": "u",
            "hostname": "box",
            "repo_discoverer": no_repo,
        }
        params.update(overrides)
        return PromptContext(**params)

    return _make


@pytest.fixture
def repo_context(make_context):
    """Context inside a fake repository rooted at /home/u/proj."""

    def _make(head: Optional[str] = "main", working_dir: Path = Path("/home/u/proj/src"), **overrides):
        repo = FakeRepository(work_tree=Path("/home/u/proj"), head=head)
        return make_context(working_dir=working_dir, repo_discoverer=lambda path: repo, **overrides)

    return _make
