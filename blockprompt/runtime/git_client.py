# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""
Git Client — Repository discovery and HEAD lookup via the git CLI.

discover_repository() distinguishes three outcomes:
  found            -> GitRepository
  not a repository -> None (also: missing working dir, missing git binary)
  anything else    -> RepositoryError

git runs in a child process. When prompt generation times out, the worker
thread waiting on that child is abandoned and dies with the interpreter, but
the child does not: it runs until git finishes on its own. The default
timeout is kept below the default generation deadline, so a hung git call is
killed by subprocess.run while the worker is still waiting on it.
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from blockprompt.core.errors import RepositoryError

logger = logging.getLogger("blockprompt.git")

_NOT_A_REPOSITORY = "not a git repository"


@dataclass(frozen=True)
class GitRepository:
    """A discovered repository. work_tree is None for bare repositories."""

    git_dir: Path
    work_tree: Optional[Path]
    bare: bool = False
    git: str = "git"
    timeout: float = 0.8

    def head_name(self) -> Optional[str]:
        """
        Branch name HEAD points to, or the abbreviated commit when detached.

        An unborn branch still reports its name. Returns None only when HEAD
        is detached and cannot be resolved.
        """
        result = _run_git(
            [self.git, "symbolic-ref", "--short", "-q", "HEAD"],
            cwd=self.git_dir, timeout=self.timeout,
        )
        if result.returncode == 0:
            return result.stdout.strip() or None
        if result.returncode != 1:
            raise RepositoryError(_describe(result))

        # Detached HEAD
        result = _run_git(
            [self.git, "rev-parse", "--short", "HEAD"],
            cwd=self.git_dir, timeout=self.timeout,
        )
        if result.returncode != 0:
            logger.debug("Detached HEAD could not be resolved in %s", self.git_dir)
            return None
        return result.stdout.strip() or None

    def relative_path(self, path: Path) -> Optional[Path]:
        """path relative to the work tree root, None when outside or bare."""
        if self.bare or self.work_tree is None:
            return None
        for candidate in (path, path.resolve()):
            try:
                return candidate.relative_to(self.work_tree)
            except ValueError:
                continue
        return None


def discover_repository(
    path: Path,
    git: str = "git",
    timeout: float = 0.8,
) -> Optional[GitRepository]:
    """Find the repository containing path (searching parent directories)."""
    if not path.is_dir():
        return None

    try:
        result = _run_git(
            [git, "rev-parse", "--is-bare-repository", "--is-inside-work-tree", "--absolute-git-dir"],
            cwd=path, timeout=timeout,
        )
    except FileNotFoundError:
        logger.debug("git executable %r not found, treating %s as outside any repository", git, path)
        return None

    if result.returncode != 0:
        if result.returncode == 128 and _NOT_A_REPOSITORY in result.stderr.lower():
            return None
        raise RepositoryError(_describe(result))

    lines = result.stdout.splitlines()
    if len(lines) < 3:
        raise RepositoryError(f"unexpected git rev-parse output: {result.stdout!r}")
    bare = lines[0].strip() == "true"
    inside_work_tree = lines[1].strip() == "true"
    git_dir = Path(lines[2].strip())

    work_tree = None
    if not bare and inside_work_tree:
        top = _run_git([git, "rev-parse", "--show-toplevel"], cwd=path, timeout=timeout)
        if top.returncode != 0:
            raise RepositoryError(_describe(top))
        work_tree = Path(top.stdout.strip())

    logger.debug("Discovered git repository %s (bare=%s)", git_dir, bare)
    return GitRepository(git_dir=git_dir, work_tree=work_tree, bare=bare, git=git, timeout=timeout)


def _run_git(args: List[str], cwd: Path, timeout: float) -> subprocess.CompletedProcess:
    env = dict(os.environ, LC_ALL="C", GIT_OPTIONAL_LOCKS="0")
    try:
        return subprocess.run(
            args,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout,
            env=env,
        )
    except subprocess.TimeoutExpired as e:
        raise RepositoryError(f"{' '.join(args)} timed out after {timeout}s") from e
    except FileNotFoundError:
        raise
    except OSError as e:
        raise RepositoryError(f"{' '.join(args)} failed: {e}") from e


def _describe(result: subprocess.CompletedProcess) -> str:
    stderr = (result.stderr or "").strip()
    return f"git exited with status {result.returncode}: {stderr}" if stderr else (
        f"git exited with status {result.returncode}"
    )
