# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""
Prompt Context — Read-only snapshot of everything producers may look at.

Built once per invocation by build_context() and passed by reference to the
whole producer tree, including the worker thread of the generation
controller. The only mutable piece is the memoized git repository, which is
computed at most once under a lock.
"""

from __future__ import annotations

import getpass
import logging
import os
import socket
import threading
from datetime import timedelta
from pathlib import Path
from typing import Callable, Optional

from blockprompt.core.config import PromptSettings, get_settings
from blockprompt.protocols.schema import Symbol
from blockprompt.runtime.git_client import GitRepository, discover_repository

logger = logging.getLogger("blockprompt.context")

RepoDiscoverer = Callable[[Path], Optional[GitRepository]]

_UNSET = object()


class PromptContext:
    """
    Ambient facts for one prompt generation.

    Producers only read from it. Attributes are set in __init__ and never
    reassigned afterwards.
    """

    def __init__(
        self,
        working_dir: Optional[Path] = None,
        prev_exit_code: int = 0,
        prev_cmd_duration: Optional[timedelta] = None,
        regular_symbols: bool = True,
        alternative_prompt: bool = False,
        home_dir: Optional[Path] = None,
        username: Optional[str] = None,
        hostname: Optional[str] = None,
        repo_discoverer: Optional[RepoDiscoverer] = None,
    ) -> None:
        self.working_dir = working_dir
        self.prev_exit_code = prev_exit_code
        self.prev_cmd_duration = prev_cmd_duration
        self.regular_symbols = regular_symbols
        self.alternative_prompt = alternative_prompt
        self.home_dir = home_dir
        self.username = username
        self.hostname = hostname
        self._repo_discoverer = repo_discoverer or discover_repository
        self._repo_lock = threading.Lock()
        self._repo = _UNSET
        self._repo_error: Optional[Exception] = None

    def repo(self) -> Optional[GitRepository]:
        """
        Repository containing the working directory, discovered on first use.

        Discovery runs at most once per context. "Not a repository" is cached
        as None; a failed discovery is cached too and the same error is raised
        again on every later call.
        """
        repo = self._repo
        if repo is not _UNSET:
            return repo
        with self._repo_lock:
            if self._repo_error is not None:
                raise self._repo_error
            if self._repo is _UNSET:
                if self.working_dir is None:
                    self._repo = None
                else:
                    try:
                        self._repo = self._repo_discoverer(self.working_dir)
                    except Exception as e:
                        self._repo_error = e
                        raise
            return self._repo

    def symbol_str(self, symbol: Symbol) -> str:
        return symbol.as_str(self.regular_symbols)

    def __repr__(self) -> str:
        return (
            f"PromptContext(working_dir={self.working_dir!r}, "
            f"prev_exit_code={self.prev_exit_code!r}, "
            f"prev_cmd_duration={self.prev_cmd_duration!r})"
        )


def build_context(
    working_dir: Optional[Path] = None,
    prev_exit_code: int = 0,
    prev_cmd_duration: Optional[timedelta] = None,
    symbol_fallback: bool = False,
    force_alternative_prompt: bool = False,
    settings: Optional[PromptSettings] = None,
) -> PromptContext:
    """Gather ambient facts from the process environment."""
    settings = settings or get_settings()

    if working_dir is None:
        try:
            working_dir = Path(os.getcwd())
        except OSError as e:
            logger.warning("Working directory unavailable: %s", e)

    alternative = force_alternative_prompt or settings.alternative_prompt_requested

    git = settings.GIT_EXECUTABLE
    timeout = settings.GIT_TIMEOUT

    def discoverer(path: Path) -> Optional[GitRepository]:
        return discover_repository(path, git=git, timeout=timeout)

    return PromptContext(
        working_dir=working_dir,
        prev_exit_code=prev_exit_code,
        prev_cmd_duration=prev_cmd_duration,
        regular_symbols=not symbol_fallback,
        alternative_prompt=alternative,
        home_dir=_home_dir(),
        username=_username(),
        hostname=_hostname(),
        repo_discoverer=discoverer,
    )


def _home_dir() -> Optional[Path]:
    try:
        return Path.home()
    except (KeyError, RuntimeError):
        return None


def _username() -> Optional[str]:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return None


def _hostname() -> Optional[str]:
    try:
        return socket.gethostname() or None
    except OSError:
        return None
