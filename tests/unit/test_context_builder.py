# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.
"""Unit tests for PromptContext and build_context."""

import threading
import time
from datetime import timedelta
from pathlib import Path

import pytest

from blockprompt.core.config import PromptSettings
from blockprompt.core.context import PromptContext, build_context
from blockprompt.core.errors import RepositoryError
from blockprompt.protocols.schema import Symbol


class TestRepoMemoization:
    def test_discovered_once(self, make_context):
        calls = []
        sentinel = object()

        def discoverer(path):
            calls.append(path)
            return sentinel

        ctx = make_context(repo_discoverer=discoverer)
        assert ctx.repo() is sentinel
        assert ctx.repo() is sentinel
        assert calls == [Path("/home/u/proj")]

    def test_not_a_repository_is_cached(self, make_context):
        calls = []

        def discoverer(path):
            calls.append(path)
            return None

        ctx = make_context(repo_discoverer=discoverer)
        assert ctx.repo() is None
        assert ctx.repo() is None
        assert len(calls) == 1

    def test_no_working_dir_means_no_repo(self, make_context):
        def discoverer(path):
            raise AssertionError("must not be called")

        assert make_context(working_dir=None, repo_discoverer=discoverer).repo() is None

    def test_error_is_cached_and_reraised(self, make_context):
        attempts = []

        def discoverer(path):
            attempts.append(path)
            raise RepositoryError("corrupt index")

        ctx = make_context(repo_discoverer=discoverer)
        with pytest.raises(RepositoryError) as first:
            ctx.repo()
        with pytest.raises(RepositoryError) as second:
            ctx.repo()
        with pytest.raises(RepositoryError):
            ctx.repo()
        assert second.value is first.value
        assert len(attempts) == 1

    def test_concurrent_first_access(self, make_context):
        calls = []
        results = []
        start = threading.Barrier(8)

        def discoverer(path):
            calls.append(path)
            time.sleep(0.05)
            return "repo"

        ctx = make_context(repo_discoverer=discoverer)

        def reader():
            start.wait()
            results.append(ctx.repo())

        threads = [threading.Thread(target=reader) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(calls) == 1
        assert results == ["repo"] * 8


class TestPromptContext:
    def test_symbol_str(self, make_context):
        sym = Symbol(regular="→", fallback=">")
        assert make_context(regular_symbols=True).symbol_str(sym) == "→"
        assert make_context(regular_symbols=False).symbol_str(sym) == ">"

    def test_defaults(self):
        ctx = PromptContext()
        assert ctx.working_dir is None
        assert ctx.prev_exit_code == 0
        assert ctx.prev_cmd_duration is None
        assert ctx.regular_symbols is True
        assert ctx.alternative_prompt is False


class TestBuildContext:
    def _settings(self, **kwargs):
        params = {"ALTERNATIVE_PROMPT": None, "TERM": "xterm-256color"}
        params.update(kwargs)
        return PromptSettings(**params)

    def test_uses_given_values(self, tmp_path):
        ctx = build_context(
            working_dir=tmp_path,
            prev_exit_code=3,
            prev_cmd_duration=timedelta(seconds=4),
            symbol_fallback=True,
            settings=self._settings(),
        )
        assert ctx.working_dir == tmp_path
        assert ctx.prev_exit_code == 3
        assert ctx.prev_cmd_duration == timedelta(seconds=4)
        assert ctx.regular_symbols is False
        assert ctx.alternative_prompt is False

    def test_defaults_to_current_directory(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        ctx = build_context(settings=self._settings())
        assert ctx.working_dir.resolve() == tmp_path.resolve()

    def test_forced_alternative(self, tmp_path):
        ctx = build_context(working_dir=tmp_path, force_alternative_prompt=True, settings=self._settings())
        assert ctx.alternative_prompt is True

    def test_alternative_from_term(self, tmp_path):
        ctx = build_context(working_dir=tmp_path, settings=self._settings(TERM="linux"))
        assert ctx.alternative_prompt is True

    def test_alternative_from_env_flag(self, tmp_path):
        ctx = build_context(working_dir=tmp_path, settings=self._settings(ALTERNATIVE_PROMPT="1"))
        assert ctx.alternative_prompt is True

    def test_outside_repository(self, tmp_path):
        ctx = build_context(working_dir=tmp_path, settings=self._settings(GIT_EXECUTABLE="definitely-not-git"))
        assert ctx.repo() is None
