# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.
"""Unit tests for the deadline-bounded generation controller."""

import threading
import time
from datetime import timedelta

import pytest

from blockprompt.blocks.combinators import Sequence
from blockprompt.blocks.exit_code import ExitCode
from blockprompt.blocks.git import GitHead
from blockprompt.blocks.text import Text
from blockprompt.core.errors import (
    GenerationCrashed,
    GenerationError,
    GenerationFailed,
    GenerationTimedOut,
    RepositoryError,
)
from blockprompt.protocols.schema import Fragment
from blockprompt.resilience.deadline import generate


def _slow_context(make_context, seconds, release=None):
    def discoverer(path):
        if release is not None:
            release.wait(seconds)
        else:
            time.sleep(seconds)
        return None

    return make_context(repo_discoverer=discoverer)


class TestGenerate:
    def test_success(self, make_context):
        producer = Sequence(producers=[Text(contents="a"), ExitCode(prefix="")])
        fragments = generate(producer, make_context(prev_exit_code=2), timedelta(seconds=1))
        assert fragments == [Fragment("a"), Fragment(""), Fragment("2")]

    def test_accepts_float_deadline(self, make_context):
        assert generate(Text(contents="a"), make_context(), 1.0) == [Fragment("a")]

    def test_timeout_is_bounded(self, make_context):
        release = threading.Event()
        ctx = _slow_context(make_context, 5.0, release)
        t0 = time.monotonic()
        try:
            with pytest.raises(GenerationTimedOut):
                generate(GitHead(), ctx, timedelta(milliseconds=100))
        finally:
            release.set()
        assert time.monotonic() - t0 < 1.0

    def test_zero_deadline_times_out_slow_producer(self, make_context):
        release = threading.Event()
        ctx = _slow_context(make_context, 5.0, release)
        try:
            with pytest.raises(GenerationTimedOut):
                generate(GitHead(), ctx, 0)
        finally:
            release.set()

    def test_crash_is_distinct_from_timeout(self, make_context):
        def discoverer(path):
            raise ZeroDivisionError("boom")

        ctx = make_context(repo_discoverer=discoverer)
        with pytest.raises(GenerationCrashed) as exc_info:
            generate(GitHead(), ctx, timedelta(seconds=1))
        assert isinstance(exc_info.value.__cause__, ZeroDivisionError)
        assert not isinstance(exc_info.value, GenerationTimedOut)

    def test_non_producer_crashes(self, make_context):
        with pytest.raises(GenerationCrashed) as exc_info:
            generate("not a producer", make_context(), 1.0)
        assert isinstance(exc_info.value.__cause__, TypeError)

    def test_collaborator_failure(self, make_context):
        def discoverer(path):
            raise RepositoryError("permission denied")

        ctx = make_context(repo_discoverer=discoverer)
        with pytest.raises(GenerationFailed) as exc_info:
            generate(GitHead(), ctx, timedelta(seconds=1))
        assert isinstance(exc_info.value.__cause__, RepositoryError)

    def test_all_failures_are_generation_errors(self):
        assert issubclass(GenerationTimedOut, GenerationError)
        assert issubclass(GenerationCrashed, GenerationError)
        assert issubclass(GenerationFailed, GenerationError)

    def test_abandoned_worker_result_is_discarded(self, make_context):
        release = threading.Event()
        ctx = _slow_context(make_context, 5.0, release)
        with pytest.raises(GenerationTimedOut):
            generate(GitHead(), ctx, 0.05)
        release.set()
        # The same context is still usable once the worker finishes.
        assert generate(Text(contents="ok"), ctx, 1.0) == [Fragment("ok")]
