# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.
"""Unit tests for the timing state carried between shell hooks."""

import base64
from datetime import timedelta

import pytest

from blockprompt.core.errors import StateError
from blockprompt.runtime.timing import CmdDuration, PromptState, decode_state, encode_state


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestTimer:
    def test_start_then_stop(self):
        clock = FakeClock(100.0)
        state = PromptState().start_timer(clock)
        assert state.prev_cmd_duration == CmdDuration.started_at(100.0)
        clock.now = 103.5
        stopped = state.stop_timer(clock)
        assert stopped.prev_cmd_duration == CmdDuration.elapsed(3.5)
        assert stopped.resolved_duration() == timedelta(seconds=3.5)

    def test_stop_without_start_is_unknown(self):
        state = PromptState().stop_timer(FakeClock())
        assert state.prev_cmd_duration.kind == "unknown"
        assert state.resolved_duration() is None

    def test_stop_twice_is_unknown(self):
        clock = FakeClock(1.0)
        state = PromptState().start_timer(clock)
        clock.now = 2.0
        state = state.stop_timer(clock).stop_timer(clock)
        assert state.resolved_duration() is None

    def test_clock_going_backwards_clamps_to_zero(self):
        clock = FakeClock(50.0)
        state = PromptState().start_timer(clock)
        clock.now = 10.0
        assert state.stop_timer(clock).resolved_duration() == timedelta()

    def test_running_timer_has_no_duration(self):
        assert PromptState().start_timer(FakeClock()).resolved_duration() is None

    def test_with_exit_code(self):
        state = PromptState().with_exit_code(130)
        assert state.prev_exit_code == 130

    def test_state_is_not_mutated(self):
        original = PromptState()
        original.start_timer(FakeClock()).with_exit_code(1)
        assert original == PromptState()


class TestStateEncoding:
    def test_roundtrip(self):
        state = PromptState(prev_exit_code=2, prev_cmd_duration=CmdDuration.started_at(12.25))
        assert decode_state(encode_state(state)) == state

    def test_encoded_is_shell_safe(self):
        encoded = encode_state(PromptState(prev_exit_code=1))
        assert all(ch.isalnum() or ch in "-_=" for ch in encoded)

    @pytest.mark.parametrize("empty", [None, "", "   "])
    def test_empty_is_default(self, empty):
        assert decode_state(empty) == PromptState()

    def test_undecodable(self):
        with pytest.raises(StateError, match="decode"):
            decode_state("not base64!")

    def test_unparseable(self):
        text = base64.urlsafe_b64encode(b'{"prev_exit_code": "x"}').decode("ascii")
        with pytest.raises(StateError, match="parse"):
            decode_state(text)
