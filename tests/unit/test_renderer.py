# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.
"""Unit tests for ANSI rendering."""

from blockprompt.protocols.schema import Fragment, Style
from blockprompt.runtime.renderer import RESET, detect_shell, render, style_transition

RED = Style(foreground="#ff0000")
RED_ON_BLACK = Style(foreground="#ff0000", background="#000000")
BLUE_ON_BLACK = Style(foreground="#0000ff", background="#000000")


class TestStyleTransition:
    def test_same_style(self):
        assert style_transition(RED, Style(foreground="red")) == ""

    def test_from_plain(self):
        assert style_transition(Style(), RED) == "\x1b[38;2;255;0;0m"

    def test_only_changed_channel(self):
        assert style_transition(RED_ON_BLACK, BLUE_ON_BLACK) == "\x1b[38;2;0;0;255m"

    def test_both_channels(self):
        assert style_transition(Style(), RED_ON_BLACK) == "\x1b[38;2;255;0;0;48;2;0;0;0m"

    def test_dropped_channel_resets(self):
        assert style_transition(RED_ON_BLACK, RED) == RESET + "\x1b[38;2;255;0;0m"

    def test_back_to_plain(self):
        assert style_transition(RED, Style()) == RESET


class TestRender:
    def test_plain_text(self):
        assert render([Fragment("a"), Fragment(" b")]) == "a b"

    def test_empty(self):
        assert render([]) == ""

    def test_adjacent_same_style_emits_once(self):
        out = render([Fragment("a", RED), Fragment("b", RED)])
        assert out == "\x1b[38;2;255;0;0mab" + RESET

    def test_zsh_wraps_escapes(self):
        out = render([Fragment("a", RED)], shell="zsh")
        assert out == "%{\x1b[38;2;255;0;0m%}a%{" + RESET + "%}"

    def test_zsh_escapes_percent(self):
        assert render([Fragment("100%")], shell="zsh") == "100%%"

    def test_generic_keeps_percent(self):
        assert render([Fragment("100%")]) == "100%"

    def test_detect_shell(self):
        assert detect_shell(True) == "zsh"
        assert detect_shell(False) == "generic"
