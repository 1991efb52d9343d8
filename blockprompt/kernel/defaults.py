# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""
Built-in prompts.

  pretty       user@host | path | branch | elapsed | exit code, then "→ "
  alternative  the same without git blocks and fancy glyphs (plain terminals)
  fallback     exit code and ">" only; used when generation fails
"""

from __future__ import annotations

from blockprompt.blocks.combinators import Or, Producer, Separated, Sequence, Styled
from blockprompt.blocks.elapsed import Elapsed
from blockprompt.blocks.exit_code import ExitCode
from blockprompt.blocks.exit_status import ExitStatusSymbol
from blockprompt.blocks.git import GitHead, GitPath
from blockprompt.blocks.identity import Hostname, Username
from blockprompt.blocks.pwd import WorkingDirectory
from blockprompt.blocks.text import Newline, Space
from blockprompt.protocols.color import BLACK, CRIMSON, DODGERBLUE, TEAL
from blockprompt.protocols.schema import Style, Symbol


def _identity() -> Producer:
    return Separated(producers=[Username(), Hostname()], separator="@")


def _prompt_line(info: Separated) -> Sequence:
    return Sequence(producers=[
        info,
        Newline(),
        ExitStatusSymbol(
            contents="→",
            style=Style.fg(DODGERBLUE),
            error_style=Style.fg(CRIMSON),
        ),
        Space(),
    ])


def default_pretty_prompt() -> Producer:
    info = Separated(producers=[
        _identity(),
        Or(producers=[GitPath(), WorkingDirectory()]),
        GitHead(),
        Elapsed(),
        ExitCode(style=Style.fg(CRIMSON)),
    ])
    return Styled(
        producer=_prompt_line(info),
        style=Style(foreground=TEAL, background=BLACK),
    )


def default_alternative_prompt() -> Producer:
    info = Separated(producers=[
        _identity(),
        WorkingDirectory(prefix=""),
        Elapsed(prefix=Symbol(regular="")),
        ExitCode(style=Style.fg(CRIMSON), prefix=""),
    ])
    return Styled(producer=_prompt_line(info), style=Style.fg(TEAL))


def fallback_prompt() -> Producer:
    return Sequence(producers=[
        ExitCode(style=Style.fg(CRIMSON)),
        ExitStatusSymbol(
            contents=">",
            style=Style.fg(DODGERBLUE),
            error_style=Style.fg(CRIMSON),
        ),
        Space(),
    ])
