# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""
blockprompt command-line entry point.

Commands:
    blockprompt prompt                - Print the prompt
    blockprompt store                 - Update the timing state kept by the shell
    blockprompt install --zsh         - Print shell hooks to eval in .zshrc
    blockprompt print-default-config  - Print the built-in configuration

Example:
    >>> # In ~/.zshrc
    >>> eval "$(blockprompt install --zsh)"
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import sys
import time
from datetime import timedelta
from pathlib import Path
from typing import List, Optional

import typer

from blockprompt.core.config import get_settings
from blockprompt.core.context import PromptContext, build_context
from blockprompt.core.errors import FallbackFailed, InvalidExitCodeError, PromptError, format_error_chain
from blockprompt.core.logging import setup_logging
from blockprompt.kernel.config_loader import PromptConfig, dump_config, resolve_config
from blockprompt.protocols.duration import format_duration
from blockprompt.protocols.schema import Fragment
from blockprompt.resilience.deadline import generate
from blockprompt.resilience.fallback import generate_or_fallback, render_fallback
from blockprompt.runtime.renderer import detect_shell, render
from blockprompt.runtime.timing import decode_state, encode_state

logger = logging.getLogger("blockprompt.main")

app = typer.Typer(
    name="blockprompt",
    help="Generates shell prompts",
    no_args_is_help=True,
    add_completion=False,
)

ZSH_HOOKS = r"""
blockprompt_precmd() {
    prev_status=$?
    BLOCKPROMPT_STATE=$(BLOCKPROMPT_EXE store --state "$BLOCKPROMPT_STATE" --stop-timer --prev-exit-code $prev_status)
    PROMPT=$(BLOCKPROMPT_EXE prompt --state "$BLOCKPROMPT_STATE" --zsh)
}

blockprompt_preexec() {
    BLOCKPROMPT_STATE=$(BLOCKPROMPT_EXE store --state "$BLOCKPROMPT_STATE" --start-timer --prev-exit-code 0)
}

[[ -v precmd_functions ]] || precmd_functions=()
[[ ${precmd_functions[(ie)blockprompt_precmd]} -le ${#precmd_functions} ]] || precmd_functions+=(blockprompt_precmd)

[[ -v preexec_functions ]] || preexec_functions=()
[[ ${preexec_functions[(ie)blockprompt_preexec]} -le ${#preexec_functions} ]] || preexec_functions+=(blockprompt_preexec)
"""


def _report(exc: BaseException) -> None:
    for line in format_error_chain(exc):
        typer.echo(line, err=True)


def _parse_exit_code(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        raise InvalidExitCodeError(value) from None


def _prepare(
    prev_exit_code: Optional[str],
    pwd: Optional[Path],
    state: Optional[str],
    config_path: Optional[Path],
    symbol_fallback: bool,
    alternative: bool,
) -> tuple[PromptConfig, PromptContext]:
    settings = get_settings()
    exit_code = _parse_exit_code(prev_exit_code)
    prompt_state = decode_state(state)
    config = resolve_config(config_path, settings)
    context = build_context(
        working_dir=pwd,
        prev_exit_code=exit_code if exit_code is not None else prompt_state.prev_exit_code,
        prev_cmd_duration=prompt_state.resolved_duration(),
        symbol_fallback=symbol_fallback,
        force_alternative_prompt=alternative,
        settings=settings,
    )
    return config, context


def _write_prompt(fragments: List[Fragment], zsh: bool) -> None:
    shell = detect_shell(zsh)
    logger.debug("Rendering %d fragments", len(fragments), extra={"shell": shell})
    sys.stdout.write("\n")
    sys.stdout.write(render(fragments, shell))
    sys.stdout.flush()


@app.command()
def prompt(
    prev_exit_code: Optional[str] = typer.Option(None, "--prev-exit-code", help="Exit code of the previous command"),
    pwd: Optional[Path] = typer.Option(None, "--pwd", help="Working directory"),
    state: Optional[str] = typer.Option(None, "--state", help="Application state as returned from a previous run"),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to the configuration file"),
    symbol_fallback: bool = typer.Option(False, "--symbol-fallback", help="Uses symbol fallback"),
    alternative: bool = typer.Option(False, "--alternative", help="Forces the alternative prompt"),
    zsh: bool = typer.Option(False, "--zsh", help="Generates a prompt for zsh"),
    test: bool = typer.Option(False, "--test", help="Prints errors and duration of the prompt generation"),
):
    """Prints the prompt."""
    settings = get_settings()
    setup_logging("DEBUG" if test else settings.LOG_LEVEL)
    t0 = time.monotonic()

    try:
        prompt_config, context = _prepare(prev_exit_code, pwd, state, config, symbol_fallback, alternative)
        if test:
            fragments = generate(prompt_config.select_prompt(context), context, prompt_config.timeout)
            error = None
        else:
            outcome = generate_or_fallback(prompt_config, context)
            fragments, error = outcome.fragments, outcome.error
    except FallbackFailed as e:
        _report(e)
        if e.original is not None:
            _report(e.original)
        raise typer.Exit(code=1)
    except PromptError as e:
        if test:
            _report(e)
            raise typer.Exit(code=1)
        try:
            fragments = render_fallback(build_context(pwd, settings=settings), e)
        except FallbackFailed as fallback_error:
            _report(fallback_error)
            _report(e)
            raise typer.Exit(code=1)
        error = e

    _write_prompt(fragments, zsh)

    if test:
        elapsed = timedelta(seconds=time.monotonic() - t0)
        typer.echo(f"\nPrompt generation took {format_duration(elapsed)}")
    if error is not None:
        _report(error)
        raise typer.Exit(code=1)


@app.command()
def store(
    state: str = typer.Option(..., "--state", help="Application state as returned from a previous run"),
    start_timer: bool = typer.Option(False, "--start-timer", help="Starts timer"),
    stop_timer: bool = typer.Option(False, "--stop-timer", help="Stops timer"),
    prev_exit_code: Optional[str] = typer.Option(None, "--prev-exit-code", help="Exit code of the previous command"),
):
    """Stores state used to render the prompt. The new state is printed to stdout."""
    if start_timer and stop_timer:
        typer.echo("Error: --start-timer and --stop-timer are mutually exclusive", err=True)
        raise typer.Exit(code=2)
    try:
        current = decode_state(state)
        if start_timer:
            current = current.start_timer()
        elif stop_timer:
            current = current.stop_timer()
        code = _parse_exit_code(prev_exit_code)
        if code is not None:
            current = current.with_exit_code(code)
    except PromptError as e:
        _report(e)
        raise typer.Exit(code=1)
    typer.echo(encode_state(current))


@app.command()
def install(
    zsh: bool = typer.Option(False, "--zsh", help="Generates for zsh. `eval` the output in `.zshrc`"),
):
    """Generates prompt configuration for the given shell."""
    if not zsh:
        typer.echo("Error: a shell must be selected (--zsh)", err=True)
        raise typer.Exit(code=2)
    typer.echo(ZSH_HOOKS.replace("BLOCKPROMPT_EXE", shlex.quote(_program_path())))


@app.command("print-default-config")
def print_default_config():
    """Prints the default configuration."""
    typer.echo(dump_config(PromptConfig()))


def _program_path() -> str:
    argv0 = sys.argv[0] if sys.argv else "blockprompt"
    found = shutil.which(argv0)
    if found:
        return os.path.abspath(found)
    if argv0.endswith(".py") or not os.path.exists(argv0):
        return shutil.which("blockprompt") or "blockprompt"
    return os.path.abspath(argv0)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
