# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""
Error Handling — Unified error structure.

Modeled absence (no repository, exit code zero, duration below threshold)
is never an error: producers return an empty fragment list for it.
Everything here is a real failure that must reach the user.
"""

from __future__ import annotations

from typing import Iterator, Optional


class PromptError(Exception):
    """Base error with a stable code and a human-readable message."""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(message)


class RepositoryError(PromptError):
    """git repository access failed for a reason other than "not a repository"."""

    def __init__(self, detail: str):
        super().__init__(code="REPOSITORY_ERROR", message=f"Failed to open git repository: {detail}")


class ConfigError(PromptError):
    def __init__(self, message: str):
        super().__init__(code="CONFIG_ERROR", message=message)


class StateError(PromptError):
    def __init__(self, message: str):
        super().__init__(code="STATE_ERROR", message=message)


class InvalidExitCodeError(PromptError):
    def __init__(self, value: str):
        super().__init__(code="INVALID_EXIT_CODE", message=f"Invalid exit code {value}")


# ── Generation ──────────────────────────────────────────────────


class GenerationError(PromptError):
    """Prompt generation did not produce fragments."""


class GenerationTimedOut(GenerationError):
    def __init__(self, deadline: float):
        self.deadline = deadline
        super().__init__(
            code="GENERATION_TIMED_OUT",
            message=f"Prompt generation timed out after {deadline:.3f}s",
        )


class GenerationCrashed(GenerationError):
    def __init__(self):
        super().__init__(code="GENERATION_CRASHED", message="Prompt generation crashed")


class GenerationFailed(GenerationError):
    def __init__(self):
        super().__init__(code="GENERATION_FAILED", message="Error while building prompt")


class FallbackFailed(PromptError):
    """Even the fallback prompt could not be produced."""

    def __init__(self, original: Optional[BaseException] = None):
        self.original = original
        super().__init__(code="FALLBACK_FAILED", message="Failed to build fallback prompt")


def iter_error_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield exc and then each explicit cause."""
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__


def format_error_chain(exc: BaseException) -> list[str]:
    """Render an error and its causes as 'Error: ...' / 'Because: ...' lines."""
    lines = []
    for i, err in enumerate(iter_error_chain(exc)):
        label = "Error" if i == 0 else "Because"
        lines.append(f"{label}: {err}")
    return lines
