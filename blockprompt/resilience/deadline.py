# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""
Deadline Runner — Evaluate a producer tree without hanging the shell.

The tree is evaluated on a daemon worker thread. The caller waits on a
single-slot queue for at most `deadline`:

  result in time              -> fragments
  PromptError from producers  -> GenerationFailed (cause chained)
  any other exception         -> GenerationCrashed (cause chained)
  nothing before the deadline -> GenerationTimedOut

A timed-out worker is abandoned, not killed. Its late result lands in a
queue nobody reads, and as a daemon thread it never delays process exit.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from datetime import timedelta
from typing import List, Tuple, Union

from blockprompt.blocks.producer import Producer, evaluate
from blockprompt.core.context import PromptContext
from blockprompt.core.errors import (
    GenerationCrashed,
    GenerationFailed,
    GenerationTimedOut,
    PromptError,
)
from blockprompt.protocols.schema import Fragment

logger = logging.getLogger("blockprompt.deadline")

_Outcome = Tuple[bool, Union[List[Fragment], BaseException]]


def _deadline_seconds(deadline: Union[timedelta, float]) -> float:
    if isinstance(deadline, timedelta):
        seconds = deadline.total_seconds()
    else:
        seconds = float(deadline)
    return max(seconds, 0.0)


def generate(
    producer: Producer,
    context: PromptContext,
    deadline: Union[timedelta, float],
) -> List[Fragment]:
    """
    Evaluate producer against context within deadline.

    Raises:
        GenerationTimedOut: the deadline elapsed first
        GenerationFailed: a collaborator failed (e.g. RepositoryError)
        GenerationCrashed: evaluation hit an unexpected defect
    """
    seconds = _deadline_seconds(deadline)
    handoff: "queue.Queue[_Outcome]" = queue.Queue(maxsize=1)

    def worker() -> None:
        try:
            fragments = evaluate(producer, context)
        except BaseException as exc:  # reported to the waiting thread
            handoff.put((False, exc))
        else:
            handoff.put((True, fragments))

    t0 = time.monotonic()
    thread = threading.Thread(target=worker, name="blockprompt-generate", daemon=True)
    thread.start()

    try:
        ok, value = handoff.get(timeout=seconds)
    except queue.Empty:
        logger.warning(
            "Prompt generation timed out after %.3fs", seconds,
            extra={"working_dir": str(context.working_dir)},
        )
        raise GenerationTimedOut(seconds) from None

    elapsed_ms = round((time.monotonic() - t0) * 1000, 3)
    if ok:
        logger.debug(
            "Prompt generated",
            extra={"elapsed_ms": elapsed_ms, "working_dir": str(context.working_dir)},
        )
        return value

    if isinstance(value, PromptError):
        logger.warning("Prompt generation failed: %s", value)
        raise GenerationFailed() from value
    if isinstance(value, Exception):
        logger.error("Prompt generation crashed: %r", value, exc_info=value)
        raise GenerationCrashed() from value
    # KeyboardInterrupt / SystemExit raised inside the worker
    raise value
