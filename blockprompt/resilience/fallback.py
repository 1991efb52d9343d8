# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""
Fallback Policy — Always leave the shell with some prompt.

generate_or_fallback() runs the configured prompt under its deadline. When
that fails for any reason, the built-in fallback prompt is evaluated
directly against the same context and returned together with the original
error, so the caller can both show a prompt and report what went wrong.
If the fallback fails too, FallbackFailed is raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from blockprompt.blocks.producer import evaluate
from blockprompt.core.context import PromptContext
from blockprompt.core.errors import FallbackFailed, GenerationError
from blockprompt.kernel.config_loader import PromptConfig
from blockprompt.kernel.defaults import fallback_prompt
from blockprompt.protocols.schema import Fragment
from blockprompt.resilience.deadline import generate

logger = logging.getLogger("blockprompt.fallback")


@dataclass
class PromptOutcome:
    """Fragments to show, plus the generation error if the fallback was used."""

    fragments: List[Fragment] = field(default_factory=list)
    error: Optional[GenerationError] = None

    @property
    def used_fallback(self) -> bool:
        return self.error is not None


def render_fallback(context: PromptContext, original: Optional[BaseException] = None) -> List[Fragment]:
    """Evaluate the fallback prompt, raising FallbackFailed if even that breaks."""
    try:
        return evaluate(fallback_prompt(), context)
    except Exception as e:
        logger.error("Fallback prompt failed: %s", e)
        raise FallbackFailed(original) from e


def generate_or_fallback(config: PromptConfig, context: PromptContext) -> PromptOutcome:
    """Generate the configured prompt, substituting the fallback on failure."""
    producer = config.select_prompt(context)
    try:
        fragments = generate(producer, context, config.timeout)
    except GenerationError as e:
        logger.warning("Using fallback prompt: %s", e)
        return PromptOutcome(fragments=render_fallback(context, e), error=e)
    return PromptOutcome(fragments=fragments)
