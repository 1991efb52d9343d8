# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""
BlockProducer — Abstract base class for every producer variant.

A producer is an immutable configuration value. produce() turns a
PromptContext into zero or more Fragments and has no side effects beyond the
read-only queries the context offers. "Nothing to show" is an empty list,
never an exception.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from pydantic import BaseModel

from blockprompt.core.context import PromptContext
from blockprompt.protocols.schema import Fragment, Style


class BlockProducer(BaseModel, ABC):
    """
    Abstract base class for all producers.

    Subclasses declare a literal `type` tag (the discriminator used in
    configuration files) and implement produce().
    """

    model_config = {"frozen": True, "extra": "forbid"}

    @abstractmethod
    def produce(self, context: PromptContext) -> List[Fragment]:
        """Evaluate against context. Returns [] when there is nothing to show."""
        ...


def prefixed(prefix: str, value: str, style: Style) -> List[Fragment]:
    """The common leaf shape: a prefix fragment then the value, same style."""
    return [Fragment(prefix, style), Fragment(value, style)]
