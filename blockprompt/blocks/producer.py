# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""
Producer — The closed set of producer variants.

Configuration files name a variant through its `type` tag:

    {"type": "or", "producers": [{"type": "git_path"}, {"type": "working_directory"}]}

Adding a variant means adding it to PRODUCER_TYPES and to the Producer
union in blocks.combinators; there is no runtime registration.
"""

from __future__ import annotations

from typing import Any, List

from pydantic import TypeAdapter

from blockprompt.blocks.combinators import Or, Producer, Separated, Sequence, Styled
from blockprompt.blocks.elapsed import Elapsed
from blockprompt.blocks.exit_code import ExitCode
from blockprompt.blocks.exit_status import ExitStatusSymbol
from blockprompt.blocks.git import GitHead, GitPath
from blockprompt.blocks.identity import Hostname, Username
from blockprompt.blocks.pwd import WorkingDirectory
from blockprompt.blocks.text import Newline, Space, Text
from blockprompt.core.context import PromptContext
from blockprompt.protocols.schema import Fragment

__all__ = [
    "Producer",
    "PRODUCER_TYPES",
    "parse_producer",
    "dump_producer",
    "evaluate",
]

PRODUCER_TYPES = (
    Elapsed,
    ExitCode,
    ExitStatusSymbol,
    GitHead,
    GitPath,
    Hostname,
    Newline,
    Or,
    Separated,
    Sequence,
    Space,
    Styled,
    Text,
    Username,
    WorkingDirectory,
)

_adapter = TypeAdapter(Producer)


def parse_producer(data: Any) -> Producer:
    """Validate a plain dict (as loaded from YAML/JSON) into a producer tree."""
    return _adapter.validate_python(data)


def dump_producer(producer: Producer) -> Any:
    return _adapter.dump_python(producer, mode="json", exclude_none=True)


def evaluate(producer: Producer, context: PromptContext) -> List[Fragment]:
    """
    Evaluate a producer tree against context.

    Pure apart from the read-only queries the context offers. Returns [] when
    nothing is to be shown. Collaborator failures (e.g. RepositoryError)
    propagate unchanged.
    """
    if not isinstance(producer, PRODUCER_TYPES):
        raise TypeError(f"Not a producer: {type(producer).__name__}")
    return producer.produce(context)
