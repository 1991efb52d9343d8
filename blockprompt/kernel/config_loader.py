# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""
Config Loader — Load and validate prompt configuration files.

Files may be YAML or JSON (yaml.safe_load reads both). Example:

    prompt:
      type: sequence
      producers:
        - type: or
          producers:
            - {type: git_path, style: limegreen}
            - {type: working_directory}
        - {type: git_head}
    timeout: 500ms
"""

from __future__ import annotations

import json
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from blockprompt.blocks.combinators import Producer
from blockprompt.core.config import PromptSettings, get_settings
from blockprompt.core.context import PromptContext
from blockprompt.core.errors import ConfigError
from blockprompt.kernel.defaults import default_alternative_prompt, default_pretty_prompt
from blockprompt.protocols.duration import Duration

logger = logging.getLogger("blockprompt.config_loader")


class PromptConfig(BaseModel):
    """Parsed and validated prompt configuration."""

    prompt: Producer = Field(default_factory=default_pretty_prompt)
    alternative_prompt: Optional[Producer] = Field(default_factory=default_alternative_prompt)
    timeout: Duration = Field(
        default=timedelta(seconds=1),
        description="Maximum time to build the prompt before falling back",
    )

    model_config = {"extra": "forbid"}

    def select_prompt(self, context: PromptContext) -> Producer:
        """The alternative prompt when the context asks for it and one exists."""
        if context.alternative_prompt and self.alternative_prompt is not None:
            return self.alternative_prompt
        return self.prompt


def load_config_from_string(content: str) -> PromptConfig:
    """Parse a YAML/JSON document into a PromptConfig."""
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError("Configuration file is invalid") from e
    if data is None:
        data = {}
    try:
        return PromptConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError("Configuration file is invalid") from e


def load_config(path: str | Path) -> PromptConfig:
    """Load a configuration file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise ConfigError("Failed to read configuration file") from e
    logger.debug("Loading configuration from %s", path)
    return load_config_from_string(content)


def resolve_config(
    path: Optional[str | Path] = None,
    settings: Optional[PromptSettings] = None,
) -> PromptConfig:
    """
    Pick the configuration to use.

      1. explicit path (must exist)
      2. first existing file among the settings' candidates
      3. built-in defaults
    """
    if path is not None:
        return load_config(path)
    settings = settings or get_settings()
    for candidate in settings.config_candidates():
        if candidate.exists():
            return load_config(candidate)
    return PromptConfig()


def dump_config(config: PromptConfig) -> str:
    """Pretty JSON for print-default-config."""
    data = config.model_dump(mode="json", exclude_none=True)
    return json.dumps(data, indent=2, ensure_ascii=False)
