# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""
blockprompt Configuration — Environment-driven settings.

All settings are loaded from environment variables with the BLOCKPROMPT_
prefix. No .env file is read: the prompt runs in whatever directory the
shell happens to be in.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

DEFAULT_CONFIG_DIR = Path("~/.config/blockprompt")


class PromptSettings(BaseSettings):
    """Process-wide configuration loaded from environment."""

    # --- Configuration file ---
    CONFIG_PATH: Optional[Path] = Field(
        default=None,
        description="Prompt configuration file (YAML or JSON). "
                    "Defaults to ~/.config/blockprompt/config.yaml, then config.json",
    )

    # --- Alternative prompt ---
    ALTERNATIVE_PROMPT: Optional[str] = Field(
        default=None,
        description="When set (to anything), the alternative prompt is used",
    )
    ALTERNATIVE_TERMS: List[str] = Field(
        default_factory=lambda: ["linux"],
        description="Values of $TERM that select the alternative prompt",
    )
    TERM: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("BLOCKPROMPT_TERM", "TERM"),
        description="Terminal type, read from $TERM",
    )

    # --- Git ---
    GIT_EXECUTABLE: str = Field(
        default="git",
        description="git binary used for repository discovery",
    )
    GIT_TIMEOUT: float = Field(
        default=0.8,
        description="Hard cap in seconds for a single git invocation",
    )

    # --- Platform ---
    LOG_LEVEL: str = Field(
        default="WARNING",
        description="Log level for the JSON log stream on stderr",
    )

    model_config = {
        "env_prefix": "BLOCKPROMPT_",
        "case_sensitive": True,
    }

    @property
    def alternative_prompt_requested(self) -> bool:
        """Environment asks for the alternative prompt (variable set or plain terminal)."""
        if self.ALTERNATIVE_PROMPT is not None:
            return True
        return self.TERM is not None and self.TERM in self.ALTERNATIVE_TERMS

    def config_candidates(self) -> List[Path]:
        """Configuration files to try, most specific first."""
        if self.CONFIG_PATH is not None:
            return [self.CONFIG_PATH.expanduser()]
        base = DEFAULT_CONFIG_DIR.expanduser()
        return [base / "config.yaml", base / "config.json"]


# Global singleton
settings = PromptSettings()


def get_settings() -> PromptSettings:
    """Return the process-wide settings instance."""
    return settings
