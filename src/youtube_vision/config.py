# src/youtube_vision/config.py
"""Startup configuration read from the environment."""

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MODEL_NAME = "gemini-2.0-flash"


class ConfigError(Exception):
    """Required configuration is missing."""
    pass


class ServerConfig(BaseModel):
    """Process-wide settings, fixed at startup."""
    model_config = ConfigDict(frozen=True)

    api_key: str = Field(min_length=1, repr=False)
    model_name: str = DEFAULT_MODEL_NAME

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ServerConfig":
        """
        Build the config from GEMINI_API_KEY and GEMINI_MODEL_NAME.

        Raises:
            ConfigError: If GEMINI_API_KEY is not set
        """
        env = os.environ if environ is None else environ

        api_key = env.get("GEMINI_API_KEY", "").strip()
        if not api_key:
            raise ConfigError(
                "GEMINI_API_KEY environment variable is not set. "
                "Please configure it in your MCP client settings."
            )

        model_name = env.get("GEMINI_MODEL_NAME", "").strip() or DEFAULT_MODEL_NAME
        return cls(api_key=api_key, model_name=model_name)
