"""
sid_rewriter configuration
"""
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

from sid_rewriter.policy.profile import DEFAULT_EXTENSIONS


class SidSettings(BaseSettings):
    """Defaults for the CLI and API, overridable from the environment."""

    SID_MARKER: str = "SID"
    SID_HASH: str = "djb2"
    SID_EXTENSIONS: List[str] = list(DEFAULT_EXTENSIONS)
    SID_LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


settings = SidSettings()
