"""Configuration module for octolens using pydantic-settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful assistant with read-only access to GitHub. "
    "Use the available tools to look up users, repositories, commit history "
    "and pull request changes when a question needs them, and answer concisely."
)


class OctolensSettings(BaseSettings):
    """Main configuration settings for octolens.

    All settings can be overridden via environment variables with the OCTOLENS_ prefix.
    For example, OCTOLENS_GITHUB_TOKEN will override the github_token setting.
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Model provider
    provider: str = "openai"  # openai | ollama
    default_model: str = "gpt-4o-mini"
    openai_api_key: str | None = None
    openai_base_url: str | None = None
    ollama_host: str = "http://localhost:11434"

    # GitHub
    github_token: str | None = None
    github_api_url: str = "https://api.github.com"

    # Conversation
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    reset_transcript_per_prompt: bool = False
    transcripts_dir: str | None = None

    # Network deadlines and retry policy
    request_timeout: float = 30.0
    retry_attempts: int = 1
    retry_backoff: float = 0.5

    # CORS
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="OCTOLENS_")

    @property
    def resolved_transcripts_dir(self) -> Path | None:
        """Get the full path to the transcripts directory, if persistence is enabled."""
        if not self.transcripts_dir:
            return None
        return Path(self.transcripts_dir)
