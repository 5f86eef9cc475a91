from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Action settings loaded from workflow inputs (INPUT_*) and the runner environment."""

    # GitHub
    repository: str = Field("", validation_alias="GITHUB_REPOSITORY")
    github_token: Optional[str] = None
    runner_token: Optional[str] = Field(None, validation_alias="GITHUB_TOKEN")
    github_api_url: str = Field("https://api.github.com", validation_alias="GITHUB_API_URL")

    # Branching model
    prod_branch: str = "main"
    develop_branch: str = "develop"
    release_branch_prefix: str = "release/"
    hotfix_branch_prefix: str = "hotfix/"
    merge_back_from_prod: bool = True

    # Versioning
    version: Optional[str] = None
    version_increment: Optional[str] = None  # major, minor, patch, premajor, ...
    release_summary: str = ""

    # Slack (webhook URL or YAML/JSON options)
    slack: Optional[str] = None
    slack_options: Optional[str] = Field(None, validation_alias="SLACK_OPTIONS")

    dry_run: bool = False
    debug: bool = False

    model_config = SettingsConfigDict(
        env_prefix="INPUT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    @field_validator(
        "github_token",
        "runner_token",
        "version",
        "version_increment",
        "slack",
        "slack_options",
        mode="before",
    )
    @classmethod
    def _empty_as_none(cls, value):
        # Unset action inputs arrive as empty strings
        if isinstance(value, str):
            return value.strip() or None
        return value

    @property
    def token(self) -> Optional[str]:
        """The github_token input, or the runner's GITHUB_TOKEN."""
        return self.github_token or self.runner_token

    @property
    def slack_destination(self) -> Optional[str]:
        """The slack input, or SLACK_OPTIONS from the environment."""
        return self.slack or self.slack_options


@lru_cache
def get_settings() -> Settings:
    return Settings()
