from __future__ import annotations

from pydantic import Field
from pydantic import HttpUrl
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class TrelloSettings(BaseSettings):
    key: str = Field(default="", description="Trello API key, see https://trello.com/app-key")
    token: str = Field(default="", description="Trello API token")
    base_url: str = Field(default="https://api.trello.com/1", description="Trello REST API root")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="trello_api_",
        extra="ignore",
    )

    @property
    def token_url(self) -> str:
        """Link where a new read-only token can be generated for this key."""
        return (
            "https://trello.com/1/authorize?expiration=1day&name=card-counter"
            f"&scope=read&response_type=token&key={self.key}"
        )


class JiraConnectionSettings(BaseSettings):
    username: str = Field(description="Jira username or account email")
    token: str = Field(description="Jira API token or password")
    domain: HttpUrl = Field(
        description="Jira domain (e.g., https://your-domain.atlassian.net)",
    )
    page_size: int = Field(default=100, gt=0, description="Issues requested per page")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="jira_", extra="ignore"
    )
