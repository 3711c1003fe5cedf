"""Configuration for running operations.

Values come from ``OPENAPI_*`` environment variables and are turned into an
explicit :class:`RequestConfig` that the request compiler receives.
"""

from dataclasses import dataclass

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class RequestConfig:
    """Credentials and fallbacks applied to every compiled request."""

    bearer_token: str | None = None
    query_key: str | None = None
    default_host: str | None = None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="OPENAPI_", case_sensitive=False)

    bearer: str = Field(default="")
    query_key: str = Field(default="")
    default_host: str = Field(default="")
    log_level: str = Field(default="WARNING")

    def request_config(self, default_host: str | None = None) -> RequestConfig:
        return RequestConfig(
            bearer_token=self.bearer or None,
            query_key=self.query_key or None,
            default_host=default_host or self.default_host or None,
        )
