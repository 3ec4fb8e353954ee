"""Configuration for schooldesk.

schooldesk is configured by a YAML file, whose location defaults to
:file:`/etc/schooldesk/schooldesk.yaml`. The settings that are usually
injected by the deployment, such as the directory URL and the bearer token,
may also be set via environment variables, which take precedence over the
file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Self, override

import yaml
from pydantic import AliasChoices, Field, HttpUrl, SecretStr
from pydantic.alias_generators import to_camel
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)
from safir.logging import LogLevel, Profile, configure_logging
from safir.pydantic import HumanTimedelta

from .constants import HTTP_TIMEOUT

__all__ = ["Config"]


class Config(BaseSettings):
    """Configuration for the user lookup and edit workflow."""

    model_config = SettingsConfigDict(
        alias_generator=to_camel, extra="forbid", populate_by_name=True
    )

    base_url: HttpUrl = Field(
        ...,
        title="Directory API URL",
        description="Base URL of the user directory API",
        validation_alias=AliasChoices("SCHOOLDESK_BASE_URL", "baseUrl"),
    )

    token: SecretStr | None = Field(
        None,
        title="Bearer token",
        description=(
            "Token sent in the Authorization header of every directory"
            " request. If not set, requests are unauthenticated."
        ),
        validation_alias=AliasChoices("SCHOOLDESK_TOKEN", "token"),
    )

    timeout: HumanTimedelta = Field(
        HTTP_TIMEOUT,
        title="Request timeout",
        description="Timeout for each request to the directory API",
    )

    log_level: LogLevel = Field(
        LogLevel.INFO,
        title="Log level",
        validation_alias=AliasChoices("SCHOOLDESK_LOG_LEVEL", "logLevel"),
    )

    log_profile: Profile = Field(
        Profile.production,
        title="Logging profile",
        description="Use development for human-readable log output",
        validation_alias=AliasChoices("SCHOOLDESK_LOG_PROFILE", "logProfile"),
    )

    @override
    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Override the sources of settings.

        Init parameters come from the YAML configuration file, so let
        environment variables take precedence over them. :file:`.env` and
        secret files are not supported.
        """
        return (env_settings, init_settings)

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Construct a Config object from a configuration file.

        Parameters
        ----------
        path
            Path to the configuration file in YAML.

        Returns
        -------
        Config
            The corresponding `Config` object.
        """
        with path.open("r") as f:
            return cls(**(yaml.safe_load(f) or {}))

    def configure_logging(self) -> None:
        """Configure logging based on the schooldesk configuration."""
        configure_logging(
            name="schooldesk",
            profile=self.log_profile,
            log_level=self.log_level,
        )
