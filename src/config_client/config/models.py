from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from config_client.settings import (
    DEFAULT_ENVIRONMENT,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_URI,
    ConfigServerClientSettings,
)


class FileRotationSettings(BaseModel):
    """
    Date-based rotation settings (daily).

    This maps cleanly to Python's standard library TimedRotatingFileHandler behavior.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    backup_count: int = 5


class FileLoggingSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    enabled: bool = False
    path: str = "data/logs/config-client.log"
    rotation: FileRotationSettings = Field(default_factory=FileRotationSettings)


class LoggingSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    level: str = "INFO"
    file: FileLoggingSettings = Field(default_factory=FileLoggingSettings)


class ConfigServerSection(BaseModel):
    """Local `spring.cloud.config` section describing how to reach the config server."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    uri: str = DEFAULT_URI
    name: str = ""
    env: str = DEFAULT_ENVIRONMENT
    label: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    enabled: bool = True
    fail_fast: bool = False
    validate_certificates: bool = True
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    expose_credentials: bool = False

    def to_client_settings(self) -> ConfigServerClientSettings:
        return ConfigServerClientSettings(
            uri=self.uri,
            name=self.name,
            environment=self.env,
            label=self.label,
            username=self.username,
            password=self.password,
            enabled=self.enabled,
            fail_fast=self.fail_fast,
            validate_certificates=self.validate_certificates,
            timeout_seconds=self.timeout_seconds,
            expose_credentials=self.expose_credentials,
        )


class SpringCloudSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    config: ConfigServerSection = Field(default_factory=ConfigServerSection)


class SpringSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    cloud: SpringCloudSettings = Field(default_factory=SpringCloudSettings)


class AppConfig(BaseModel):
    """Local configuration after applying YAML, .env and environment variable overrides."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    spring: SpringSettings = Field(default_factory=SpringSettings)

    def client_settings(self) -> ConfigServerClientSettings:
        return self.spring.cloud.config.to_client_settings()


@dataclass(frozen=True, slots=True)
class ConfigLoadRequest:
    """
    Optional inputs for a configuration loader.

    Implementations may use these to control where configuration is read from.
    """

    yaml_path: str = "data/config/config.yaml"
    env_prefix: str = "APP__"
    dotenv_path: Optional[str] = ".env"
