"""Local configuration: YAML file, optional .env and APP__ environment overrides."""

from config_client.config.loader import YamlConfigLoader
from config_client.config.models import AppConfig, ConfigLoadRequest, ConfigServerSection, LoggingSettings

__all__ = ["AppConfig", "ConfigLoadRequest", "ConfigServerSection", "LoggingSettings", "YamlConfigLoader"]
