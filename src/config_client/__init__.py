"""Client for loading remote configuration from a config server into a flat key/value store."""

from config_client.errors import (
    ConfigClientError,
    ConfigServerUnavailable,
    InvalidSettings,
    PropertyConversionError,
)
from config_client.models import Environment, PropertySource, deserialize_environment, render_property_value
from config_client.provider import ConfigServerConfigurationProvider
from config_client.settings import ConfigServerClientSettings
from config_client.transport import ConfigServerTransport

__all__ = [
    "ConfigClientError",
    "ConfigServerClientSettings",
    "ConfigServerConfigurationProvider",
    "ConfigServerTransport",
    "ConfigServerUnavailable",
    "Environment",
    "InvalidSettings",
    "PropertyConversionError",
    "PropertySource",
    "deserialize_environment",
    "render_property_value",
]
