from __future__ import annotations


class ConfigClientError(RuntimeError):
    pass


class InvalidSettings(ConfigClientError, ValueError):
    """Raised when client settings are missing a required value."""


class PropertyConversionError(ConfigClientError):
    pass


class ConfigServerUnavailable(ConfigClientError):
    """Raised by the host when fail-fast is enabled and the remote load failed."""
