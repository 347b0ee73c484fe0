from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

from config_client.errors import InvalidSettings

DEFAULT_URI = "http://localhost:8888"
DEFAULT_ENVIRONMENT = "Production"
DEFAULT_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True, slots=True)
class ConfigServerClientSettings:
    """
    Location of the config server and client behavior.

    Validated once at construction; instances never change afterwards.
    """

    name: str
    uri: str = DEFAULT_URI
    environment: str = DEFAULT_ENVIRONMENT
    label: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    enabled: bool = True
    fail_fast: bool = False
    validate_certificates: bool = True
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    # Writes the raw password into the destination store instead of a mask.
    expose_credentials: bool = False

    def __post_init__(self) -> None:
        for field_name in ("uri", "name", "environment"):
            value = getattr(self, field_name)
            if not isinstance(value, str) or not value.strip():
                raise InvalidSettings(f"Config server setting '{field_name}' must be a non-empty string.")

        parsed = urlparse(self.uri)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise InvalidSettings(f"Config server uri must be an absolute http(s) URL. uri={self.uri}")

        if self.timeout_seconds <= 0:
            raise InvalidSettings(f"Config server timeout must be positive. timeout_seconds={self.timeout_seconds}")
