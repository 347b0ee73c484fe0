from __future__ import annotations

import logging
from typing import Literal, Optional

from config_client.errors import PropertyConversionError
from config_client.interfaces import ConfigFetcher, ConfigurationStore
from config_client.models import Environment, PropertySource, deserialize_environment, render_property_value
from config_client.settings import ConfigServerClientSettings
from config_client.transport import ConfigServerTransport

logger = logging.getLogger(__name__)

KEY_DELIMITER = ":"
SETTINGS_PREFIX = "spring:cloud:config"
PASSWORD_MASK = "******"

LoadStatus = Literal["not_loaded", "loaded", "fetch_failed", "deserialize_failed", "disabled"]


def _render_bool(value: bool) -> str:
    return "true" if value else "false"


class ConfigServerConfigurationProvider:
    """
    Loads configuration from a config server into a flat, colon-delimited store.

    Each `load()` performs exactly one fetch. Property sources are applied in the order
    the server returned them, so a later source overwrites keys set by an earlier one.
    Fetch and parse failures are logged and leave the store with the injected client
    settings only. Calls must not overlap on the same instance.
    """

    def __init__(
        self,
        settings: ConfigServerClientSettings,
        *,
        fetcher: Optional[ConfigFetcher] = None,
        store: Optional[ConfigurationStore] = None,
    ) -> None:
        if settings is None:
            raise ValueError("settings is required")
        self._settings = settings
        self._fetcher: ConfigFetcher = fetcher or ConfigServerTransport.from_settings(settings)
        self._store: ConfigurationStore = store if store is not None else {}
        self._status: LoadStatus = "not_loaded"

    @property
    def settings(self) -> ConfigServerClientSettings:
        return self._settings

    @property
    def data(self) -> ConfigurationStore:
        return self._store

    @property
    def status(self) -> LoadStatus:
        return self._status

    @property
    def failed(self) -> bool:
        return self._status in ("fetch_failed", "deserialize_failed")

    def get(self, key: str) -> Optional[str]:
        return self._store.get(key)

    def build_uri(self) -> str:
        settings = self._settings
        path = f"/{settings.name}/{settings.environment}"
        if settings.label and settings.label.strip():
            path = f"{path}/{settings.label}"
        return settings.uri + path

    async def load(self) -> None:
        if not self._settings.enabled:
            logger.info("Config server client disabled; skipping remote load. name=%s", self._settings.name)
            self._status = "disabled"
            return

        self._add_client_settings()

        uri = self.build_uri()
        payload = await self._fetcher.fetch(uri)
        if payload is None:
            logger.warning("Config server fetch failed; continuing without remote properties. path=%s", uri)
            self._status = "fetch_failed"
            return

        environment = deserialize_environment(payload)
        if environment is None:
            logger.warning("Config server response was not a valid environment. path=%s", uri)
            self._status = "deserialize_failed"
            return

        self._apply_environment(environment)
        self._status = "loaded"

    def _apply_environment(self, environment: Environment) -> None:
        logger.info(
            "Located environment. name=%s profiles=%s label=%s version=%s",
            environment.name,
            environment.profiles,
            environment.label,
            environment.version,
        )
        for index, source in enumerate(environment.property_sources):
            if source is None:
                logger.debug("Skipping null property source. index=%s", index)
                continue
            self._add_property_source(source)

    def _add_property_source(self, source: PropertySource) -> None:
        logger.debug("Applying property source. name=%s keys=%s", source.name, len(source.source))
        for key, value in source.source.items():
            try:
                self._store[key.replace(".", KEY_DELIMITER)] = render_property_value(value)
            except PropertyConversionError as exc:
                logger.error(
                    "Skipping config server property. source=%s key=%s value_type=%s error=%s",
                    source.name,
                    key,
                    type(value).__name__,
                    exc,
                )
            except Exception:
                logger.exception("Failed to store config server property. source=%s key=%s", source.name, key)

    def _add_client_settings(self) -> None:
        settings = self._settings
        if settings.expose_credentials:
            password = settings.password or ""
        else:
            password = PASSWORD_MASK if settings.password else ""

        values = {
            "enabled": _render_bool(settings.enabled),
            "failFast": _render_bool(settings.fail_fast),
            "env": settings.environment,
            "label": settings.label or "",
            "name": settings.name,
            "password": password,
            "uri": settings.uri,
            "username": settings.username or "",
            "validate_certificates": _render_bool(settings.validate_certificates),
        }
        for suffix, value in values.items():
            self._store[f"{SETTINGS_PREFIX}{KEY_DELIMITER}{suffix}"] = value
