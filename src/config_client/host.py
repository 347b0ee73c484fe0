from __future__ import annotations

import logging
from typing import Optional

from config_client.config import YamlConfigLoader
from config_client.config.models import AppConfig, ConfigLoadRequest
from config_client.errors import ConfigServerUnavailable
from config_client.interfaces import ConfigFetcher, ConfigurationStore
from config_client.provider import ConfigServerConfigurationProvider

logger = logging.getLogger(__name__)


async def load_local_config(request: ConfigLoadRequest = ConfigLoadRequest()) -> AppConfig:
    return await YamlConfigLoader().load(request)


async def load_remote_configuration(
    config: AppConfig,
    *,
    fetcher: Optional[ConfigFetcher] = None,
    store: Optional[ConfigurationStore] = None,
) -> ConfigServerConfigurationProvider:
    """
    Build a provider from the local `spring.cloud.config` section and run one load.

    Raises ConfigServerUnavailable when `fail_fast` is set and the load failed.
    """
    settings = config.client_settings()
    provider = ConfigServerConfigurationProvider(settings, fetcher=fetcher, store=store)
    await provider.load()

    if provider.failed:
        if settings.fail_fast:
            raise ConfigServerUnavailable(
                f"Config server load failed and fail_fast is enabled. status={provider.status} path={provider.build_uri()}"
            )
        logger.warning("Continuing without remote configuration. status=%s", provider.status)
    return provider
