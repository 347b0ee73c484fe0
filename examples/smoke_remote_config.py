from __future__ import annotations

import asyncio
import logging

from config_client.config import YamlConfigLoader
from config_client.config.models import ConfigLoadRequest
from config_client.host import load_remote_configuration
from config_client.logging import init_logging


async def main() -> None:
    config = await YamlConfigLoader().load(ConfigLoadRequest(yaml_path="examples/config.yaml"))
    init_logging(config.logging)

    logger = logging.getLogger("smoke")
    provider = await load_remote_configuration(config)
    logger.info("Remote config status=%s uri=%s", provider.status, provider.build_uri())
    logger.info("bar=%s info:description=%s", provider.get("bar"), provider.get("info:description"))


if __name__ == "__main__":
    asyncio.run(main())
