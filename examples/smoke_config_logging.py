from __future__ import annotations

import asyncio
import logging

from apollo_env.config import ConfigLoader, YamlConfigLoader
from apollo_env.config.models import ConfigLoadRequest
from apollo_env.logging import init_logging
from apollo_env.remote import build_remote_urls


async def main() -> None:
    loader: ConfigLoader = YamlConfigLoader()
    config = await loader.load(ConfigLoadRequest(yaml_path="examples/config.yaml"))
    init_logging(config.logging)

    logger = logging.getLogger("smoke")
    logger.info("Config loaded app_id=%s cluster=%s", config.apollo.app_id, config.apollo.cluster_name)
    logger.info("Logging level=%s", config.logging.level)
    for url in build_remote_urls(config.apollo):
        logger.info("Remote url=%s", url)


if __name__ == "__main__":
    asyncio.run(main())
