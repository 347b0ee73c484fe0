from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from config_client.config.models import ConfigLoadRequest
from config_client.errors import ConfigClientError
from config_client.host import load_local_config, load_remote_configuration
from config_client.logging import init_logging
from config_client.provider import ConfigServerConfigurationProvider

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="config-client", description="Config server client")
    parser.add_argument(
        "--config",
        default="data/config/config.yaml",
        help="Path to config.yaml (default: data/config/config.yaml)",
    )
    parser.add_argument(
        "--no-dotenv",
        action="store_true",
        help="Disable loading .env (env overrides still apply)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    # Command: uri
    subparsers.add_parser("uri", help="Print the config server request URI")

    # Command: fetch
    subparsers.add_parser("fetch", help="Load remote configuration and print the flattened keys")

    return parser


def _request_from_args(args: argparse.Namespace) -> ConfigLoadRequest:
    if args.no_dotenv:
        return ConfigLoadRequest(yaml_path=args.config, dotenv_path=None)
    return ConfigLoadRequest(yaml_path=args.config)


async def _print_uri(args: argparse.Namespace) -> None:
    config = await load_local_config(_request_from_args(args))
    init_logging(config.logging)
    provider = ConfigServerConfigurationProvider(config.client_settings())
    print(provider.build_uri())


async def _fetch(args: argparse.Namespace) -> None:
    config = await load_local_config(_request_from_args(args))
    init_logging(config.logging)
    provider = await load_remote_configuration(config)
    logger.info("Remote configuration load finished. status=%s keys=%s", provider.status, len(provider.data))
    for key in sorted(provider.data):
        print(f"{key}={provider.data[key]}")


async def _main_async() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    if args.command == "uri":
        await _print_uri(args)
    elif args.command == "fetch":
        await _fetch(args)


def main() -> None:
    try:
        asyncio.run(_main_async())
    except ConfigClientError as exc:
        logger.error("Config client failed. error=%s", exc)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")


if __name__ == "__main__":
    main()
