from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Mapping, Optional

from apollo_env.client import fetch_config
from apollo_env.config import AppConfig, ConfigLoader, YamlConfigLoader
from apollo_env.config.models import ConfigLoadRequest
from apollo_env.core.errors import ApolloEnvError
from apollo_env.logging import init_logging
from apollo_env.remote import build_remote_urls

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="apollo-env", description="Apollo config fetcher")
    parser.add_argument(
        "--config",
        default="data/config/config.yaml",
        help="Path to config.yaml (default: data/config/config.yaml)",
    )
    parser.add_argument(
        "--dotenv",
        default=".env",
        help="Optional .env file loaded before environment overrides (default: .env)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    # Command: fetch
    fetch_parser = subparsers.add_parser("fetch", help="Fetch and merge all namespaces")
    fetch_parser.add_argument(
        "--format",
        choices=("json", "env"),
        default="json",
        help="Output format for the merged mapping (default: json)",
    )

    # Command: urls
    subparsers.add_parser("urls", help="Print the config-service URLs without fetching")

    return parser


def format_mapping(data: Mapping[str, str], output_format: str) -> str:
    if output_format == "env":
        return "".join(f"{key}={value}\n" for key, value in data.items())
    return json.dumps(data, ensure_ascii=False, indent=2) + "\n"


async def _load_config(args: argparse.Namespace, loader: ConfigLoader) -> AppConfig:
    request = ConfigLoadRequest(
        yaml_path=args.config,
        dotenv_path=args.dotenv,
    )
    return await loader.load(request)


async def _fetch(args: argparse.Namespace, loader: ConfigLoader) -> None:
    config = await _load_config(args, loader)
    init_logging(config.logging)
    logger.info("Fetching config. app_id=%s cluster=%s", config.apollo.app_id, config.apollo.cluster_name)

    data = await fetch_config(config.apollo, timeout_seconds=config.http.timeout_seconds)
    sys.stdout.write(format_mapping(data, args.format))


async def _print_urls(args: argparse.Namespace, loader: ConfigLoader) -> None:
    config = await _load_config(args, loader)
    init_logging(config.logging)

    for url in build_remote_urls(config.apollo):
        sys.stdout.write(f"{url}\n")


async def _main_async(argv: Optional[list[str]], loader: ConfigLoader) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "fetch":
        await _fetch(args, loader)
    elif args.command == "urls":
        await _print_urls(args, loader)


def main(argv: Optional[list[str]] = None, *, loader: Optional[ConfigLoader] = None) -> int:
    try:
        asyncio.run(_main_async(argv, loader or YamlConfigLoader()))
    except ApolloEnvError:
        logger.exception("Config fetch failed.")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
