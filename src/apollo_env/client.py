from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import aiohttp

from apollo_env.core.errors import ApolloEnvError
from apollo_env.core.models import ConfigMapping, EnvFileRequest, FetchRequest, FetchResult, parse_descriptor
from apollo_env.envfile import create_env_file, set_env
from apollo_env.remote import build_remote_urls, fetch_remote_configs

logger = logging.getLogger(__name__)

DescriptorInput = Union[FetchRequest, EnvFileRequest, Mapping[str, Any]]


async def fetch_config(
    descriptor: DescriptorInput,
    *,
    base_dir: Optional[Path] = None,
    session: Optional[aiohttp.ClientSession] = None,
    timeout_seconds: Optional[float] = None,
) -> ConfigMapping:
    """
    Fetch every namespace of an Apollo app, merge them and optionally write an env file.

    Raises MissingRequiredField before any network access when a coordinate is
    missing, and RemoteFetchFailure when any namespace request fails. Filesystem
    errors from the env-file step propagate unchanged.
    """
    request = parse_descriptor(descriptor)
    urls = build_remote_urls(request)
    data = await fetch_remote_configs(urls, session=session, timeout_seconds=timeout_seconds)
    logger.info(
        "Remote config merged. app_id=%s cluster=%s namespaces=%s keys=%s",
        request.app_id,
        request.cluster_name,
        len(urls),
        len(data),
    )

    if isinstance(request, EnvFileRequest):
        create_env_file(request.env_file_name, data, request.before_clear, base_dir=base_dir)
        if request.is_set_env:
            set_env(request.env_file_name, base_dir=base_dir)

    return data


async def try_fetch_config(
    descriptor: DescriptorInput,
    *,
    base_dir: Optional[Path] = None,
    session: Optional[aiohttp.ClientSession] = None,
    timeout_seconds: Optional[float] = None,
) -> FetchResult:
    try:
        data = await fetch_config(
            descriptor,
            base_dir=base_dir,
            session=session,
            timeout_seconds=timeout_seconds,
        )
    except ApolloEnvError as exc:
        logger.warning("Remote config fetch failed. error=%s", exc)
        return FetchResult(ok=False, error=exc)
    return FetchResult(ok=True, data=data)


def fetch_config_sync(
    descriptor: DescriptorInput,
    *,
    base_dir: Optional[Path] = None,
    timeout_seconds: Optional[float] = None,
) -> ConfigMapping:
    return asyncio.run(fetch_config(descriptor, base_dir=base_dir, timeout_seconds=timeout_seconds))
