from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Mapping, Optional, Sequence

import aiohttp

from apollo_env.core.errors import RemoteFetchFailure
from apollo_env.core.models import ConfigMapping

logger = logging.getLogger(__name__)

_FETCH_ERRORS: tuple[type[BaseException], ...] = (
    aiohttp.ClientError,
    asyncio.TimeoutError,
)


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def extract_configurations(payload: Any) -> Optional[Mapping[str, Any]]:
    """Return the key/value source of a config-service response body, if any."""
    if not isinstance(payload, Mapping) or not payload:
        return None
    source = payload["configurations"] if "configurations" in payload else payload
    if not isinstance(source, Mapping):
        return None
    return source


def merge_configurations(sources: Sequence[Optional[Mapping[str, Any]]]) -> ConfigMapping:
    merged: ConfigMapping = {}
    for source in sources:
        if not source:
            continue
        for key, value in source.items():
            merged[str(key)] = _stringify(value)
    return merged


async def _fetch_one(session: aiohttp.ClientSession, url: str) -> Optional[Mapping[str, Any]]:
    try:
        async with session.get(url, raise_for_status=True) as response:
            if response.status != 200:
                logger.debug("Skipping non-200 config response. url=%s status=%s", url, response.status)
                return None
            body = await response.read()
    except _FETCH_ERRORS as exc:
        raise RemoteFetchFailure(url, type(exc).__name__) from exc

    if not body.strip():
        logger.debug("Skipping empty config response. url=%s", url)
        return None
    # UnicodeDecodeError is a ValueError
    try:
        payload = json.loads(body.decode("utf-8"))
    except ValueError as exc:
        raise RemoteFetchFailure(url, "invalid JSON body") from exc

    source = extract_configurations(payload)
    logger.debug("Fetched config response. url=%s keys=%s", url, len(source) if source else 0)
    return source


async def _fetch_all(session: aiohttp.ClientSession, urls: Sequence[str]) -> ConfigMapping:
    tasks = [asyncio.create_task(_fetch_one(session, url)) for url in urls]
    try:
        sources = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        raise
    return merge_configurations(sources)


async def fetch_remote_configs(
    urls: Sequence[str],
    *,
    session: Optional[aiohttp.ClientSession] = None,
    timeout_seconds: Optional[float] = None,
) -> ConfigMapping:
    """
    GET every URL concurrently and merge the responses in URL order.

    The join is all-or-nothing: the first failing request raises RemoteFetchFailure
    and no partial mapping is returned. Non-200 and empty responses are skipped.
    """
    if not urls:
        return {}
    logger.info("Fetching remote configs. count=%s", len(urls))
    if session is not None:
        return await _fetch_all(session, urls)

    session_kwargs: dict[str, Any] = {}
    if timeout_seconds is not None:
        session_kwargs["timeout"] = aiohttp.ClientTimeout(total=timeout_seconds)
    async with aiohttp.ClientSession(**session_kwargs) as owned_session:
        return await _fetch_all(owned_session, urls)
