from __future__ import annotations

import logging
from typing import Union

from apollo_env.core.errors import MissingRequiredField
from apollo_env.core.models import DEFAULT_NAMESPACE, REQUIRED_FIELDS, EnvFileRequest, FetchRequest

logger = logging.getLogger(__name__)


def check_required(descriptor: Union[FetchRequest, EnvFileRequest]) -> None:
    for field in REQUIRED_FIELDS:
        if not getattr(descriptor, field):
            raise MissingRequiredField(field)


def resolve_namespaces(namespace_name: Union[str, tuple[str, ...], list[str], None]) -> list[str]:
    if not namespace_name:
        return [DEFAULT_NAMESPACE]
    if isinstance(namespace_name, str):
        return [namespace_name]
    return list(namespace_name)


def _build_query(descriptor: Union[FetchRequest, EnvFileRequest]) -> str:
    query = ""
    if descriptor.is_cache and descriptor.release_key:
        query += f"&releaseKey={descriptor.release_key}"
    if descriptor.client_ip:
        query += f"&ip={descriptor.client_ip}"
    return query[1:]


def build_remote_urls(descriptor: Union[FetchRequest, EnvFileRequest]) -> list[str]:
    """Return one config-service URL per namespace, in namespace order."""
    check_required(descriptor)

    query = _build_query(descriptor)
    urls: list[str] = []
    for namespace in resolve_namespaces(descriptor.namespace_name):
        url = f"{descriptor.config_server_url}/configs/{descriptor.app_id}/{descriptor.cluster_name}/{namespace}"
        if query:
            url = f"{url}?{query}"
        urls.append(url)

    logger.debug("Built remote config URLs. app_id=%s count=%s", descriptor.app_id, len(urls))
    return urls
