"""Fetch Apollo configuration namespaces and materialize them as env files."""

from apollo_env.client import fetch_config, fetch_config_sync, try_fetch_config
from apollo_env.core import (
    ApolloEnvError,
    EnvFileRequest,
    FetchRequest,
    FetchResult,
    MissingRequiredField,
    RemoteFetchFailure,
    RequestDescriptor,
    parse_descriptor,
)
from apollo_env.envfile import create_env_file, set_env
from apollo_env.remote import build_remote_urls

__all__ = [
    "ApolloEnvError",
    "EnvFileRequest",
    "FetchRequest",
    "FetchResult",
    "MissingRequiredField",
    "RemoteFetchFailure",
    "RequestDescriptor",
    "build_remote_urls",
    "create_env_file",
    "fetch_config",
    "fetch_config_sync",
    "parse_descriptor",
    "set_env",
    "try_fetch_config",
]
