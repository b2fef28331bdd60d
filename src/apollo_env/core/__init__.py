"""Request descriptors, results and error types."""

from apollo_env.core.errors import ApolloEnvError, MissingRequiredField, RemoteFetchFailure
from apollo_env.core.models import (
    ConfigMapping,
    EnvFileRequest,
    FetchRequest,
    FetchResult,
    RequestDescriptor,
    parse_descriptor,
)

__all__ = [
    "ApolloEnvError",
    "ConfigMapping",
    "EnvFileRequest",
    "FetchRequest",
    "FetchResult",
    "MissingRequiredField",
    "RemoteFetchFailure",
    "RequestDescriptor",
    "parse_descriptor",
]
