from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Tag, TypeAdapter

from apollo_env.core.errors import ApolloEnvError, MissingRequiredField

DEFAULT_NAMESPACE = "application"
REQUIRED_FIELDS: tuple[str, ...] = ("app_id", "cluster_name", "config_server_url")

ConfigMapping = dict[str, str]


class _RemoteConfigRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    # Apollo coordinates
    app_id: str
    cluster_name: str
    config_server_url: str
    namespace_name: Optional[Union[str, tuple[str, ...]]] = None

    # Query parameters
    client_ip: Optional[str] = None
    is_cache: bool = False
    release_key: Optional[str] = None


class FetchRequest(_RemoteConfigRequest):
    """Fetch and merge namespaces without touching the filesystem."""

    create_env: Literal[False] = False


class EnvFileRequest(_RemoteConfigRequest):
    """
    Fetch and merge namespaces, then materialize the result as an env file.

    The file is written first (cleared beforehand unless `before_clear` is False)
    and then loaded into `os.environ` unless `is_set_env` is False.
    """

    create_env: Literal[True]
    env_file_name: str
    is_set_env: bool = True
    before_clear: bool = True


def _descriptor_tag(value: Any) -> str:
    if isinstance(value, Mapping):
        create_env = value.get("create_env", False)
    else:
        create_env = getattr(value, "create_env", False)
    return "env_file" if create_env else "fetch"


RequestDescriptor = Annotated[
    Union[
        Annotated[FetchRequest, Tag("fetch")],
        Annotated[EnvFileRequest, Tag("env_file")],
    ],
    Discriminator(_descriptor_tag),
]

_descriptor_adapter: TypeAdapter[Union[FetchRequest, EnvFileRequest]] = TypeAdapter(RequestDescriptor)


def parse_descriptor(data: Union[FetchRequest, EnvFileRequest, Mapping[str, Any]]) -> Union[FetchRequest, EnvFileRequest]:
    """
    Build a request descriptor from a model or a plain mapping.

    Absent or empty required coordinates raise MissingRequiredField before pydantic
    validation so callers get the same error whether they pass a dict or a model.
    """
    if isinstance(data, (FetchRequest, EnvFileRequest)):
        return data
    for field in REQUIRED_FIELDS:
        if not data.get(field):
            raise MissingRequiredField(field)
    return _descriptor_adapter.validate_python(dict(data))


@dataclass(frozen=True, slots=True)
class FetchResult:
    ok: bool
    data: Optional[ConfigMapping] = None
    error: Optional[ApolloEnvError] = None
