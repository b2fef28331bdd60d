from __future__ import annotations


class ApolloEnvError(RuntimeError):
    pass


class MissingRequiredField(ApolloEnvError, ValueError):
    def __init__(self, field: str) -> None:
        super().__init__(f"{field} is required")
        self.field = field


class RemoteFetchFailure(ApolloEnvError):
    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Remote config fetch failed. url={url} error={reason}")
        self.url = url
