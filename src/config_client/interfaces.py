from __future__ import annotations

from typing import Optional, Protocol


class ConfigurationStore(Protocol):
    """
    Destination for flattened configuration values.

    Keys are colon-delimited (e.g. `spring:cloud:config:uri`); a plain dict satisfies this protocol.
    """

    def __setitem__(self, key: str, value: str) -> None:
        ...

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        ...


class ConfigFetcher(Protocol):
    async def fetch(self, uri: str) -> bytes | None:
        """Return the response body, or None when the request did not succeed."""
