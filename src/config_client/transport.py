from __future__ import annotations

import asyncio
import logging
from typing import Optional

import aiohttp

from config_client.settings import ConfigServerClientSettings

logger = logging.getLogger(__name__)

_FETCH_ERRORS: tuple[type[BaseException], ...] = (
    aiohttp.ClientError,
    OSError,
)


class ConfigServerTransport:
    """
    Issues a single GET against the config server.

    Certificate trust is configured per instance: with `validate_certificates=False`
    only the connectors created by this transport skip verification.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float,
        validate_certificates: bool = True,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> None:
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._validate_certificates = validate_certificates
        self._auth = aiohttp.BasicAuth(username, password or "") if username else None

    @classmethod
    def from_settings(cls, settings: ConfigServerClientSettings) -> "ConfigServerTransport":
        return cls(
            timeout_seconds=settings.timeout_seconds,
            validate_certificates=settings.validate_certificates,
            username=settings.username,
            password=settings.password,
        )

    @property
    def validate_certificates(self) -> bool:
        return self._validate_certificates

    def _build_connector(self) -> aiohttp.TCPConnector:
        if self._validate_certificates:
            return aiohttp.TCPConnector()
        return aiohttp.TCPConnector(ssl=False)

    async def fetch(self, uri: str) -> bytes | None:
        """Return the response body on HTTP 200, otherwise None."""
        if not uri:
            raise ValueError("uri must be a non-empty string")

        headers = {"Accept": "application/json"}
        try:
            async with aiohttp.ClientSession(
                timeout=self._timeout,
                connector=self._build_connector(),
                auth=self._auth,
            ) as session:
                async with session.get(uri, headers=headers) as response:
                    if response.status != 200:
                        logger.info("Config server returned non-success status. status=%s path=%s", response.status, uri)
                        return None
                    return await response.read()
        except asyncio.TimeoutError:
            logger.error("Config server request timed out. path=%s timeout_seconds=%s", uri, self._timeout.total)
            return None
        except _FETCH_ERRORS as exc:
            logger.error("Config server request failed. path=%s error=%s", uri, exc)
            return None
        except Exception:
            logger.exception("Unexpected config server request error. path=%s", uri)
            return None
