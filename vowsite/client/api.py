"""
Async HTTP client for the VowSite API, used by the display poller.
"""
import logging

import httpx
from pydantic import ValidationError

from vowsite.core.config import settings
from vowsite.core.errors import NetworkError
from vowsite.client.models import VowsPayload

logger = logging.getLogger(__name__)


class VowsApiClient:
    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.client_http_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "VowsApiClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, path: str) -> httpx.Response:
        try:
            return await self._client.get(path)
        except httpx.HTTPError as e:
            raise NetworkError(f"GET {path} failed: {type(e).__name__}: {e}") from e

    async def get_unlock_status(self) -> bool:
        resp = await self._get("/api/unlock-status")
        if resp.status_code != 200:
            raise NetworkError(f"GET /api/unlock-status returned {resp.status_code}")
        try:
            data = resp.json()
        except ValueError as e:
            raise NetworkError("GET /api/unlock-status returned invalid JSON") from e
        if not isinstance(data, dict) or not isinstance(data.get("is_unlocked"), bool):
            raise NetworkError("GET /api/unlock-status returned an unexpected payload")
        return data["is_unlocked"]

    async def get_vows(self) -> VowsPayload | None:
        """Published vows, or None when the API answers with anything but 200."""
        resp = await self._get("/api/vows")
        if resp.status_code != 200:
            logger.info("vows_not_available", extra={"status_code": resp.status_code})
            return None
        try:
            return VowsPayload.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise NetworkError("GET /api/vows returned an unexpected payload") from e
