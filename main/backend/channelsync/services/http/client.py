from __future__ import annotations

import hashlib
import os
import time
import logging
from typing import Any, Callable, Dict, Optional

import httpx
from pydantic import ValidationError
from prometheus_client import Counter

from ..channels.errors import FetchError
from ..channels.types import Page, PageEnvelope


logger = logging.getLogger(__name__)

REMOTE_FETCH_COUNT = Counter(
    "channel_remote_fetch_total",
    "Remote channel list fetches",
    ["channel", "outcome"],
)


class ApiClient:
    """Async client for the remote content API.

    Every request is signed with ``ts``/``apikey``/``hash`` when a key pair is
    configured. There is no retry here: a failed call surfaces as ``FetchError``.
    """

    def __init__(
        self,
        *,
        base_url: str,
        public_key: str | None = None,
        private_key: str | None = None,
        timeout: float = 20.0,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.public_key = public_key
        self.private_key = private_key
        self.timeout = timeout
        self._clock = clock
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            proxy=None if transport is not None else self._build_proxy(),
            headers={"Accept": "application/json"},
        )

    @staticmethod
    def _build_proxy() -> Optional[str]:
        return os.getenv("HTTPS_PROXY") or os.getenv("https_proxy") or None

    def _auth_params(self) -> Dict[str, str]:
        if not self.public_key or not self.private_key:
            return {}
        ts = str(int(self._clock()))
        digest = hashlib.md5(f"{ts}{self.private_key}{self.public_key}".encode("utf-8")).hexdigest()
        return {"ts": ts, "apikey": self.public_key, "hash": digest}

    async def get_json(self, path: str, *, params: Optional[Dict[str, Any]] = None) -> Any:
        query = {**(params or {}), **self._auth_params()}
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            resp = await self._client.get(path.lstrip("/"), params=query)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.warning("http.get_json failed url=%s status=%s", url, status)
            raise FetchError(f"remote API returned HTTP {status}", status_code=status, url=url) from exc
        except httpx.HTTPError as exc:
            logger.warning("http.get_json failed url=%s err=%s", url, exc)
            raise FetchError(f"remote API request failed: {exc}", url=url) from exc
        except ValueError as exc:
            logger.warning("http.get_json invalid json url=%s err=%s", url, exc)
            raise FetchError(f"remote API returned invalid JSON: {exc}", url=url) from exc

    async def fetch_page(self, channel: str, params: Dict[str, Any]) -> Page:
        try:
            payload = await self.get_json(channel, params=params)
            try:
                envelope = PageEnvelope.model_validate(payload)
            except ValidationError as exc:
                raise FetchError(f"unexpected list envelope: {exc.error_count()} errors", url=f"{self.base_url}/{channel}") from exc
        except FetchError:
            REMOTE_FETCH_COUNT.labels(channel, "error").inc()
            raise
        REMOTE_FETCH_COUNT.labels(channel, "ok").inc()
        return envelope.data

    async def aclose(self) -> None:
        await self._client.aclose()
