"""N8nClient — minimal async client for the n8n public REST API."""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from n8n_mcp.config import DEFAULT_TIMEOUT
from n8n_mcp.errors import RemoteStoreError

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-N8N-API-KEY"


class N8nClient:
    """Reads and writes whole workflow documents.

    Every call opens its own :class:`httpx.AsyncClient`, is bounded by
    *timeout* and is never retried.  Pass *transport* to route requests
    somewhere other than the network (e.g. ``httpx.MockTransport`` in tests).
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    async def get_workflow(self, workflow_id: str) -> Any:
        """``GET /api/v1/workflows/{id}``."""
        return await self._request("GET", self._workflow_path(workflow_id))

    async def update_workflow(self, workflow_id: str, workflow: Any) -> Any:
        """``PUT /api/v1/workflows/{id}`` with the full document as body."""
        return await self._request("PUT", self._workflow_path(workflow_id), body=workflow)

    @staticmethod
    def _workflow_path(workflow_id: str) -> str:
        return f"/api/v1/workflows/{quote(workflow_id, safe='')}"

    async def _request(self, method: str, path: str, body: Any = None) -> Any:
        headers = {
            API_KEY_HEADER: self._api_key,
            "Content-Type": "application/json",
        }
        content = json.dumps(body) if body is not None else None

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(method, path, headers=headers, content=content)
        except httpx.HTTPError as exc:
            logger.warning("n8n %s %s failed: %s", method, path, exc)
            raise RemoteStoreError(detail=str(exc) or type(exc).__name__) from exc

        data = self._decode(response.text)
        if not response.is_success:
            raise RemoteStoreError(response.status_code, data)
        logger.debug("n8n %s %s -> %d", method, path, response.status_code)
        return data

    @staticmethod
    def _decode(text: str) -> Any:
        """Parse *text* as JSON, falling back to the raw string."""
        if not text:
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            return text
