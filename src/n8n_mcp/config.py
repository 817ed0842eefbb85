"""Server configuration — n8n credentials, allowlist, inbound auth, listen address."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from n8n_mcp.errors import ConfigError, ConfigMissingError

DEFAULT_PORT = 8080
DEFAULT_HOST = "0.0.0.0"
DEFAULT_TIMEOUT = 30.0


def parse_allowlist(raw: str) -> frozenset[str]:
    """Split a comma-separated id list, trimming items and dropping blanks."""
    return frozenset(item.strip() for item in raw.split(",") if item.strip())


class Settings(BaseModel):
    """Immutable process-wide configuration.

    Built once at startup (usually via :meth:`from_env`) and handed to the
    components that need it, so tests can inject their own values.
    """

    model_config = ConfigDict(frozen=True)

    n8n_base_url: str
    n8n_api_key: str
    allowed_workflow_ids: frozenset[str] = Field(min_length=1)
    mcp_auth_token: str = ""
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Read settings from *environ* (defaults to ``os.environ``).

        Raises
        ------
        ConfigMissingError
            If ``N8N_BASE_URL``, ``N8N_API_KEY`` or ``ALLOWED_WORKFLOW_IDS`` is
            absent or empty.
        ConfigError
            If an optional value cannot be parsed.
        """
        env = os.environ if environ is None else environ

        base_url = env.get("N8N_BASE_URL", "").strip()
        if not base_url:
            raise ConfigMissingError("N8N_BASE_URL")
        api_key = env.get("N8N_API_KEY", "")
        if not api_key:
            raise ConfigMissingError("N8N_API_KEY")
        allowed = parse_allowlist(env.get("ALLOWED_WORKFLOW_IDS", ""))
        if not allowed:
            raise ConfigMissingError("ALLOWED_WORKFLOW_IDS")

        try:
            return cls(
                n8n_base_url=base_url.rstrip("/"),
                n8n_api_key=api_key,
                allowed_workflow_ids=allowed,
                mcp_auth_token=env.get("MCP_AUTH_TOKEN", ""),
                host=env.get("HOST") or DEFAULT_HOST,
                port=env.get("PORT") or DEFAULT_PORT,
                timeout=env.get("N8N_TIMEOUT") or DEFAULT_TIMEOUT,
            )
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc
