"""Tests for the n8n-mcp CLI."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from n8n_mcp.cli import main
from n8n_mcp.errors import RemoteStoreError

_ENV = {
    "N8N_BASE_URL": "https://n8n.example.com",
    "N8N_API_KEY": "key",
    "ALLOWED_WORKFLOW_IDS": "wf1",
}


@pytest.fixture
def env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key, value in _ENV.items():
        monkeypatch.setenv(key, value)
    for key in ("HOST", "PORT", "MCP_AUTH_TOKEN"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def no_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV:
        monkeypatch.delenv(key, raising=False)


class TestVersion:
    def test_version(self) -> None:
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output


class TestTools:
    def test_table(self) -> None:
        result = CliRunner().invoke(main, ["tools"])
        assert result.exit_code == 0
        assert "edit_workflow" in result.output

    def test_json(self) -> None:
        result = CliRunner().invoke(main, ["tools", "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["tools"][0]["inputSchema"]["required"] == ["workflowId", "mode", "patch"]


class TestServe:
    def test_missing_config_exits(self, no_env: None) -> None:
        result = CliRunner().invoke(main, ["serve"])
        assert result.exit_code == 1
        assert "Missing N8N_BASE_URL" in result.output

    def test_runs_uvicorn(self, env: None) -> None:
        with patch("uvicorn.run") as mock_run:
            result = CliRunner().invoke(main, ["serve", "--port", "9999"])

        assert result.exit_code == 0, result.output
        mock_run.assert_called_once()
        kwargs = mock_run.call_args.kwargs
        assert kwargs["port"] == 9999
        assert kwargs["host"] == "0.0.0.0"


class TestEdit:
    def _invoke(self, args: list[str], result: Any = None, **kwargs: Any) -> Any:
        with patch("n8n_mcp.tools.EditWorkflowTool.invoke", new_callable=AsyncMock) as mock_invoke:
            if "side_effect" in kwargs:
                mock_invoke.side_effect = kwargs["side_effect"]
            else:
                mock_invoke.return_value = result
            outcome = CliRunner().invoke(main, ["edit", *args], input=kwargs.get("input"))
        return outcome, mock_invoke

    def test_dry_run_by_default(self, env: None) -> None:
        out, mock_invoke = self._invoke(
            ["wf1"], {"ok": True, "workflowId": "wf1", "applied": False, "workflow": {}}
        )
        assert out.exit_code == 0, out.output
        arguments = mock_invoke.await_args.args[0]
        assert arguments == {"workflowId": "wf1", "mode": "dry_run", "patch": []}
        assert '"applied": false' in out.output

    def test_apply_with_patch_from_stdin(self, env: None) -> None:
        patch_ops = [{"op": "replace", "path": "/active", "value": True}]
        out, mock_invoke = self._invoke(
            ["wf1", "--apply", "--patch", "-"],
            {"ok": True, "workflowId": "wf1", "applied": True, "workflow": {"active": True}},
            input=json.dumps(patch_ops),
        )
        assert out.exit_code == 0, out.output
        arguments = mock_invoke.await_args.args[0]
        assert arguments["mode"] == "apply"
        assert arguments["patch"] == patch_ops

    def test_not_allowed_exits_nonzero(self, env: None) -> None:
        out, _ = self._invoke(
            ["wf2"], {"ok": False, "error": "NOT_ALLOWED", "details": {"workflowId": "wf2"}}
        )
        assert out.exit_code == 1
        assert "NOT_ALLOWED" in out.output

    def test_remote_error(self, env: None) -> None:
        out, _ = self._invoke(["wf1"], side_effect=RemoteStoreError(500, "down"))
        assert out.exit_code == 1
        assert "Edit error" in out.output

    def test_invalid_patch_file(self, env: None) -> None:
        out, _ = self._invoke(["wf1", "--patch", "-"], {}, input="{not json")
        assert out.exit_code == 1
        assert "Invalid patch file" in out.output
