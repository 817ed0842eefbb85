"""Workflow editor models — tool arguments and results for ``edit_workflow``."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

NOT_ALLOWED = "NOT_ALLOWED"


class EditMode(str, Enum):
    """How ``edit_workflow`` treats the fetched document."""

    DRY_RUN = "dry_run"
    APPLY = "apply"


class PatchOperation(BaseModel):
    """One RFC 6902 operation as supplied by the caller.

    Only ``op`` and ``path`` are checked here; ``from``/``value`` presence is
    enforced when the patch is applied.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    op: Literal["add", "remove", "replace", "move", "copy", "test"]
    path: str
    from_: str | None = Field(default=None, alias="from")
    value: Any = None

    def to_json(self) -> dict[str, Any]:
        """Dump back to wire form, keeping an explicit ``null`` value."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class EditWorkflowArgs(BaseModel):
    """Arguments accepted by the ``edit_workflow`` tool."""

    model_config = ConfigDict(extra="forbid")

    workflow_id: str = Field(alias="workflowId")
    mode: EditMode
    patch: list[PatchOperation]


class EditResult(BaseModel):
    """Structured tool result; only the fields that were set are serialized."""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool
    workflow_id: str | None = Field(default=None, alias="workflowId")
    applied: bool | None = None
    workflow: Any = None
    error: str | None = None
    details: dict[str, Any] | None = None

    @classmethod
    def not_allowed(cls, workflow_id: str) -> EditResult:
        return cls(ok=False, error=NOT_ALLOWED, details={"workflowId": workflow_id})

    @classmethod
    def success(cls, workflow_id: str, workflow: Any, *, applied: bool) -> EditResult:
        return cls(ok=True, workflow_id=workflow_id, applied=applied, workflow=workflow)

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
