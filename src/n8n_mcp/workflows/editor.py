"""WorkflowEditor — allowlist check, fetch, optional patch, optional write."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from n8n_mcp.patch import apply_patch
from n8n_mcp.utils.telemetry import (
    ATTR_APPLIED,
    ATTR_EDIT_MODE,
    ATTR_PATCH_SIZE,
    ATTR_WORKFLOW_ID,
    get_tracer,
)
from n8n_mcp.workflows.models import EditMode, EditResult

if TYPE_CHECKING:
    from n8n_mcp.workflows.client import N8nClient

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class WorkflowEditor:
    """Edits allowlisted workflows held by the n8n API.

    ``edit()`` runs a strictly sequential read-patch-write:

    1. **Allowlist** — unknown ids are rejected with ``NOT_ALLOWED`` before any
       remote call.
    2. **Fetch** — ``GET`` the full document.
    3. **Dry run** — return the fetched document untouched, ignoring *patch*.
    4. **Apply** — patch a private copy; only if every operation succeeds is the
       result ``PUT`` back.

    Remote and patch failures propagate as exceptions.
    """

    def __init__(self, client: N8nClient, allowed_workflow_ids: frozenset[str]) -> None:
        self._client = client
        self._allowed = allowed_workflow_ids

    def is_allowed(self, workflow_id: str) -> bool:
        return workflow_id in self._allowed

    async def edit(
        self,
        workflow_id: str,
        mode: EditMode,
        patch: Sequence[Mapping[str, Any]],
    ) -> EditResult:
        mode = EditMode(mode)
        with _tracer.start_as_current_span("workflow.edit") as span:
            span.set_attribute(ATTR_WORKFLOW_ID, workflow_id)
            span.set_attribute(ATTR_EDIT_MODE, mode.value)
            span.set_attribute(ATTR_PATCH_SIZE, len(patch))

            if not self.is_allowed(workflow_id):
                logger.warning("Rejected edit of non-allowlisted workflow %s", workflow_id)
                return EditResult.not_allowed(workflow_id)

            workflow = await self._client.get_workflow(workflow_id)

            if mode is EditMode.DRY_RUN:
                span.set_attribute(ATTR_APPLIED, False)
                return EditResult.success(workflow_id, workflow, applied=False)

            patched = apply_patch(workflow, patch)
            await self._client.update_workflow(workflow_id, patched)
            logger.info("Applied %d patch operation(s) to workflow %s", len(patch), workflow_id)
            span.set_attribute(ATTR_APPLIED, True)
            return EditResult.success(workflow_id, patched, applied=True)
