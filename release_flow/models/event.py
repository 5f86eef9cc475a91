"""
Workflow Event Model

The CI trigger that started the run.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class WorkflowEvent(BaseModel):
    """Triggering event of the workflow run."""

    name: str  # GITHUB_EVENT_NAME, e.g. pull_request, workflow_dispatch
    ref: str = ""  # GITHUB_REF, e.g. refs/heads/develop
    payload: Dict[str, Any] = {}

    @property
    def action(self) -> Optional[str]:
        return self.payload.get("action")

    @property
    def pull_request(self) -> Dict[str, Any]:
        return self.payload.get("pull_request") or {}

    @property
    def is_pull_request_closed(self) -> bool:
        return self.name == "pull_request" and self.action == "closed"

    @property
    def is_manual_dispatch(self) -> bool:
        return self.name == "workflow_dispatch"
