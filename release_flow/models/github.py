"""
GitHub Data Models

Read-only views of host entities consumed by the orchestrators.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class PullRequestView(BaseModel):
    """Pull request as seen by the release flow."""

    model_config = ConfigDict(frozen=True)

    number: int
    merged: bool = False
    merged_at: Optional[datetime] = None
    base: str  # base branch name
    head: str  # head branch name
    labels: List[str] = []
    body: Optional[str] = None
    html_url: Optional[str] = None


class ReleaseView(BaseModel):
    """Published release."""

    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    tag_name: str
    name: Optional[str] = None
    html_url: Optional[str] = None
    target_commitish: Optional[str] = None


class ReleaseNotes(BaseModel):
    """Release notes generated by the host for a tag range."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    body: str = ""


class CreatedPull(BaseModel):
    """Pull request freshly opened by the release flow."""

    model_config = ConfigDict(frozen=True)

    number: int
    html_url: Optional[str] = None
