"""
Result Models

Structures returned by the orchestrators and propagated as workflow outputs.
"""

from enum import Enum
from typing import Dict, Optional, Union

from pydantic import BaseModel, Field


class CandidateType(str, Enum):
    """Release candidate classification of a pull request."""

    RELEASE = "release"
    HOTFIX = "hotfix"
    NONE = "none"


class Result(BaseModel):
    """Outcome of a release flow run."""

    type: CandidateType = Field(..., description="Path that ran: release, hotfix or none")
    version: Optional[str] = None
    release_branch: Optional[str] = None
    pull_number: Optional[int] = Field(
        None, description="Release pull request (absent for hotfix branches)"
    )
    pull_numbers_in_release: Optional[str] = Field(
        None, description="Comma separated pull requests mentioned in the release notes"
    )
    latest_release_tag_name: Optional[str] = None
    release_url: Optional[str] = None

    @classmethod
    def none(cls) -> "Result":
        return cls(type=CandidateType.NONE)

    def to_outputs(self) -> Dict[str, Union[str, int]]:
        """Flat mapping of the fields that are set, for the CI output channel."""
        return self.model_dump(exclude_none=True, mode="json")


class MergeStatus(str, Enum):
    """How a merge-back ended."""

    MERGED = "merged"
    UP_TO_DATE = "up_to_date"
    OPENED_FALLBACK_PR = "opened_fallback_pr"


class MergeOutcome(BaseModel):
    """Result of merging one branch into another."""

    status: MergeStatus
    source: str
    target: str
    sha: Optional[str] = None
    pull_number: Optional[int] = None
    pull_url: Optional[str] = None

    @property
    def needs_manual_resolution(self) -> bool:
        return self.status == MergeStatus.OPENED_FALLBACK_PR
