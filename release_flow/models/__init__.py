# Shared data models
from release_flow.models.event import WorkflowEvent
from release_flow.models.github import (
    CreatedPull,
    PullRequestView,
    ReleaseNotes,
    ReleaseView,
)
from release_flow.models.results import (
    CandidateType,
    MergeOutcome,
    MergeStatus,
    Result,
)

__all__ = [
    "WorkflowEvent",
    "CreatedPull",
    "PullRequestView",
    "ReleaseNotes",
    "ReleaseView",
    "CandidateType",
    "MergeOutcome",
    "MergeStatus",
    "Result",
]
