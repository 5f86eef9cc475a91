from release_flow.services.classifier import classify_pull_request
from release_flow.services.dispatcher import dispatch
from release_flow.services.merge_back import try_merge
from release_flow.services.post_release import PostReleaseOrchestrator
from release_flow.services.release_pr import ReleasePROrchestrator

__all__ = [
    "classify_pull_request",
    "dispatch",
    "try_merge",
    "PostReleaseOrchestrator",
    "ReleasePROrchestrator",
]
