"""
Release Candidate Classifier

Decides whether a pull request represents a pending release or hotfix.
"""

from release_flow.config import Settings
from release_flow.models.github import PullRequestView
from release_flow.models.results import CandidateType


def classify_pull_request(
    pull_request: PullRequestView, settings: Settings, require_merged: bool = False
) -> CandidateType:
    """
    Classify a pull request. First matching rule wins:

    1. ``require_merged`` and the pull request is not merged -> none
    2. head starts with the release prefix, base is the production branch -> release
    3. head starts with the hotfix prefix, base is the production branch -> hotfix
    4. anything else -> none
    """
    if require_merged and not pull_request.merged:
        return CandidateType.NONE

    targets_production = pull_request.base == settings.prod_branch

    if targets_production and pull_request.head.startswith(settings.release_branch_prefix):
        return CandidateType.RELEASE

    if targets_production and pull_request.head.startswith(settings.hotfix_branch_prefix):
        return CandidateType.HOTFIX

    return CandidateType.NONE
