"""
GitHub Integration Module

Provides the repository host used by the release orchestrators.
"""

from release_flow.integrations.github.client import GitHubClient
from release_flow.integrations.github.comments import (
    build_explain_comment,
    build_merge_back_body,
)
from release_flow.integrations.github.host import RepositoryHost

__all__ = [
    "GitHubClient",
    "RepositoryHost",
    "build_explain_comment",
    "build_merge_back_body",
]
