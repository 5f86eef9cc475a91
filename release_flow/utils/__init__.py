"""
Utility package exports
"""

from release_flow.utils.helpers import (
    compose_release_pr_body,
    extract_pull_numbers,
    hotfix_date_version,
    is_semver_like,
    join_pull_numbers,
    strip_prefix,
)

__all__ = [
    "compose_release_pr_body",
    "extract_pull_numbers",
    "hotfix_date_version",
    "is_semver_like",
    "join_pull_numbers",
    "strip_prefix",
]
