"""
Shared Utility Functions

Pure text helpers for branch names, release notes and version identifiers.
"""

import re
from datetime import datetime, timezone
from typing import List, Optional

# "pull/<digits>" as it appears in generated release note links
PULL_REFERENCE_PATTERN = re.compile(r"pull/(\d+)")

SEMVER_PREFIX_PATTERN = re.compile(r"^\d+\.\d+\.\d+")


def extract_pull_numbers(notes_body: Optional[str]) -> List[int]:
    """
    Collect the pull request numbers referenced in a release notes body.

    Grammar: every occurrence of ``pull/<digits>`` counts, wherever it appears
    (typically ``https://github.com/<owner>/<repo>/pull/<n>`` links). Numbers
    mentioned twice, e.g. again in the "New Contributors" section, are counted
    once. This is a textual heuristic, not an authoritative list.

    Args:
        notes_body: Release notes markdown (may be None or empty)

    Returns:
        Distinct numbers sorted ascending
    """
    if not notes_body:
        return []

    numbers = {int(match) for match in PULL_REFERENCE_PATTERN.findall(notes_body)}
    return sorted(numbers)


def join_pull_numbers(numbers: List[int]) -> str:
    """Join pull request numbers as a comma separated string ("7,12")."""
    return ",".join(str(number) for number in numbers)


def compose_release_pr_body(notes_body: Optional[str], release_summary: str) -> str:
    """
    Build the release pull request description.

    The generated notes come first, followed by a "Release summary" section
    holding the configured summary text.
    """
    return f"{notes_body or ''}\n\n## Release summary\n\n{release_summary}\n"


def strip_prefix(branch: str, prefix: str) -> str:
    """Remove a branch prefix (e.g. "release/") when present."""
    if prefix and branch.startswith(prefix):
        return branch[len(prefix) :]
    return branch


def is_semver_like(value: str) -> bool:
    """True when the value starts with MAJOR.MINOR.PATCH digits."""
    return SEMVER_PREFIX_PATTERN.match(value) is not None


def hotfix_date_version(moment: Optional[datetime] = None) -> str:
    """
    Date based hotfix identifier: hotfix-YYYYMMDDHHmm, always on the UTC clock.

    Naive datetimes are taken to already be UTC.
    """
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)

    return f"hotfix-{moment.strftime('%Y%m%d%H%M')}"
