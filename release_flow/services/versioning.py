"""
Version & Branch Name Deriver

Maps a base branch, the latest release and the configured strategy into the
version string of a new release or hotfix, and the branch named after it.
"""

import logging
import re
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional, Tuple, Union

from packaging.version import InvalidVersion, Version

from release_flow.config import Settings
from release_flow.errors import InvalidVersionError
from release_flow.models.results import CandidateType
from release_flow.utils.helpers import hotfix_date_version, is_semver_like, strip_prefix

logger = logging.getLogger(__name__)

INCREMENT_STRATEGIES = (
    "major",
    "minor",
    "patch",
    "premajor",
    "preminor",
    "prepatch",
    "prerelease",
    "release",
)

_SEMVER_RE = re.compile(
    r"^(\d+)\.(\d+)\.(\d+)(?:-?([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?(?:\+[0-9A-Za-z.-]+)?$"
)

Identifier = Union[int, str]


@dataclass(frozen=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: Tuple[Identifier, ...] = ()

    def __str__(self) -> str:
        core = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            return f"{core}-{'.'.join(str(part) for part in self.prerelease)}"
        return core

    def bump(self, strategy: str) -> "SemVer":
        """Next version for the strategy, with npm ``semver.inc`` semantics."""
        if strategy == "premajor":
            return SemVer(self.major + 1, 0, 0, (0,))
        if strategy == "preminor":
            return SemVer(self.major, self.minor + 1, 0, (0,))
        if strategy == "prepatch":
            return SemVer(self.major, self.minor, self.patch + 1, (0,))
        if strategy == "major":
            # 2.0.0-1 -> 2.0.0, but 2.1.0-1 -> 3.0.0
            if self.minor or self.patch or not self.prerelease:
                return SemVer(self.major + 1, 0, 0)
            return SemVer(self.major, 0, 0)
        if strategy == "minor":
            if self.patch or not self.prerelease:
                return SemVer(self.major, self.minor + 1, 0)
            return SemVer(self.major, self.minor, 0)
        if strategy == "patch":
            if not self.prerelease:
                return SemVer(self.major, self.minor, self.patch + 1)
            return replace(self, prerelease=())
        if strategy == "prerelease":
            if not self.prerelease:
                return SemVer(self.major, self.minor, self.patch + 1, (0,))
            return replace(self, prerelease=_bump_identifiers(self.prerelease))
        if strategy == "release":
            if not self.prerelease:
                raise InvalidVersionError(f"Version {self} is not a prerelease")
            return replace(self, prerelease=())
        raise InvalidVersionError(
            f"Unknown version increment '{strategy}', expected one of: "
            f"{', '.join(INCREMENT_STRATEGIES)}"
        )


def _bump_identifiers(identifiers: Tuple[Identifier, ...]) -> Tuple[Identifier, ...]:
    """Increment the right-most numeric identifier, or append 0 when none is numeric."""
    parts = list(identifiers)
    for index in range(len(parts) - 1, -1, -1):
        if isinstance(parts[index], int):
            parts[index] += 1
            return tuple(parts)
    parts.append(0)
    return tuple(parts)


def _identifier(raw: str) -> Identifier:
    return int(raw) if raw.isdigit() else raw


def parse_version(value: str) -> SemVer:
    """
    Loosely parse a version or tag name.

    Accepts a leading "v" or "=", surrounding whitespace, semver prerelease and
    build suffixes, and anything PEP 440 understands (e.g. "1.4" or "v2").

    Raises:
        InvalidVersionError: If the value is not a version even loosely
    """
    text = (value or "").strip().lstrip("=vV").strip()

    match = _SEMVER_RE.match(text)
    if match:
        major, minor, patch, pre = match.groups()
        prerelease = tuple(_identifier(part) for part in pre.split(".")) if pre else ()
        return SemVer(int(major), int(minor), int(patch), prerelease)

    try:
        parsed = Version(text)
    except InvalidVersion as e:
        raise InvalidVersionError(f"Cannot parse version '{value}'") from e

    release = (tuple(parsed.release) + (0, 0, 0))[:3]
    prerelease: Tuple[Identifier, ...] = ()
    if parsed.pre is not None:
        prerelease = (parsed.pre[0], parsed.pre[1])
    elif parsed.dev is not None:
        prerelease = ("dev", parsed.dev)
    return SemVer(release[0], release[1], release[2], prerelease)


def increment_version(version: str, strategy: str) -> str:
    """
    Apply an increment strategy to a version string.

    Args:
        version: Base version, e.g. the latest release tag ("v1.4.0")
        strategy: One of INCREMENT_STRATEGIES

    Returns:
        The next version ("1.4.1")

    Raises:
        InvalidVersionError: Unknown strategy or unparsable base version
    """
    normalized = (strategy or "").strip().lower()
    if normalized not in INCREMENT_STRATEGIES:
        raise InvalidVersionError(
            f"Could not increment version {version} with {strategy}: unknown strategy"
        )

    try:
        return str(parse_version(version).bump(normalized))
    except InvalidVersionError as e:
        raise InvalidVersionError(
            f"Could not increment version {version} with {strategy}: {e}"
        ) from e


def resolve_version(
    settings: Settings, latest_tag: Optional[str], base_sha: str
) -> str:
    """
    Version for a new release or hotfix branch.

    An explicit version wins, then the increment strategy applied to the latest
    release tag (or 0.0.0), then the raw tip commit of the base branch.
    """
    if settings.version:
        logger.debug(f"Using explicit version {settings.version}")
        return settings.version

    if settings.version_increment:
        version = increment_version(latest_tag or "0.0.0", settings.version_increment)
        logger.debug(
            f"Incremented {latest_tag or '0.0.0'} with {settings.version_increment}: {version}"
        )
        return version

    logger.debug(f"No version configured, falling back to commit {base_sha}")
    return base_sha


def branch_name(prefix: str, version: str) -> str:
    """Release or hotfix branch for a version: prefix + version."""
    return f"{prefix}{version}"


def version_from_branch(
    candidate: CandidateType,
    head_branch: str,
    settings: Settings,
    merged_at: Optional[datetime] = None,
) -> str:
    """
    Version of a merged release candidate, read back from its branch name.

    Hotfix branches that do not carry a MAJOR.MINOR.PATCH name get a UTC date
    identifier from the merge time (or now).
    """
    if candidate == CandidateType.RELEASE:
        return strip_prefix(head_branch, settings.release_branch_prefix)

    if candidate == CandidateType.HOTFIX:
        version = strip_prefix(head_branch, settings.hotfix_branch_prefix)
        if is_semver_like(version):
            return version
        return hotfix_date_version(merged_at)

    raise InvalidVersionError(f"Pull request from {head_branch} is not a release candidate")
