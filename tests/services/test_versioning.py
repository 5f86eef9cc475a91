"""
Tests for the version and branch name deriver.
"""

from datetime import datetime, timezone

import pytest

from release_flow.errors import InvalidVersionError, VersionResolutionError
from release_flow.models.results import CandidateType
from release_flow.services.versioning import (
    branch_name,
    increment_version,
    parse_version,
    resolve_version,
    version_from_branch,
)
from tests.fakes import make_settings


class TestIncrementVersion:
    """npm semver.inc compatible increments."""

    @pytest.mark.parametrize(
        "version,strategy,expected",
        [
            ("1.4.0", "patch", "1.4.1"),
            ("1.4.0", "minor", "1.5.0"),
            ("1.4.0", "major", "2.0.0"),
            ("0.0.0", "patch", "0.0.1"),
            ("1.2.3", "premajor", "2.0.0-0"),
            ("1.2.3", "preminor", "1.3.0-0"),
            ("1.2.3", "prepatch", "1.2.4-0"),
            ("1.2.3", "prerelease", "1.2.4-0"),
            ("1.2.4-0", "prerelease", "1.2.4-1"),
            ("1.2.4-rc.1", "prerelease", "1.2.4-rc.2"),
            ("1.2.4-beta", "prerelease", "1.2.4-beta.0"),
            ("1.2.4-1", "patch", "1.2.4"),
            ("2.0.0-1", "major", "2.0.0"),
            ("2.1.0-1", "major", "3.0.0"),
            ("1.3.0-0", "minor", "1.3.0"),
            ("1.2.4-rc.1", "release", "1.2.4"),
        ],
    )
    def test_strategies(self, version, strategy, expected):
        assert increment_version(version, strategy) == expected

    @pytest.mark.parametrize(
        "version,expected",
        [
            ("v1.4.0", "1.4.1"),
            ("=1.4.0", "1.4.1"),
            (" 1.4.0 ", "1.4.1"),
            ("1.4", "1.4.1"),
            ("v2", "2.0.1"),
            ("1.4.0+build.5", "1.4.1"),
        ],
    )
    def test_loose_parsing(self, version, expected):
        assert increment_version(version, "patch") == expected

    def test_strategy_is_case_insensitive(self):
        assert increment_version("1.0.0", "Minor") == "1.1.0"

    def test_unknown_strategy(self):
        with pytest.raises(InvalidVersionError):
            increment_version("1.0.0", "sideways")

    def test_unparsable_version(self):
        with pytest.raises(InvalidVersionError):
            increment_version("not-a-version", "patch")

    def test_release_of_stable_version_fails(self):
        with pytest.raises(InvalidVersionError):
            increment_version("1.0.0", "release")

    def test_invalid_version_is_a_resolution_error(self):
        with pytest.raises(VersionResolutionError):
            increment_version("1.0.0", "")


def test_parse_version_pep440_prerelease():
    parsed = parse_version("1.2rc3")
    assert (parsed.major, parsed.minor, parsed.patch) == (1, 2, 0)
    assert parsed.prerelease == ("rc", 3)


class TestResolveVersion:
    def test_explicit_version_wins(self):
        settings = make_settings(version="3.0.0", version_increment="patch")
        assert resolve_version(settings, "1.4.0", "abc123") == "3.0.0"

    def test_increment_from_latest_release(self):
        settings = make_settings(version_increment="patch")
        assert resolve_version(settings, "1.4.0", "abc123") == "1.4.1"

    def test_increment_without_releases_starts_from_zero(self):
        settings = make_settings(version_increment="minor")
        assert resolve_version(settings, None, "abc123") == "0.1.0"

    def test_falls_back_to_commit_sha(self):
        settings = make_settings()
        assert resolve_version(settings, "1.4.0", "abc123") == "abc123"

    def test_empty_inputs_are_unset(self):
        settings = make_settings(version="", version_increment="  ")
        assert resolve_version(settings, "1.4.0", "abc123") == "abc123"

    def test_bad_strategy_raises(self):
        settings = make_settings(version_increment="bogus")
        with pytest.raises(InvalidVersionError):
            resolve_version(settings, "1.4.0", "abc123")


def test_branch_name():
    assert branch_name("release/", "1.4.1") == "release/1.4.1"
    assert branch_name("hotfix/", "abc123") == "hotfix/abc123"


class TestVersionFromBranch:
    merged_at = datetime(2024, 3, 5, 14, 30, tzinfo=timezone.utc)

    def test_release_branch(self):
        settings = make_settings()
        assert (
            version_from_branch(CandidateType.RELEASE, "release/2.0.0", settings, self.merged_at)
            == "2.0.0"
        )

    def test_hotfix_semver_branch_keeps_version(self):
        settings = make_settings()
        assert (
            version_from_branch(CandidateType.HOTFIX, "hotfix/1.2.3", settings, self.merged_at)
            == "1.2.3"
        )

    def test_hotfix_named_branch_uses_merge_date(self):
        settings = make_settings()
        assert (
            version_from_branch(CandidateType.HOTFIX, "hotfix/urgent-fix", settings, self.merged_at)
            == "hotfix-202403051430"
        )

    def test_hotfix_without_merge_time_uses_now(self):
        settings = make_settings()
        version = version_from_branch(CandidateType.HOTFIX, "hotfix/urgent-fix", settings, None)
        assert version.startswith("hotfix-")

    def test_custom_prefixes(self):
        settings = make_settings(release_branch_prefix="rel-", hotfix_branch_prefix="fix-")
        assert version_from_branch(CandidateType.RELEASE, "rel-1.0.0", settings) == "1.0.0"
        assert version_from_branch(CandidateType.HOTFIX, "fix-1.0.1", settings) == "1.0.1"

    def test_none_candidate_raises(self):
        with pytest.raises(InvalidVersionError):
            version_from_branch(CandidateType.NONE, "feature/x", make_settings())
