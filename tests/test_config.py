"""
Tests for settings loading from action inputs and the runner environment.
"""

import pytest
from pydantic import ValidationError

from release_flow.config import Settings

RUNNER_VARIABLES = [
    "GITHUB_REPOSITORY",
    "GITHUB_TOKEN",
    "GITHUB_API_URL",
    "SLACK_OPTIONS",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in RUNNER_VARIABLES:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.prod_branch == "main"
    assert settings.develop_branch == "develop"
    assert settings.release_branch_prefix == "release/"
    assert settings.hotfix_branch_prefix == "hotfix/"
    assert settings.merge_back_from_prod is True
    assert settings.dry_run is False
    assert settings.version is None
    assert settings.version_increment is None
    assert settings.slack_destination is None


def test_reads_action_inputs(monkeypatch):
    monkeypatch.setenv("GITHUB_REPOSITORY", "acme/shop")
    monkeypatch.setenv("INPUT_PROD_BRANCH", "master")
    monkeypatch.setenv("INPUT_VERSION_INCREMENT", "minor")
    monkeypatch.setenv("INPUT_DRY_RUN", "true")
    monkeypatch.setenv("INPUT_MERGE_BACK_FROM_PROD", "false")
    monkeypatch.setenv("INPUT_RELEASE_SUMMARY", "Quarterly release")

    settings = Settings(_env_file=None)

    assert settings.repository == "acme/shop"
    assert settings.prod_branch == "master"
    assert settings.version_increment == "minor"
    assert settings.dry_run is True
    assert settings.merge_back_from_prod is False
    assert settings.release_summary == "Quarterly release"


def test_empty_inputs_are_unset(monkeypatch):
    monkeypatch.setenv("INPUT_VERSION", "")
    monkeypatch.setenv("INPUT_VERSION_INCREMENT", " ")

    settings = Settings(_env_file=None)

    assert settings.version is None
    assert settings.version_increment is None


def test_token_falls_back_to_runner_token(monkeypatch):
    monkeypatch.setenv("INPUT_GITHUB_TOKEN", "")
    monkeypatch.setenv("GITHUB_TOKEN", "ghs_runner")

    assert Settings(_env_file=None).token == "ghs_runner"

    monkeypatch.setenv("INPUT_GITHUB_TOKEN", "ghp_input")
    assert Settings(_env_file=None).token == "ghp_input"


def test_slack_falls_back_to_environment(monkeypatch):
    monkeypatch.setenv("INPUT_SLACK", "")
    monkeypatch.setenv("SLACK_OPTIONS", "https://hooks.slack.com/services/T0/B0/X")

    settings = Settings(_env_file=None)

    assert settings.slack_destination == "https://hooks.slack.com/services/T0/B0/X"


def test_settings_are_immutable():
    settings = Settings(_env_file=None)

    with pytest.raises(ValidationError):
        settings.prod_branch = "other"
