"""
Tests for the entry dispatcher (end-to-end against the fake host).
"""

import pytest

from release_flow.models.event import WorkflowEvent
from release_flow.models.results import CandidateType
from release_flow.services.dispatcher import dispatch
from tests.fakes import FakeRepositoryHost, make_settings, merged_pull


@pytest.mark.asyncio
async def test_manual_dispatch_on_develop_opens_release_pr():
    host = FakeRepositoryHost(latest_release="1.4.0")
    event = WorkflowEvent(name="workflow_dispatch", ref="refs/heads/develop")

    result = await dispatch(event, make_settings(version_increment="patch"), host)

    assert result.to_outputs() == {
        "type": "release",
        "version": "1.4.1",
        "release_branch": "release/1.4.1",
        "pull_number": 100,
        "pull_numbers_in_release": "7,12",
        "latest_release_tag_name": "1.4.0",
    }
    assert host.called("create_pull")[0]["title"] == "Release 1.4.1"


@pytest.mark.asyncio
async def test_manual_dispatch_on_production_cuts_hotfix_branch(capsys):
    host = FakeRepositoryHost(latest_release="1.4.0")
    event = WorkflowEvent(name="workflow_dispatch", ref="refs/heads/main")

    result = await dispatch(event, make_settings(), host)

    assert result.type == CandidateType.HOTFIX
    assert result.release_branch == "hotfix/main-sha"
    assert result.pull_number is None
    assert host.called("create_pull") == []
    assert "::notice::Created a hotfix branch at hotfix/main-sha" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_hotfix_detection_follows_configured_production_branch():
    host = FakeRepositoryHost(branches={"master": "master-sha", "develop": "develop-sha"})
    event = WorkflowEvent(name="workflow_dispatch", ref="refs/heads/master")

    result = await dispatch(event, make_settings(prod_branch="master"), host)

    assert result.type == CandidateType.HOTFIX
    assert result.release_branch == "hotfix/master-sha"


@pytest.mark.asyncio
async def test_closed_release_pull_request_publishes_release():
    host = FakeRepositoryHost(pulls={7: merged_pull(number=7, head="release/2.0.0")})
    event = WorkflowEvent(
        name="pull_request",
        payload={"action": "closed", "pull_request": {"number": 7, "merged": True}},
    )

    result = await dispatch(event, make_settings(), host)

    assert result.to_outputs() == {
        "type": "release",
        "version": "2.0.0",
        "release_url": "https://github.com/acme/shop/releases/tag/2.0.0",
    }
    assert host.mutations == ["create_release", "merge"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "event",
    [
        WorkflowEvent(name="push", ref="refs/heads/develop"),
        WorkflowEvent(name="pull_request", payload={"action": "opened"}),
    ],
)
async def test_unmatched_events_do_nothing(event):
    host = FakeRepositoryHost()

    assert await dispatch(event, make_settings(), host) is None
    assert host.calls == []


@pytest.mark.asyncio
async def test_dry_run_hotfix_dispatch_announces_nothing(capsys):
    host = FakeRepositoryHost(latest_release="1.4.0")
    event = WorkflowEvent(name="workflow_dispatch", ref="refs/heads/main")

    result = await dispatch(event, make_settings(dry_run=True), host)

    assert result.type == CandidateType.HOTFIX
    assert host.mutations == []
    assert "::notice::" not in capsys.readouterr().out
