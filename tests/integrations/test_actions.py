"""
Tests for the GitHub Actions runner surface.
"""

import io
import json

import pytest

from release_flow.errors import ConfigurationError
from release_flow.integrations import actions


def test_load_event_reads_payload(tmp_path):
    event_file = tmp_path / "event.json"
    event_file.write_text(
        json.dumps({"action": "closed", "pull_request": {"number": 5, "merged": True}})
    )

    event = actions.load_event(
        {
            "GITHUB_EVENT_NAME": "pull_request",
            "GITHUB_REF": "refs/pull/5/merge",
            "GITHUB_EVENT_PATH": str(event_file),
        }
    )

    assert event.is_pull_request_closed
    assert event.pull_request["number"] == 5
    assert event.ref == "refs/pull/5/merge"


def test_load_event_without_payload():
    event = actions.load_event(
        {"GITHUB_EVENT_NAME": "workflow_dispatch", "GITHUB_REF": "refs/heads/develop"}
    )

    assert event.is_manual_dispatch
    assert event.payload == {}


def test_load_event_requires_event_name():
    with pytest.raises(ConfigurationError):
        actions.load_event({})


def test_load_event_invalid_json(tmp_path):
    event_file = tmp_path / "event.json"
    event_file.write_text("{not json")

    with pytest.raises(ConfigurationError):
        actions.load_event(
            {"GITHUB_EVENT_NAME": "pull_request", "GITHUB_EVENT_PATH": str(event_file)}
        )


def test_set_outputs_appends_to_output_file(tmp_path):
    output_file = tmp_path / "output"
    output_file.write_text("existing=1\n")

    actions.set_outputs(
        {"type": "release", "pull_number": 12, "version": "1.4.1"},
        {"GITHUB_OUTPUT": str(output_file)},
    )

    assert output_file.read_text().splitlines() == [
        "existing=1",
        "type=release",
        "pull_number=12",
        "version=1.4.1",
    ]


def test_set_outputs_multiline_value(tmp_path):
    output_file = tmp_path / "output"

    actions.set_outputs({"notes": "line one\nline two"}, {"GITHUB_OUTPUT": str(output_file)})

    lines = output_file.read_text().splitlines()
    assert lines[0].startswith("notes<<ghadelimiter_")
    delimiter = lines[0].split("<<", 1)[1]
    assert lines[1:] == ["line one", "line two", delimiter]


def test_set_outputs_without_output_file_only_logs(caplog):
    with caplog.at_level("INFO"):
        actions.set_outputs({"type": "none"}, {})

    assert "type=none" in caplog.text


def test_workflow_commands_escape_newlines():
    stream = io.StringIO()

    actions.notice("first\nsecond 100%", stream=stream)
    actions.set_failed("boom", stream=stream)

    assert stream.getvalue() == "::notice::first%0Asecond 100%25\n::error::boom\n"
