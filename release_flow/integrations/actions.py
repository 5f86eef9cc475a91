"""
GitHub Actions Runner Surface

Reads the triggering event and writes step outputs and workflow commands.
"""

import json
import logging
import os
import sys
import uuid
from typing import Mapping, Optional, TextIO, Union

from release_flow.errors import ConfigurationError
from release_flow.models.event import WorkflowEvent

logger = logging.getLogger(__name__)


def load_event(environ: Optional[Mapping[str, str]] = None) -> WorkflowEvent:
    """
    Build the WorkflowEvent from GITHUB_EVENT_NAME, GITHUB_REF and the
    JSON payload at GITHUB_EVENT_PATH.

    Raises:
        ConfigurationError: If GITHUB_EVENT_NAME is missing or the payload is unreadable
    """
    environ = os.environ if environ is None else environ

    name = environ.get("GITHUB_EVENT_NAME", "")
    if not name:
        raise ConfigurationError("GITHUB_EVENT_NAME is not set; not running in a workflow?")

    payload = {}
    event_path = environ.get("GITHUB_EVENT_PATH")
    if event_path and os.path.exists(event_path):
        try:
            with open(event_path, encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read event payload {event_path}: {e}") from e

    return WorkflowEvent(name=name, ref=environ.get("GITHUB_REF", ""), payload=payload)


def _format_output(key: str, value: str) -> str:
    if "\n" not in value:
        return f"{key}={value}\n"
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return f"{key}<<{delimiter}\n{value}\n{delimiter}\n"


def set_outputs(
    outputs: Mapping[str, Union[str, int]],
    environ: Optional[Mapping[str, str]] = None,
) -> None:
    """Append step outputs to the $GITHUB_OUTPUT file."""
    environ = os.environ if environ is None else environ
    output_path = environ.get("GITHUB_OUTPUT")

    if not output_path:
        for key, value in outputs.items():
            logger.info(f"Output {key}={value} (GITHUB_OUTPUT not set)")
        return

    with open(output_path, "a", encoding="utf-8") as f:
        for key, value in outputs.items():
            f.write(_format_output(key, str(value)))


def _escape(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def notice(message: str, stream: Optional[TextIO] = None) -> None:
    """Emit a ::notice:: annotation on the workflow run."""
    stream = stream or sys.stdout
    stream.write(f"::notice::{_escape(message)}\n")


def set_failed(message: str, stream: Optional[TextIO] = None) -> None:
    """Emit an ::error:: annotation; the caller sets the exit status."""
    stream = stream or sys.stdout
    stream.write(f"::error::{_escape(message)}\n")
