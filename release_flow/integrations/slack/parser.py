"""
Slack Destination Parser

Parses the `slack` input (or SLACK_OPTIONS) into a destination.

Accepted forms:
    https://hooks.slack.com/services/T000/B000/XXXX
    {"webhook_url": "https://hooks.slack.com/...", "username": "release-bot"}
    {"token": "xoxb-...", "channel": "#releases", "icon_emoji": ":rocket:"}

Mappings may be written as JSON or YAML.
"""

from typing import Optional

import yaml
from pydantic import BaseModel, ValidationError, model_validator

from release_flow.errors import ConfigurationError


class SlackDestination(BaseModel):
    """Where and how to post release announcements."""

    webhook_url: Optional[str] = None
    token: Optional[str] = None
    channel: Optional[str] = None
    username: Optional[str] = None
    icon_emoji: Optional[str] = None
    text: Optional[str] = None  # overrides the default announcement line

    @model_validator(mode="after")
    def _check_target(self):
        if not self.webhook_url and not (self.token and self.channel):
            raise ValueError("either webhook_url or both token and channel are required")
        return self

    @property
    def uses_webhook(self) -> bool:
        return bool(self.webhook_url)


def parse_destination(descriptor: str) -> SlackDestination:
    """
    Parse a Slack destination descriptor.

    Args:
        descriptor: Webhook URL, or a JSON/YAML mapping of options

    Returns:
        SlackDestination

    Raises:
        ConfigurationError: If the descriptor is empty or malformed
    """
    text = (descriptor or "").strip()
    if not text:
        raise ConfigurationError("Slack destination is empty")

    if text.startswith(("https://", "http://")):
        return SlackDestination(webhook_url=text)

    try:
        options = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid Slack options: {e}") from e

    if not isinstance(options, dict):
        raise ConfigurationError(
            "Slack options must be a webhook URL or a mapping of options"
        )

    # "webhook" is accepted as a shorthand for "webhook_url"
    if "webhook" in options and "webhook_url" not in options:
        options["webhook_url"] = options.pop("webhook")

    try:
        return SlackDestination(**options)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid Slack options: {e}") from e
