"""
Slack Release Notifier

Responsibilities:
- Announce a published release in a Slack channel
- Incoming webhooks (WebhookClient) or bot tokens (WebClient.chat_postMessage)
- Delivery failures surface as NotificationError, which callers log and ignore
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError, SlackClientError
from slack_sdk.webhook import WebhookClient

from release_flow.errors import NotificationError
from release_flow.integrations.slack.parser import SlackDestination, parse_destination
from release_flow.models.github import ReleaseView

logger = logging.getLogger(__name__)


class SlackNotifier:
    """Posts release announcements to Slack."""

    def __init__(
        self,
        destination: SlackDestination,
        repository: str = "",
        webhook_client: Optional[WebhookClient] = None,
        web_client: Optional[WebClient] = None,
    ):
        self.destination = destination
        self.repository = repository
        self._webhook_client = webhook_client
        self._web_client = web_client

    @classmethod
    def from_descriptor(cls, descriptor: str, repository: str = "") -> "SlackNotifier":
        return cls(parse_destination(descriptor), repository=repository)

    @property
    def webhook_client(self) -> WebhookClient:
        if self._webhook_client is None:
            self._webhook_client = WebhookClient(self.destination.webhook_url)
        return self._webhook_client

    @property
    def web_client(self) -> WebClient:
        if self._web_client is None:
            self._web_client = WebClient(token=self.destination.token)
        return self._web_client

    def build_message(self, release: ReleaseView) -> Dict[str, Any]:
        """
        Build the announcement payload.

        Returns:
            Dict with a plain-text fallback and Block Kit blocks
        """
        name = release.name or release.tag_name
        where = f" of {self.repository}" if self.repository else ""
        text = self.destination.text or f"Release {name}{where} has been published"

        if release.html_url:
            summary = f":rocket: *{text}*\n<{release.html_url}|View release {name}>"
        else:
            summary = f":rocket: *{text}*"

        blocks: List[Dict[str, Any]] = [
            {"type": "section", "text": {"type": "mrkdwn", "text": summary}},
            {
                "type": "context",
                "elements": [{"type": "mrkdwn", "text": f"Tag: `{release.tag_name}`"}],
            },
        ]
        return {"text": f"{text}: {release.html_url or release.tag_name}", "blocks": blocks}

    async def notify(self, release: ReleaseView) -> None:
        """
        Announce a release.

        Raises:
            NotificationError: If Slack rejected or never received the message
        """
        message = self.build_message(release)
        extra = {}
        if self.destination.username:
            extra["username"] = self.destination.username
        if self.destination.icon_emoji:
            extra["icon_emoji"] = self.destination.icon_emoji

        try:
            if self.destination.uses_webhook:
                response = await asyncio.to_thread(
                    self.webhook_client.send_dict, {**message, **extra}
                )
                if response.status_code != 200:
                    raise NotificationError(
                        f"Slack webhook returned {response.status_code}: {response.body}"
                    )
            else:
                await asyncio.to_thread(
                    self.web_client.chat_postMessage,
                    channel=self.destination.channel,
                    **message,
                    **extra,
                )
        except NotificationError:
            raise
        except SlackApiError as e:
            logger.error(f"Slack API error: {e.response['error']}")
            raise NotificationError(f"Slack API error: {e.response['error']}") from e
        except (SlackClientError, OSError) as e:
            logger.error(f"Error sending Slack notification: {e}")
            raise NotificationError(f"Error sending Slack notification: {e}") from e
        except Exception as e:
            logger.error(f"Unexpected error sending Slack notification: {e}")
            raise NotificationError(f"Unexpected error sending Slack notification: {e}") from e

        logger.info(f"Sent Slack notification for release {release.tag_name}")
