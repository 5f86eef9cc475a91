# Slack integration module
from release_flow.integrations.slack.client import SlackNotifier
from release_flow.integrations.slack.parser import SlackDestination, parse_destination

__all__ = ["SlackNotifier", "SlackDestination", "parse_destination"]
