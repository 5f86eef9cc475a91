import asyncio
import json
import logging
import sys
from typing import Optional

from pydantic import ValidationError

from release_flow.config import Settings, get_settings
from release_flow.errors import ConfigurationError, PartialReleaseError
from release_flow.integrations import actions
from release_flow.integrations.github import GitHubClient
from release_flow.integrations.slack import SlackNotifier
from release_flow.models.event import WorkflowEvent
from release_flow.services.dispatcher import dispatch

logger = logging.getLogger("release_flow")


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.setLevel(logging.DEBUG if debug else logging.INFO)


def build_notifier(settings: Settings) -> Optional[SlackNotifier]:
    if not settings.slack_destination:
        return None
    try:
        return SlackNotifier.from_descriptor(
            settings.slack_destination, repository=settings.repository
        )
    except ConfigurationError as e:
        logger.warning(f"release-flow: Slack notifications disabled: {e}")
        return None


async def start(settings: Settings, event: WorkflowEvent) -> None:
    logger.info(
        f"release-flow: running with config "
        f"{settings.model_dump(exclude={'github_token', 'runner_token', 'slack', 'slack_options'})}"
    )

    host = GitHubClient(settings)
    notifier = build_notifier(settings)

    try:
        result = await dispatch(event, settings, host, notifier)
    except PartialReleaseError as e:
        # The release exists; report it even though the run fails
        actions.set_outputs(e.result.to_outputs())
        raise

    if result is not None:
        outputs = result.to_outputs()
        logger.info(f"release-flow: Setting output: {json.dumps(outputs)}")
        actions.set_outputs(outputs)


def run() -> int:
    """Console entry point. Returns the process exit status."""
    try:
        settings = get_settings()
    except ValidationError as e:
        configure_logging(False)
        actions.set_failed(f"Invalid configuration: {e}")
        return 1

    configure_logging(settings.debug)

    try:
        event = actions.load_event()
        asyncio.run(start(settings, event))
    except ConfigurationError as e:
        logger.error(f"release-flow: configuration error: {e}")
        actions.set_failed(str(e))
        return 1
    except Exception as e:
        logger.exception(f"release-flow: failed: {e}")
        actions.set_failed(str(e))
        return 1

    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
