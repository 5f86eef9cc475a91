"""
Entry Dispatcher

Routes the triggering workflow event to the matching orchestrator.
"""

import logging
from typing import Optional

from release_flow.config import Settings
from release_flow.integrations import actions
from release_flow.integrations.github.host import RepositoryHost
from release_flow.models.event import WorkflowEvent
from release_flow.models.results import Result
from release_flow.services.post_release import PostReleaseOrchestrator, ReleaseNotifier
from release_flow.services.release_pr import ReleasePROrchestrator

logger = logging.getLogger(__name__)


async def dispatch(
    event: WorkflowEvent,
    settings: Settings,
    host: RepositoryHost,
    notifier: Optional[ReleaseNotifier] = None,
) -> Optional[Result]:
    """
    Run the orchestrator for an event.

    - pull_request closed -> publish the release of a merged release candidate
    - workflow_dispatch -> open a release branch and PR, or a hotfix branch when
      dispatched from the production branch

    Returns:
        Result, or None when the event matches no path
    """
    if event.is_pull_request_closed:
        logger.info("Pull request closed. Running execute_on_release...")
        orchestrator = PostReleaseOrchestrator(host, settings, notifier)
        return await orchestrator.execute_on_release(event)

    if event.is_manual_dispatch:
        is_hotfix = event.ref == f"refs/heads/{settings.prod_branch}"
        logger.info(
            f"Workflow dispatched from {event.ref}. Running create_release_pr(is_hotfix={is_hotfix})..."
        )
        result = await ReleasePROrchestrator(host, settings).create_release_pr(is_hotfix)
        if is_hotfix and not settings.dry_run:
            actions.notice(
                f"Created a hotfix branch at {result.release_branch} from "
                f"{settings.prod_branch}. Push the fix to that branch and open a PR into "
                f"{settings.prod_branch}; the release workflow runs once it is merged."
            )
        return result

    logger.info(f"Event {event.name} ({event.action}) does not match any path. Skipping...")
    return None
