"""
Post-Merge Release Orchestrator

Runs when a pull request is closed. For merged release or hotfix pull
requests it publishes the release, merges back into the development branch
and announces the release.
"""

import logging
from typing import Optional, Protocol

from release_flow.config import Settings
from release_flow.errors import (
    ConfigurationError,
    HostAPIError,
    NotificationError,
    PartialReleaseError,
)
from release_flow.integrations.github.host import RepositoryHost
from release_flow.models.event import WorkflowEvent
from release_flow.models.github import ReleaseView
from release_flow.models.results import CandidateType, MergeOutcome, Result
from release_flow.services.classifier import classify_pull_request
from release_flow.services.merge_back import try_merge
from release_flow.services.versioning import version_from_branch

logger = logging.getLogger(__name__)


class ReleaseNotifier(Protocol):
    async def notify(self, release: ReleaseView) -> None:
        ...


class PostReleaseOrchestrator:
    """Publishes releases for merged release candidates."""

    def __init__(
        self,
        host: RepositoryHost,
        settings: Settings,
        notifier: Optional[ReleaseNotifier] = None,
    ):
        self.host = host
        self.settings = settings
        self.notifier = notifier

    async def execute_on_release(self, event: WorkflowEvent) -> Result:
        """
        Publish the release for a merged release candidate.

        Args:
            event: pull_request closed event

        Returns:
            Result with type, version and release URL, or type none

        Raises:
            ConfigurationError: If the event carries no pull request number
            HostAPIError: If a call before the release was created fails
            PartialReleaseError: If the release exists but merge-back failed
        """
        if self.settings.dry_run:
            logger.info("on-release: dry run. Exiting...")
            return Result.none()

        payload_pr = event.pull_request
        if not payload_pr.get("merged"):
            logger.info("on-release: pull request is not merged. Exiting...")
            return Result.none()

        number = payload_pr.get("number")
        if not number:
            raise ConfigurationError("Pull request number is missing from the event payload")

        # The event payload is not trusted as complete
        pull_request = await self.host.get_pull(int(number))
        candidate = classify_pull_request(pull_request, self.settings, require_merged=True)
        if candidate == CandidateType.NONE:
            logger.info(
                f"on-release: #{pull_request.number} ({pull_request.head} -> "
                f"{pull_request.base}) is not a release candidate. Exiting..."
            )
            return Result.none()

        version = version_from_branch(
            candidate, pull_request.head, self.settings, pull_request.merged_at
        )
        logger.info(f"on-release: {candidate.value}({version}): Generating release")

        default_body = (
            f"{'Hotfix release' if candidate == CandidateType.HOTFIX else 'Release'} {version}"
        )
        release = await self.host.create_release(
            tag_name=version,
            target_commitish=self.settings.prod_branch,
            name=version,
            body=pull_request.body or default_body,
        )

        result = Result(type=candidate, version=version, release_url=release.html_url)

        logger.info(f"on-release: {candidate.value}({version}): Execute merge workflow")
        source = self.settings.prod_branch if self.settings.merge_back_from_prod else pull_request.head
        outcome = await self._merge_back(source, result)
        if outcome.needs_manual_resolution:
            logger.warning(
                f"on-release: {source} conflicts with {self.settings.develop_branch}, "
                f"resolve it in PR #{outcome.pull_number}"
            )

        logger.info("on-release: success")

        await self._notify(release)

        return result

    async def _merge_back(self, source: str, result: Result) -> MergeOutcome:
        try:
            return await try_merge(self.host, source, self.settings.develop_branch)
        except HostAPIError as e:
            logger.error(
                f"on-release: release {result.version} was published but merging {source} "
                f"into {self.settings.develop_branch} failed: {e}"
            )
            raise PartialReleaseError(
                f"Release {result.version} was published at {result.release_url}, but merging "
                f"{source} into {self.settings.develop_branch} failed: {e}. "
                f"Merge it manually.",
                result=result,
            ) from e

    async def _notify(self, release: ReleaseView) -> None:
        if self.notifier is None:
            return

        logger.info(f"post-release: process release {release.name}")
        try:
            await self.notifier.notify(release)
        except NotificationError as e:
            logger.warning(f"post-release: notification failed, continuing: {e}")
            return
        except Exception as e:
            # The release is already published; chat delivery never fails the run
            logger.warning(f"post-release: unexpected notifier error, continuing: {e}")
            return
        logger.info("post-release: success")
