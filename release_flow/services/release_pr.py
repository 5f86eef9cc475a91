"""
Release PR Orchestrator

Cuts a release branch from the development branch and opens a pull request
into the production branch, or cuts a hotfix branch from the production branch.

Pipeline steps:
1. Resolve the base branch tip
2. Fetch the latest release (none yet is fine)
3. Resolve the version and branch name
4. Generate release notes since the latest release
5. Create the branch (and, for releases, the labelled pull request)
6. Report the pull requests mentioned in the notes
"""

import logging

from release_flow.config import Settings
from release_flow.integrations.github.comments import build_explain_comment
from release_flow.integrations.github.host import RepositoryHost
from release_flow.models.results import CandidateType, Result
from release_flow.services.versioning import branch_name, resolve_version
from release_flow.utils.helpers import (
    compose_release_pr_body,
    extract_pull_numbers,
    join_pull_numbers,
)

logger = logging.getLogger(__name__)

RELEASE_LABEL = "release"


class ReleasePROrchestrator:
    """Opens release and hotfix branches."""

    def __init__(self, host: RepositoryHost, settings: Settings):
        self.host = host
        self.settings = settings

    async def create_release_pr(self, is_hotfix: bool = False) -> Result:
        """
        Create a release branch and pull request, or a hotfix branch.

        Args:
            is_hotfix: Branch from production with the hotfix prefix and open no PR

        Returns:
            Result with the version, branch, pull request and referenced PRs

        Raises:
            VersionResolutionError: If the increment strategy cannot be applied
            HostAPIError: If any GitHub call fails (nothing is cleaned up)
        """
        settings = self.settings
        base_branch = settings.prod_branch if is_hotfix else settings.develop_branch
        prefix = settings.hotfix_branch_prefix if is_hotfix else settings.release_branch_prefix
        title_word = "Hotfix" if is_hotfix else "Release"

        # Step 1: Tip of the branch the new one is cut from
        base_sha = await self.host.get_branch_sha(base_branch)
        logger.info(f"create_release: Generating release notes for {base_sha}")

        # Step 2: Latest release, used as the version base and notes range start
        latest_release = await self.host.get_latest_release()
        latest_tag = latest_release.tag_name if latest_release else None

        # Step 3: Version and branch
        version = resolve_version(settings, latest_tag, base_sha)
        release_branch = branch_name(prefix, version)

        # Step 4: Release notes
        notes = await self.host.generate_release_notes(
            tag_name=version,
            target_commitish=base_branch,
            previous_tag_name=latest_tag,
        )
        body = compose_release_pr_body(notes.body, settings.release_summary)

        # Step 5: Branch and pull request
        pull_number = None
        if settings.dry_run:
            logger.info(
                f"create_release: Dry run: would have created release branch {release_branch}"
                f" and PR with body:\n{body}"
            )
        else:
            logger.info(f"create_release: Creating release branch {release_branch}")
            await self.host.create_ref(release_branch, base_sha)

            if is_hotfix:
                logger.info(
                    f"create_release: Hotfix release: created {release_branch}, push the fix "
                    f"to it and open a PR into {settings.prod_branch}"
                )
            else:
                pull_number = await self._open_pull_request(
                    f"{title_word} {notes.name or version}", body, release_branch
                )

        # Step 6: Pull requests mentioned in the notes
        pull_numbers = join_pull_numbers(extract_pull_numbers(notes.body))

        return Result(
            type=CandidateType.HOTFIX if is_hotfix else CandidateType.RELEASE,
            pull_number=pull_number,
            pull_numbers_in_release=pull_numbers,
            version=version,
            release_branch=release_branch,
            latest_release_tag_name=latest_tag,
        )

    async def _open_pull_request(self, title: str, body: str, release_branch: str) -> int:
        logger.info("create_release: Creating Pull Request")
        pull = await self.host.create_pull(
            title=title,
            body=body,
            head=release_branch,
            base=self.settings.prod_branch,
            maintainer_can_modify=False,
        )

        await self.host.add_labels(pull.number, [RELEASE_LABEL])
        await self.host.create_comment(pull.number, build_explain_comment(self.settings))

        logger.info(f"create_release: Pull request has been created at {pull.html_url}")
        return pull.number
