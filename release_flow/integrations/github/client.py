"""
GitHub API Client

Responsibilities:
- Branch lookup and ref creation
- Releases and generated release notes
- Pull requests, labels and comments
- Branch merges (merge-back)

Implements the RepositoryHost protocol on top of PyGithub. Blocking PyGithub
calls run in a worker thread so the orchestrators can await them.
"""

import asyncio
import logging
from typing import Any, Callable, List, Optional

from github import Auth, Github
from github.GithubException import GithubException, UnknownObjectException
from github.Repository import Repository

from release_flow.config import Settings, get_settings
from release_flow.errors import ConfigurationError, HostAPIError, MergeConflictError
from release_flow.models.github import (
    CreatedPull,
    PullRequestView,
    ReleaseNotes,
    ReleaseView,
)

logger = logging.getLogger(__name__)


def _describe(e: GithubException) -> str:
    if isinstance(e.data, dict) and e.data.get("message"):
        return str(e.data["message"])
    return str(e)


class GitHubClient:
    """GitHub API client wrapper."""

    def __init__(self, settings: Optional[Settings] = None, client: Optional[Github] = None):
        settings = settings or get_settings()
        if not settings.repository:
            raise ConfigurationError("GITHUB_REPOSITORY is not configured")
        if client is None and not settings.token:
            raise ConfigurationError("github_token input or GITHUB_TOKEN is not configured")

        self.client = client or Github(
            auth=Auth.Token(settings.token), base_url=settings.github_api_url
        )
        self.repo: Repository = self.client.get_repo(settings.repository, lazy=True)
        logger.info(f"GitHub client initialized for {settings.repository}")

    async def _call(self, description: str, func: Callable[..., Any], *args, **kwargs) -> Any:
        """Run a PyGithub call off the event loop, translating its errors."""
        try:
            return await asyncio.to_thread(func, *args, **kwargs)
        except GithubException as e:
            logger.error(f"GitHub API error while trying to {description}: {e}")
            raise HostAPIError(
                f"Failed to {description} ({e.status}): {_describe(e)}", status=e.status
            ) from e

    async def get_branch_sha(self, branch: str) -> str:
        """
        Get the tip commit of a branch.

        Args:
            branch: Branch name

        Returns:
            Commit SHA
        """
        ref = await self._call(f"get branch {branch}", self.repo.get_branch, branch)
        return ref.commit.sha

    async def get_latest_release(self) -> Optional[ReleaseView]:
        """Latest release, or None when nothing has been released yet."""
        try:
            release = await asyncio.to_thread(self.repo.get_latest_release)
        except UnknownObjectException:
            logger.info("Repository has no releases yet")
            return None
        except GithubException as e:
            logger.error(f"GitHub API error fetching latest release: {e}")
            raise HostAPIError(
                f"Failed to get latest release ({e.status}): {_describe(e)}", status=e.status
            ) from e

        return ReleaseView(
            id=release.id,
            tag_name=release.tag_name,
            name=release.title,
            html_url=release.html_url,
            target_commitish=release.target_commitish,
        )

    async def generate_release_notes(
        self,
        tag_name: str,
        target_commitish: str,
        previous_tag_name: Optional[str] = None,
    ) -> ReleaseNotes:
        """
        Ask GitHub to generate release notes for the commits since previous_tag_name.

        Args:
            tag_name: Tag of the upcoming release (need not exist yet)
            target_commitish: Branch or commit the release will point at
            previous_tag_name: Start of the range (None for the whole history)

        Returns:
            ReleaseNotes with the generated title and markdown body
        """
        kwargs = {"target_commitish": target_commitish}
        if previous_tag_name:
            kwargs["previous_tag_name"] = previous_tag_name

        notes = await self._call(
            f"generate release notes for {tag_name}",
            self.repo.generate_release_notes,
            tag_name,
            **kwargs,
        )
        return ReleaseNotes(name=notes.name or "", body=notes.body or "")

    async def create_ref(self, branch: str, sha: str) -> None:
        """Create a branch pointing at sha."""
        await self._call(
            f"create branch {branch}",
            self.repo.create_git_ref,
            ref=f"refs/heads/{branch}",
            sha=sha,
        )
        logger.info(f"Created branch: {branch} at {sha}")

    async def create_pull(
        self,
        title: str,
        body: str,
        head: str,
        base: str,
        maintainer_can_modify: bool = False,
    ) -> CreatedPull:
        pr = await self._call(
            f"create pull request {head} -> {base}",
            self.repo.create_pull,
            title=title,
            body=body,
            head=head,
            base=base,
            maintainer_can_modify=maintainer_can_modify,
        )
        logger.info(f"Created PR #{pr.number}: {pr.html_url}")
        return CreatedPull(number=pr.number, html_url=pr.html_url)

    async def add_labels(self, issue_number: int, labels: List[str]) -> None:
        issue = await self._call(f"get issue #{issue_number}", self.repo.get_issue, issue_number)
        await self._call(f"label #{issue_number}", issue.add_to_labels, *labels)
        logger.info(f"Added labels to #{issue_number}: {labels}")

    async def create_comment(self, issue_number: int, body: str) -> None:
        issue = await self._call(f"get issue #{issue_number}", self.repo.get_issue, issue_number)
        await self._call(f"comment on #{issue_number}", issue.create_comment, body)

    async def get_pull(self, number: int) -> PullRequestView:
        """
        Get a pull request by number.

        Args:
            number: Pull request number

        Returns:
            PullRequestView with merge state, branches, labels and body
        """
        pr = await self._call(f"get pull request #{number}", self.repo.get_pull, number)
        return PullRequestView(
            number=pr.number,
            merged=bool(pr.merged),
            merged_at=pr.merged_at,
            base=pr.base.ref,
            head=pr.head.ref,
            labels=[label.name for label in pr.labels],
            body=pr.body,
            html_url=pr.html_url,
        )

    async def create_release(
        self, tag_name: str, target_commitish: str, name: str, body: str
    ) -> ReleaseView:
        release = await self._call(
            f"create release {tag_name}",
            self.repo.create_git_release,
            tag=tag_name,
            name=name,
            message=body,
            target_commitish=target_commitish,
        )
        logger.info(f"Created release {tag_name}: {release.html_url}")
        return ReleaseView(
            id=release.id,
            tag_name=release.tag_name,
            name=release.title,
            html_url=release.html_url,
            target_commitish=release.target_commitish,
        )

    async def merge(self, base: str, head: str, commit_message: str) -> Optional[str]:
        """
        Merge head into base with the merges API.

        Returns:
            Merge commit SHA, or None when there was nothing to merge (204)

        Raises:
            MergeConflictError: GitHub answered 409 Merge Conflict
            HostAPIError: Any other failure
        """
        try:
            commit = await asyncio.to_thread(self.repo.merge, base, head, commit_message)
        except GithubException as e:
            if e.status == 409:
                logger.warning(f"Merge conflict merging {head} into {base}")
                raise MergeConflictError(
                    f"Merge conflict merging {head} into {base}: {_describe(e)}", status=409
                ) from e
            logger.error(f"Failed to merge {head} into {base}: {e}")
            raise HostAPIError(
                f"Failed to merge {head} into {base} ({e.status}): {_describe(e)}",
                status=e.status,
            ) from e

        if commit is None:
            logger.info(f"{base} already contains {head}, nothing to merge")
            return None

        logger.info(f"Merged {head} into {base}: {commit.sha}")
        return commit.sha
