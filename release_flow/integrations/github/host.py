"""
Repository Host Interface

The operations the release flow needs from the source-control host. The
orchestrators depend on this protocol only, so they can run against an
in-memory fake in tests.
"""

from typing import List, Optional, Protocol

from release_flow.models.github import (
    CreatedPull,
    PullRequestView,
    ReleaseNotes,
    ReleaseView,
)


class RepositoryHost(Protocol):
    async def get_branch_sha(self, branch: str) -> str:
        """Tip commit SHA of a branch."""
        ...

    async def get_latest_release(self) -> Optional[ReleaseView]:
        """Latest published release, or None when the repository has none."""
        ...

    async def generate_release_notes(
        self,
        tag_name: str,
        target_commitish: str,
        previous_tag_name: Optional[str] = None,
    ) -> ReleaseNotes:
        ...

    async def create_ref(self, branch: str, sha: str) -> None:
        """Create refs/heads/<branch> pointing at sha."""
        ...

    async def create_pull(
        self,
        title: str,
        body: str,
        head: str,
        base: str,
        maintainer_can_modify: bool = False,
    ) -> CreatedPull:
        ...

    async def add_labels(self, issue_number: int, labels: List[str]) -> None:
        ...

    async def create_comment(self, issue_number: int, body: str) -> None:
        ...

    async def get_pull(self, number: int) -> PullRequestView:
        ...

    async def create_release(
        self, tag_name: str, target_commitish: str, name: str, body: str
    ) -> ReleaseView:
        ...

    async def merge(self, base: str, head: str, commit_message: str) -> Optional[str]:
        """
        Merge head into base.

        Returns the merge commit SHA, or None when base already contains head.

        Raises:
            MergeConflictError: The branches conflict
            HostAPIError: Any other failure
        """
        ...
