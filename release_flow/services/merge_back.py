"""
Merge-Back Engine

Merges one branch into another after a release. A conflict is not an error:
a pull request is opened instead so someone can resolve it.
"""

import logging

from release_flow.errors import MergeConflictError
from release_flow.integrations.github.comments import build_merge_back_body
from release_flow.integrations.github.host import RepositoryHost
from release_flow.models.results import MergeOutcome, MergeStatus

logger = logging.getLogger(__name__)


async def try_merge(host: RepositoryHost, source: str, target: str) -> MergeOutcome:
    """
    Merge source into target, falling back to a pull request on conflict.

    Args:
        host: Repository host
        source: Branch to merge from (e.g. main)
        target: Branch to merge into (e.g. develop)

    Returns:
        MergeOutcome: MERGED, UP_TO_DATE or OPENED_FALLBACK_PR

    Raises:
        HostAPIError: Any failure other than a merge conflict
    """
    logger.info(f"Merging {source} into {target}")

    try:
        sha = await host.merge(
            base=target, head=source, commit_message=f"Merge {source} into {target}"
        )
    except MergeConflictError as e:
        logger.warning(f"Could not merge {source} into {target} ({e}), opening a pull request")
        pull = await host.create_pull(
            title=f"Merge {source} into {target}",
            body=build_merge_back_body(source, target),
            head=source,
            base=target,
            maintainer_can_modify=False,
        )
        logger.info(f"Opened PR #{pull.number} to merge {source} into {target}")
        return MergeOutcome(
            status=MergeStatus.OPENED_FALLBACK_PR,
            source=source,
            target=target,
            pull_number=pull.number,
            pull_url=pull.html_url,
        )

    if sha is None:
        return MergeOutcome(status=MergeStatus.UP_TO_DATE, source=source, target=target)

    return MergeOutcome(status=MergeStatus.MERGED, source=source, target=target, sha=sha)
