"""
Pull Request Texts

Markdown posted by the release flow on the pull requests it opens.
"""

from release_flow.config import Settings


def build_explain_comment(settings: Settings) -> str:
    """
    Explain what happens once the release pull request is merged.

    Args:
        settings: Branch names and merge-back mode

    Returns:
        Markdown comment body
    """
    merge_back_source = (
        f"`{settings.prod_branch}`" if settings.merge_back_from_prod else "this release branch"
    )

    return "\n".join(
        [
            "## Release workflow",
            "",
            "This pull request was opened automatically by the release workflow.",
            "",
            "- Push any last fixes for this release to this branch.",
            f"- When this pull request is merged into `{settings.prod_branch}`, a release is "
            f"tagged from `{settings.prod_branch}` using the version in the branch name.",
            f"- {merge_back_source} is then merged back into `{settings.develop_branch}`. "
            "If that merge conflicts, a pull request is opened instead so the conflict "
            "can be resolved by hand.",
            "",
            "The release notes above were generated from the pull requests merged since "
            "the previous release. Edit the description before merging to change the "
            "published release notes.",
        ]
    )


def build_merge_back_body(source: str, target: str) -> str:
    """Body of the pull request opened when a merge-back conflicts."""
    return "\n".join(
        [
            f"Merging `{source}` into `{target}` after the release failed because "
            "the branches conflict.",
            "",
            "Please resolve the conflicts in this pull request and merge it to bring "
            f"`{target}` up to date with `{source}`.",
            "",
            "---",
            "",
            "*Opened automatically by the release workflow.*",
        ]
    )
