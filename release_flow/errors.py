"""
Release Flow Errors

Everything not explicitly downgraded bubbles up to the entry point, which
reports the message and fails the workflow run.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from release_flow.models.results import Result


class ReleaseFlowError(Exception):
    """Base class for all release flow errors."""


class ConfigurationError(ReleaseFlowError):
    """Required settings or event data are missing or invalid."""


class VersionResolutionError(ReleaseFlowError):
    """The next version could not be computed."""


class InvalidVersionError(VersionResolutionError):
    """A version string or increment strategy is not usable."""


class HostAPIError(ReleaseFlowError):
    """A call to the repository host failed."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class MergeConflictError(HostAPIError):
    """The host refused a merge because the branches conflict."""


class NotificationError(ReleaseFlowError):
    """Chat delivery failed. Never fatal."""


class PartialReleaseError(ReleaseFlowError):
    """
    The release was published but merging back into the development branch
    failed. The release is not rolled back; ``result`` describes it.
    """

    def __init__(self, message: str, result: "Result"):
        super().__init__(message)
        self.result = result
