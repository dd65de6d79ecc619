"""Exception hierarchy.

Data-quality problems (a malformed feed record, a missing price) and
rejected keystrokes are not errors: the pipeline drops or defaults them.
Only failures the caller has to act on are raised.
"""
from __future__ import annotations


class SwapDeskError(Exception):
    """Base class for all swapdesk errors."""


class FeedUnavailableError(SwapDeskError):
    """The price feed could not be fetched or returned an unusable payload."""

    def __init__(self, message: str, url: str = "", status: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class SwapValidationError(SwapDeskError, ValueError):
    """User-facing validation failure, e.g. submitting an empty amount."""


class ConfigError(SwapDeskError, ValueError):
    """Invalid configuration."""
