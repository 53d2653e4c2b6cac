"""Custom exceptions used across forumflow."""

from __future__ import annotations


class ForumFlowError(Exception):
    """Base error for the application."""


class ConfigError(ForumFlowError):
    """Configuration related error."""


class StageError(ForumFlowError):
    """Raised when one stage of the session pipeline fails.

    Carries the failing stage name and the underlying cause so callers can
    report where the run stopped without parsing messages.
    """

    def __init__(self, stage: str, cause: BaseException | None = None, message: str | None = None) -> None:
        self.stage = stage
        self.cause = cause
        if message is None:
            message = f"{stage} failed: {cause}" if cause is not None else f"{stage} failed"
        super().__init__(message)


class InitializationError(StageError):
    """Browser, context or page could not be created."""


class NavigationError(StageError):
    """URL load or quiescence wait failed."""


class AuthenticationError(StageError):
    """Login affordance missing, submission failed or redirect not observed."""


class ExtractionError(StageError):
    """Hard failure while reading topic metadata."""


class ScreenshotError(StageError):
    """Screenshot could not be written."""


class DeadlineExceededError(StageError):
    """The end-to-end run deadline elapsed before a stage could start."""
