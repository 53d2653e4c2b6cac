"""Result types produced by a session run."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Union

from forumflow.core.errors import StageError


@dataclass(frozen=True, slots=True)
class TopicInfo:
    """Metadata snapshot of the opened topic."""

    title: str
    author: str
    url: str
    category: str
    tags: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class AutomationSuccess:
    """Outcome of a run where every stage completed."""

    message: str
    topic_info: TopicInfo
    screenshot_path: Path
    success: Literal[True] = field(default=True, init=False)


@dataclass(frozen=True, slots=True)
class AutomationFailure:
    """Outcome of a run aborted by a stage error.

    ``screenshot_path`` names where the error screenshot was attempted; the
    file only exists if that best-effort capture succeeded.
    """

    message: str
    error: StageError
    screenshot_path: Path
    success: Literal[False] = field(default=False, init=False)


AutomationResult = Union[AutomationSuccess, AutomationFailure]
