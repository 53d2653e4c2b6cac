from __future__ import annotations

from dataclasses import dataclass
import time
from typing import Any, Callable, Sequence

from .errors import DeadlineExceededError, StageError
from .logger import get_logger


ProgressCB = Callable[[str, str], None]


@dataclass(frozen=True, slots=True)
class Stage:
    """One named step of a pipeline and the error kind its failures map to."""

    name: str
    action: Callable[[], Any]
    error_cls: type[StageError] = StageError


class Pipeline:
    """Runs stages strictly in order, aborting on the first failure.

    Any exception escaping a stage is wrapped into that stage's error class, so
    callers only ever see ``StageError`` subclasses. Nothing is retried.
    """

    def __init__(
        self,
        stages: Sequence[Stage],
        *,
        logger=None,
        progress_cb: ProgressCB | None = None,
        deadline_ms: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.stages = tuple(stages)
        self.logger = logger or get_logger()
        self.progress_cb = progress_cb
        self.deadline_ms = deadline_ms
        self._clock = clock

    def run(self) -> dict[str, Any]:
        def progress(stage: str, detail: str = ""):
            if self.progress_cb:
                self.progress_cb(stage, detail)
            self.logger.info("%s - %s", stage, detail)

        started = self._clock()
        total = len(self.stages)
        results: dict[str, Any] = {}
        for index, stage in enumerate(self.stages, start=1):
            label = f"[{index}/{total}] {stage.name}"
            self._check_deadline(stage, started)
            progress(label, "started")
            try:
                results[stage.name] = stage.action()
            except StageError:
                raise
            except Exception as e:  # noqa: BLE001
                raise stage.error_cls(stage.name, e) from e
            progress(label, "done")
        return results

    def _check_deadline(self, stage: Stage, started: float) -> None:
        if self.deadline_ms is None:
            return
        elapsed_ms = (self._clock() - started) * 1000
        if elapsed_ms > self.deadline_ms:
            raise DeadlineExceededError(
                stage.name,
                message=f"run deadline of {self.deadline_ms} ms exceeded before {stage.name} ({elapsed_ms:.0f} ms elapsed)",
            )
