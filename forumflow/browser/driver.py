"""Capability set a browser engine must expose to drive a forum session."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class PageDriver(Protocol):
    """Owns one browser/context/page triple for the length of a single run.

    Locating happens either by accessible role and name or by a CSS
    attribute pattern; nothing here depends on a concrete engine.
    """

    @property
    def has_page(self) -> bool:  # pragma: no cover - interface definition
        ...

    def launch(
        self,
        *,
        headless: bool,
        slow_mo_ms: int,
        timeout_ms: int,
        viewport: tuple[int, int] | None = None,
        user_agent: str | None = None,
    ) -> None:  # pragma: no cover - interface definition
        ...

    def goto(self, url: str) -> None:  # pragma: no cover - interface definition
        ...

    def wait_for_quiescence(self) -> None:  # pragma: no cover - interface definition
        ...

    def wait_for_url(self, pattern: str, *, timeout_ms: int) -> None:  # pragma: no cover - interface definition
        ...

    def current_url(self) -> str:  # pragma: no cover - interface definition
        ...

    def click_role(self, role: str, name: str, *, exact: bool = False) -> None:  # pragma: no cover
        ...

    def fill_role(self, role: str, name: str, value: str, *, exact: bool = False) -> None:  # pragma: no cover
        ...

    def click_first(self, selector: str) -> None:  # pragma: no cover - interface definition
        ...

    def fill(self, selector: str, value: str) -> None:  # pragma: no cover - interface definition
        ...

    def select_option(self, selector: str, value: str) -> None:  # pragma: no cover - interface definition
        ...

    def press(self, key: str) -> None:  # pragma: no cover - interface definition
        ...

    def text_of_first(self, selector: str) -> str | None:  # pragma: no cover - interface definition
        ...

    def texts_of_all(self, selector: str) -> list[str | None]:  # pragma: no cover - interface definition
        ...

    def inner_text_of_first(self, selector: str) -> str | None:  # pragma: no cover - interface definition
        ...

    def screenshot(self, path: Path, *, full_page: bool = True) -> None:  # pragma: no cover
        ...

    def close_context(self) -> None:  # pragma: no cover - interface definition
        ...

    def close_browser(self) -> None:  # pragma: no cover - interface definition
        ...
