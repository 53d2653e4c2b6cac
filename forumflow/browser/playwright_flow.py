"""Playwright implementation of the page driver capability set.

This module wraps the Playwright sync API: it launches Chromium (falling back
to installed Edge/Chrome channels), opens a context with the configured
viewport and user agent, applies the per-operation timeout, and exposes
role/label and attribute-pattern interactions through the Locator API so
selectors remain resilient against DOM changes.
"""

from __future__ import annotations

from pathlib import Path

from playwright.sync_api import (
    Browser,
    BrowserContext,
    Locator,
    Page,
    Playwright,
    Error as PlaywrightError,
    sync_playwright,
)

from forumflow.core.errors import ForumFlowError
from forumflow.core.logger import get_logger


class BrowserLaunchError(ForumFlowError):
    """Raised when no Chromium-based browser could be started."""


class PlaywrightDriver:
    """Owns the Playwright process, browser, context and page of one run.

    Instances are single-use: create one per run, call :meth:`launch`, and
    release with :meth:`close_context` followed by :meth:`close_browser`.
    Values passed to the fill helpers are never logged.
    """

    def __init__(self, *, logger=None) -> None:
        self.logger = logger or get_logger()
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None
        self._browser_channel: str | None = None

    # ------------------------------------------------------------------
    # Lifecycle helpers
    @property
    def has_page(self) -> bool:
        return self._page is not None

    def launch(
        self,
        *,
        headless: bool,
        slow_mo_ms: int,
        timeout_ms: int,
        viewport: tuple[int, int] | None = None,
        user_agent: str | None = None,
    ) -> None:
        """Start Playwright and open a page with ``timeout_ms`` as default timeout."""

        if self._page is not None:
            raise ForumFlowError("PlaywrightDriver already launched; create a new driver per run")

        self._playwright = sync_playwright().start()
        self._browser = self._launch_browser(self._playwright, headless=headless, slow_mo_ms=slow_mo_ms)
        self.logger.debug("browser launched channel=%s headless=%s", self._browser_channel, headless)

        context_kwargs: dict[str, object] = {}
        if viewport is not None:
            context_kwargs["viewport"] = {"width": viewport[0], "height": viewport[1]}
        if user_agent:
            context_kwargs["user_agent"] = user_agent
        self._context = self._browser.new_context(**context_kwargs)
        self._context.set_default_timeout(timeout_ms)

        page = self._context.new_page()
        page.set_default_timeout(timeout_ms)
        self._page = page

    def close_context(self) -> None:
        """Close the browser context (and with it the page)."""
        context = self._context
        self._context = None
        self._page = None
        if context is not None:
            context.close()

    def close_browser(self) -> None:
        """Close the browser and stop the Playwright driver process."""
        browser = self._browser
        playwright = self._playwright
        self._browser = None
        self._playwright = None
        self._browser_channel = None
        try:
            if browser is not None:
                browser.close()
        finally:
            if playwright is not None:
                playwright.stop()

    # ------------------------------------------------------------------
    # Navigation helpers
    def goto(self, url: str) -> None:
        self._require_page().goto(url)

    def wait_for_quiescence(self) -> None:
        """Block until the page has had no network activity for 500 ms."""
        self._require_page().wait_for_load_state("networkidle")

    def wait_for_url(self, pattern: str, *, timeout_ms: int) -> None:
        self._require_page().wait_for_url(pattern, timeout=timeout_ms)

    def current_url(self) -> str:
        return self._require_page().url

    # ------------------------------------------------------------------
    # Interactions
    def click_role(self, role: str, name: str, *, exact: bool = False) -> None:
        self.logger.debug("click role=%s name=%s exact=%s", role, name, exact)
        self._require_page().get_by_role(role, name=name, exact=exact).click()  # type: ignore[arg-type]

    def fill_role(self, role: str, name: str, value: str, *, exact: bool = False) -> None:
        self.logger.debug("fill role=%s name=%s", role, name)
        self._require_page().get_by_role(role, name=name, exact=exact).fill(value)  # type: ignore[arg-type]

    def click_first(self, selector: str) -> None:
        self.logger.debug("click first match of %s", selector)
        self._require_page().locator(selector).first.click()

    def fill(self, selector: str, value: str) -> None:
        self.logger.debug("fill %s", selector)
        self._require_page().locator(selector).first.fill(value)

    def select_option(self, selector: str, value: str) -> None:
        self._require_page().locator(selector).first.select_option(value)

    def press(self, key: str) -> None:
        self._require_page().keyboard.press(key)

    # ------------------------------------------------------------------
    # Queries
    def text_of_first(self, selector: str) -> str | None:
        """Return ``textContent`` of the first match, ``None`` when nothing matches."""
        locator = self._first_or_none(selector)
        if locator is None:
            return None
        return locator.text_content()

    def texts_of_all(self, selector: str) -> list[str | None]:
        """Return ``textContent`` of every match in document order."""
        return [element.text_content() for element in self._require_page().locator(selector).all()]

    def inner_text_of_first(self, selector: str) -> str | None:
        """Return the rendered text of the first match, ``None`` when nothing matches."""
        locator = self._first_or_none(selector)
        if locator is None:
            return None
        return locator.inner_text()

    def screenshot(self, path: Path, *, full_page: bool = True) -> None:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        self._require_page().screenshot(path=str(target), full_page=full_page, type="png")

    # ------------------------------------------------------------------
    # Internal helpers
    def _require_page(self) -> Page:
        if self._page is None:
            raise ForumFlowError("Page not initialized")
        return self._page

    def _first_or_none(self, selector: str) -> Locator | None:
        # count() does not wait, so absent elements do not cost a full timeout
        locator = self._require_page().locator(selector)
        if locator.count() == 0:
            return None
        return locator.first

    def _launch_browser(self, playwright: Playwright, *, headless: bool, slow_mo_ms: int) -> Browser:
        attempts: list[tuple[str | None, str]] = [
            (None, "chromium"),
            ("msedge", "msedge"),
            ("chrome", "chrome"),
        ]
        last_exc: PlaywrightError | None = None
        for channel, label in attempts:
            try:
                if channel is None:
                    browser = playwright.chromium.launch(headless=headless, slow_mo=slow_mo_ms)
                else:
                    browser = playwright.chromium.launch(headless=headless, slow_mo=slow_mo_ms, channel=channel)
                self._browser_channel = label
                return browser
            except PlaywrightError as exc:
                last_exc = exc
                continue
        playwright.stop()
        self._playwright = None
        raise BrowserLaunchError(
            "Unable to start Chromium; run `python -m playwright install chromium` or install Edge/Chrome"
        ) from last_exc
