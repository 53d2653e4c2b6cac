"""Session runner that logs into the forum and captures the first topic."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from forumflow.browser.driver import PageDriver
from forumflow.browser.playwright_flow import PlaywrightDriver
from forumflow.config import AutomationConfig
from forumflow.core.errors import (
    AuthenticationError,
    ExtractionError,
    InitializationError,
    NavigationError,
    ScreenshotError,
    StageError,
)
from forumflow.core.logger import get_logger
from forumflow.core.pipeline import Pipeline, ProgressCB, Stage
from .extract import extract_topic_info
from .models import AutomationFailure, AutomationResult, AutomationSuccess, TopicInfo


DriverFactory = Callable[[], PageDriver]


class SessionRunner:
    """Executes initialize -> navigate -> login -> open topic -> extract -> screenshot.

    Every stage failure, including a driver factory that cannot build a
    driver, is converted into an :class:`AutomationFailure` rather than raised.
    A fresh driver is created for each run and is always released before
    ``run`` returns. Calling ``run`` concurrently on the same instance is not
    supported.
    """

    def __init__(
        self,
        driver_factory: DriverFactory | None = None,
        *,
        logger=None,
        progress_cb: ProgressCB | None = None,
    ) -> None:
        self.logger = logger or get_logger()
        self.driver_factory = driver_factory or (lambda: PlaywrightDriver(logger=self.logger))
        self.progress_cb = progress_cb
        self._driver: PageDriver | None = None

    def run(self, config: AutomationConfig) -> AutomationResult:
        settings = config.settings
        try:
            driver = self._create_driver()
            results = Pipeline(
                self._stages(driver, config),
                logger=self.logger,
                progress_cb=self.progress_cb,
                deadline_ms=settings.run_deadline_ms,
            ).run()
            topic_info: TopicInfo = results["extract-info"]
            self._log_summary(topic_info)
            return AutomationSuccess(
                message="Automation completed successfully",
                topic_info=topic_info,
                screenshot_path=settings.success_screenshot_path,
            )
        except StageError as error:
            self.logger.error(
                "session.runner failed at stage=%s: %s (error screenshot: %s)",
                error.stage,
                error,
                settings.failure_screenshot_path,
            )
            self._capture_failure_screenshot(settings.failure_screenshot_path)
            return AutomationFailure(
                message="Automation failed",
                error=error,
                screenshot_path=settings.failure_screenshot_path,
            )
        finally:
            self._cleanup()

    # ------------------------------------------------------------------
    def _create_driver(self) -> PageDriver:
        try:
            driver = self.driver_factory()
        except Exception as exc:
            raise InitializationError("initialize", exc) from exc
        self._driver = driver
        return driver

    def _stages(self, driver: PageDriver, config: AutomationConfig) -> list[Stage]:
        return [
            Stage("initialize", lambda: self._initialize(driver, config), InitializationError),
            Stage("navigate-to-site", lambda: self._navigate_to_site(driver, config), NavigationError),
            Stage("authenticate", lambda: self._authenticate(driver, config), AuthenticationError),
            Stage("navigate-to-topic", lambda: self._navigate_to_topic(driver, config), NavigationError),
            Stage("extract-info", lambda: extract_topic_info(driver, config.selectors, self.logger), ExtractionError),
            Stage(
                "capture-success-screenshot",
                lambda: self._take_screenshot(driver, config.settings.success_screenshot_path),
                ScreenshotError,
            ),
        ]

    def _initialize(self, driver: PageDriver, config: AutomationConfig) -> None:
        settings = config.settings
        driver.launch(
            headless=settings.headless,
            slow_mo_ms=settings.interaction_delay_ms,
            timeout_ms=settings.operation_timeout_ms,
            viewport=(settings.viewport.width, settings.viewport.height),
            user_agent=settings.user_agent,
        )

    def _navigate_to_site(self, driver: PageDriver, config: AutomationConfig) -> None:
        self.logger.info("Navigating to %s", config.website)
        driver.goto(config.website)
        driver.wait_for_quiescence()

    def _authenticate(self, driver: PageDriver, config: AutomationConfig) -> None:
        selectors = config.selectors
        credentials = config.credentials

        driver.click_role(selectors.login_button.role, selectors.login_button.name, exact=selectors.login_button.exact)
        driver.wait_for_quiescence()
        self.logger.info("Login form loaded")

        field = selectors.username_field
        driver.fill_role(field.role, field.name, credentials.username.get_secret_value(), exact=field.exact)
        field = selectors.password_field
        driver.fill_role(field.role, field.name, credentials.password.get_secret_value(), exact=field.exact)
        self.logger.info("Credentials entered")

        submit = selectors.submit_button
        driver.click_role(submit.role, submit.name, exact=submit.exact)
        driver.wait_for_url(selectors.post_login_url, timeout_ms=config.settings.operation_timeout_ms)
        self.logger.info("Login successful, redirected to %s", driver.current_url())

    def _navigate_to_topic(self, driver: PageDriver, config: AutomationConfig) -> None:
        driver.click_first(config.selectors.topic_link)
        driver.wait_for_quiescence()
        self.logger.info("Topic page loaded: %s", driver.current_url())

    def _take_screenshot(self, driver: PageDriver, path: Path) -> None:
        self.logger.info("Taking screenshot: %s", path)
        driver.screenshot(path, full_page=True)

    # ------------------------------------------------------------------
    def _capture_failure_screenshot(self, path: Path) -> None:
        driver = self._driver
        if driver is None or not driver.has_page:
            return
        try:
            driver.screenshot(path, full_page=True)
            self.logger.info("Error screenshot saved: %s", path)
        except Exception:  # noqa: BLE001
            self.logger.warning("Failed to take error screenshot: %s", path, exc_info=True)

    def _cleanup(self) -> None:
        driver = self._driver
        self._driver = None
        if driver is None:
            return
        self.logger.info("Cleaning up browser resources")
        try:
            driver.close_context()
        except Exception:  # noqa: BLE001
            self.logger.warning("Closing browser context failed", exc_info=True)
        try:
            driver.close_browser()
        except Exception:  # noqa: BLE001
            self.logger.warning("Closing browser failed", exc_info=True)

    def _log_summary(self, topic_info: TopicInfo) -> None:
        self.logger.info(
            "Automation summary:\n"
            f"  Topic: {topic_info.title}\n"
            f"  Author: {topic_info.author}\n"
            f"  Category: {topic_info.category}\n"
            f"  Tags: {', '.join(topic_info.tags)}\n"
            f"  URL: {topic_info.url}"
        )
