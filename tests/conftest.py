from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest
from pydantic import SecretStr

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from forumflow.config import AutomationConfig, Credentials, ForumSelectors, Settings


SELECTORS = ForumSelectors()

TOPIC_TEXTS = {
    SELECTORS.title: "  Claude ai desktop integration \n",
    SELECTORS.author: "hex",
    SELECTORS.category: " General ",
}
TOPIC_TAGS = {SELECTORS.tag: ["ai", " desktop ", "   "]}
TOPIC_URL = "https://forum.example/t/claude-ai-desktop-integration/4242"


class FakeDriver:
    """In-memory PageDriver recording every capability call in order."""

    def __init__(
        self,
        *,
        texts: dict[str, str | None] | None = None,
        all_texts: dict[str, list[str | None]] | None = None,
        inner_texts: dict[str, str | None] | None = None,
        url: str = TOPIC_URL,
        fail_on: dict[str, Any] | None = None,
    ) -> None:
        self.texts = dict(texts or {})
        self.all_texts = dict(all_texts or {})
        self.inner_texts = dict(inner_texts or {})
        self.url = url
        self.fail_on = {k: (list(v) if isinstance(v, list) else v) for k, v in (fail_on or {}).items()}
        self.calls: list[str] = []
        self.clicked: list[tuple[str, str, bool]] = []
        self.filled: list[tuple[str, str, str]] = []
        self.selected: list[tuple[str, str]] = []
        self.pressed: list[str] = []
        self.screenshots: list[Path] = []
        self.visited: list[str] = []
        self.url_waits: list[tuple[str, int]] = []
        self.launch_kwargs: dict[str, Any] | None = None
        self.close_context_calls = 0
        self.close_browser_calls = 0
        self._page_open = False

    def _hit(self, name: str) -> None:
        self.calls.append(name)
        failure = self.fail_on.get(name)
        if isinstance(failure, list):
            failure = failure.pop(0) if failure else None
        if failure is not None:
            raise failure

    @property
    def has_page(self) -> bool:
        return self._page_open

    def launch(self, **kwargs: Any) -> None:
        self._hit("launch")
        self.launch_kwargs = kwargs
        self._page_open = True

    def goto(self, url: str) -> None:
        self._hit("goto")
        self.visited.append(url)

    def wait_for_quiescence(self) -> None:
        self._hit("wait_for_quiescence")

    def wait_for_url(self, pattern: str, *, timeout_ms: int) -> None:
        self._hit("wait_for_url")
        self.url_waits.append((pattern, timeout_ms))

    def current_url(self) -> str:
        self._hit("current_url")
        return self.url

    def click_role(self, role: str, name: str, *, exact: bool = False) -> None:
        self._hit("click_role")
        self.clicked.append((role, name, exact))

    def fill_role(self, role: str, name: str, value: str, *, exact: bool = False) -> None:
        self._hit("fill_role")
        self.filled.append((role, name, value))

    def click_first(self, selector: str) -> None:
        self._hit("click_first")
        self.clicked.append(("first", selector, False))

    def fill(self, selector: str, value: str) -> None:
        self._hit("fill")
        self.filled.append(("selector", selector, value))

    def select_option(self, selector: str, value: str) -> None:
        self._hit("select_option")
        self.selected.append((selector, value))

    def press(self, key: str) -> None:
        self._hit("press")
        self.pressed.append(key)

    def text_of_first(self, selector: str) -> str | None:
        self._hit("text_of_first")
        return self.texts.get(selector)

    def texts_of_all(self, selector: str) -> list[str | None]:
        self._hit("texts_of_all")
        return list(self.all_texts.get(selector, []))

    def inner_text_of_first(self, selector: str) -> str | None:
        self._hit("inner_text_of_first")
        return self.inner_texts.get(selector)

    def screenshot(self, path: Path, *, full_page: bool = True) -> None:
        self._hit("screenshot")
        self.screenshots.append(Path(path))

    def close_context(self) -> None:
        self.close_context_calls += 1
        self._page_open = False
        self._hit("close_context")

    def close_browser(self) -> None:
        self.close_browser_calls += 1
        self._hit("close_browser")


@pytest.fixture(autouse=True, scope="session")
def _isolated_work_dir(tmp_path_factory) -> None:
    """Keep app.log and other runtime files out of the repository."""

    work = tmp_path_factory.mktemp("forumflow-work")
    mp = pytest.MonkeyPatch()
    mp.setenv("FORUMFLOW_WORK_DIR", str(work))
    yield
    mp.undo()


@pytest.fixture
def make_driver():
    def _make(**kwargs: Any) -> FakeDriver:
        kwargs.setdefault("texts", dict(TOPIC_TEXTS))
        kwargs.setdefault("all_texts", dict(TOPIC_TAGS))
        return FakeDriver(**kwargs)

    return _make


@pytest.fixture
def automation_config(tmp_path) -> AutomationConfig:
    return AutomationConfig(
        website="https://forum.example",
        credentials=Credentials(username=SecretStr("hex"), password=SecretStr("s3cret-pa55")),
        settings=Settings(
            headless=True,
            interaction_delay_ms=0,
            operation_timeout_ms=5000,
            success_screenshot_path=tmp_path / "topic.png",
            failure_screenshot_path=tmp_path / "error.png",
        ),
    )
