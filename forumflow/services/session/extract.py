"""Topic metadata extraction with graceful degradation.

Missing or unreadable elements never abort the run: each scalar field falls
back to a sentinel such as ``Unknown Author`` and a warning is logged.
"""

from __future__ import annotations

import logging

from forumflow.browser.driver import PageDriver
from forumflow.config import ForumSelectors
from .models import TopicInfo

LOGGER = logging.getLogger("forumflow.extract")

UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_AUTHOR = "Unknown Author"
UNKNOWN_CATEGORY = "Unknown Category"


def _first_text(driver: PageDriver, selector: str, sentinel: str, field_name: str, logger: logging.Logger) -> str:
    try:
        raw = driver.text_of_first(selector)
    except Exception:  # noqa: BLE001 - degrade to sentinel
        logger.warning("extract %s failed for selector %s, using sentinel", field_name, selector, exc_info=True)
        return sentinel
    text = (raw or "").strip()
    if not text:
        logger.warning("extract %s: no text for selector %s, using sentinel", field_name, selector)
        return sentinel
    return text


def collect_tags(driver: PageDriver, selector: str, logger: logging.Logger | None = None) -> tuple[str, ...]:
    """Return trimmed tag texts in document order, skipping blank ones."""

    logger = logger or LOGGER
    try:
        raw_tags = driver.texts_of_all(selector)
    except Exception:  # noqa: BLE001 - degrade to no tags
        logger.warning("extract tags failed for selector %s", selector, exc_info=True)
        return ()
    tags: list[str] = []
    for raw in raw_tags:
        tag = (raw or "").strip()
        if tag:
            tags.append(tag)
    return tuple(tags)


def extract_topic_info(
    driver: PageDriver,
    selectors: ForumSelectors,
    logger: logging.Logger | None = None,
) -> TopicInfo:
    """Read title, author, category and tags from the loaded topic page.

    Only a failure to read the page URL propagates; every other field has a
    fallback.
    """

    logger = logger or LOGGER
    title = _first_text(driver, selectors.title, UNKNOWN_TITLE, "title", logger)
    author = _first_text(driver, selectors.author, UNKNOWN_AUTHOR, "author", logger)
    url = driver.current_url()
    category = _first_text(driver, selectors.category, UNKNOWN_CATEGORY, "category", logger)
    tags = collect_tags(driver, selectors.tag, logger)
    return TopicInfo(title=title, author=author, url=url, category=category, tags=tags)
