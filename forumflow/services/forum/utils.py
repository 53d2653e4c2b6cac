"""Stand-alone forum helpers for callers composing their own flows.

Each helper takes an already launched :class:`PageDriver`, locates its target
by role or placeholder, acts, and waits for the network to settle.
"""

from __future__ import annotations

from forumflow.browser.driver import PageDriver


CONTENT_NOT_FOUND = "Content not found"


class ForumUtils:
    """Stateless helpers for common Discourse interactions."""

    POST_CONTENT_SELECTOR = '[class*="post-content"]'
    SEARCH_INPUT_SELECTOR = '[placeholder*="search"]'
    TITLE_INPUT_SELECTOR = '[placeholder*="title"]'
    CATEGORY_SELECT_SELECTOR = '[name="category"]'
    EDITOR_SELECTOR = '[class*="editor"], [contenteditable="true"]'

    @staticmethod
    def extract_post_content(driver: PageDriver, selector: str = POST_CONTENT_SELECTOR) -> str:
        """Return the rendered text of the first post body, or ``Content not found``."""
        content = driver.inner_text_of_first(selector)
        return content if content is not None else CONTENT_NOT_FOUND

    @staticmethod
    def navigate_to_category(driver: PageDriver, category_name: str) -> None:
        driver.click_role("link", category_name)
        driver.wait_for_quiescence()

    @staticmethod
    def search_topic(driver: PageDriver, search_query: str) -> None:
        driver.click_role("button", "Search")
        driver.fill(ForumUtils.SEARCH_INPUT_SELECTOR, search_query)
        driver.press("Enter")
        driver.wait_for_quiescence()

    @staticmethod
    def create_new_topic(
        driver: PageDriver,
        title: str,
        content: str,
        category: str | None = None,
    ) -> None:
        """Open the composer, fill title/body, optionally pick a category, submit."""
        driver.click_role("button", "New Topic")
        driver.wait_for_quiescence()

        driver.fill(ForumUtils.TITLE_INPUT_SELECTOR, title)
        if category:
            driver.select_option(ForumUtils.CATEGORY_SELECT_SELECTOR, category)
        driver.fill(ForumUtils.EDITOR_SELECTOR, content)

        driver.click_role("button", "Create Topic")
        driver.wait_for_quiescence()
