"""Browser automation helpers built on Playwright."""

from .driver import PageDriver
from .playwright_flow import BrowserLaunchError, PlaywrightDriver

__all__ = ["BrowserLaunchError", "PageDriver", "PlaywrightDriver"]
