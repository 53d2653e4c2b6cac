"""Scripted forum session: login, open first topic, extract, screenshot."""

from .extract import UNKNOWN_AUTHOR, UNKNOWN_CATEGORY, UNKNOWN_TITLE, extract_topic_info
from .models import AutomationFailure, AutomationResult, AutomationSuccess, TopicInfo
from .runner import SessionRunner

__all__ = [
    "AutomationFailure",
    "AutomationResult",
    "AutomationSuccess",
    "SessionRunner",
    "TopicInfo",
    "UNKNOWN_AUTHOR",
    "UNKNOWN_CATEGORY",
    "UNKNOWN_TITLE",
    "extract_topic_info",
]
