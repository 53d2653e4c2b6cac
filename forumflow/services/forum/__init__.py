"""Auxiliary forum interactions usable outside the session pipeline."""

from .utils import CONTENT_NOT_FOUND, ForumUtils

__all__ = ["CONTENT_NOT_FOUND", "ForumUtils"]
