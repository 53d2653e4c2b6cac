"""Configuration models and loader for forumflow runs.

The run configuration is read from a YAML file whose string values may carry
``${VAR}`` placeholders; these are expanded from the process environment (and
``.env``, loaded by :mod:`forumflow.core.profiles`). The resulting models are
frozen so a run can never mutate its own input, and credentials are kept in
``SecretStr`` holders that render as ``**********`` wherever they are printed.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator

from forumflow.core.errors import ConfigError
from forumflow.core.profiles import default_config_path


DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
HEADLESS_ENV = "FORUMFLOW_HEADLESS"


class RoleTarget(BaseModel):
    """Accessible role plus name used to locate an interactive element."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    role: str
    name: str
    exact: bool = False


class Viewport(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    width: int = Field(1920, gt=0)
    height: int = Field(1080, gt=0)


class Credentials(BaseModel):
    """Username/password pair; both values stay opaque until typed into the page."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    username: SecretStr
    password: SecretStr

    @field_validator("username", "password")
    @classmethod
    def _require_value(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("must not be empty")
        return value


class Settings(BaseModel):
    """Browser and artefact settings for one run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    headless: bool = False
    interaction_delay_ms: int = Field(1000, ge=0)
    operation_timeout_ms: int = Field(15_000, gt=0)
    success_screenshot_path: Path = Path("isharkfly-topic-page.png")
    failure_screenshot_path: Path = Path("error-screenshot.png")
    viewport: Viewport = Field(default_factory=Viewport)
    user_agent: str | None = DEFAULT_USER_AGENT
    run_deadline_ms: int | None = Field(None, gt=0)


class ForumSelectors(BaseModel):
    """Locators for the login flow, the topic listing and the topic page."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    login_button: RoleTarget = RoleTarget(role="button", name="Log In")
    username_field: RoleTarget = RoleTarget(role="textbox", name="Email / Username")
    password_field: RoleTarget = RoleTarget(role="textbox", name="Password")
    submit_button: RoleTarget = RoleTarget(role="button", name="Log In", exact=True)
    post_login_url: str = "**/latest"
    topic_link: str = "a.raw-topic-link"
    title: str = "h1"
    author: str = '[href*="/u/"]'
    category: str = '[href*="/c/"]'
    tag: str = '[href*="/tag/"]'


class AutomationConfig(BaseModel):
    """Complete, immutable input of a session run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    website: str
    credentials: Credentials
    settings: Settings = Field(default_factory=Settings)
    selectors: ForumSelectors = Field(default_factory=ForumSelectors)

    @field_validator("website")
    @classmethod
    def _require_http_url(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError("website must be an http(s) URL")
        return value


def load_config(path: str | Path | None = None) -> AutomationConfig:
    """Load and validate the run configuration.

    Args:
        path: YAML file; defaults to ``FORUMFLOW_CONFIG`` or the bundled
            ``forumflow/config/forum.yaml``.

    Raises:
        ConfigError: File missing, malformed, placeholder unset or values invalid.
    """

    cfg_path = Path(path) if path else default_config_path()
    if not cfg_path.exists():
        raise ConfigError(f"config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, Mapping):
        raise ConfigError("config root must be a mapping")

    data = _expand_tree(data)
    headless = _read_env_bool(HEADLESS_ENV)
    if headless is not None:
        settings = dict(data.get("settings") or {})
        settings["headless"] = headless
        data = {**data, "settings": settings}

    try:
        return AutomationConfig.model_validate(data)
    except ValidationError as exc:
        # pydantic keeps input values in the message; report locations only
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        raise ConfigError(f"invalid configuration in {cfg_path}: {fields}") from None


def _read_env_bool(key: str) -> bool | None:
    value = os.getenv(key)
    if value is None or not value.strip():
        return None
    return value.strip().lower() in ("true", "1", "yes")


def _expand_tree(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _expand_tree(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_tree(v) for v in value]
    return _expand_env(value)


def _expand_env(value: Any) -> Any:
    if isinstance(value, str):
        expanded = os.path.expandvars(value)
        if "${" in value and "}" in value and expanded == value:
            raise ConfigError(f"Environment variable not set for value: {value}")
        return expanded
    return value


__all__ = [
    "AutomationConfig",
    "Credentials",
    "ForumSelectors",
    "RoleTarget",
    "Settings",
    "Viewport",
    "load_config",
]
