from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv


load_dotenv(override=False)


def _project_root() -> Path:
    env = os.getenv("FORUMFLOW_ROOT")
    if env:
        return Path(env)
    # In source layout, this file is under <root>/forumflow/core
    return Path(__file__).resolve().parents[2]


def _config_dir() -> Path:
    return _project_root() / "forumflow" / "config"


def _work_dir() -> Path:
    env = os.getenv("FORUMFLOW_WORK_DIR")
    if env:
        return Path(env)
    return Path.cwd() / "forumflow-work"


def ensure_work_dirs() -> dict[str, Path]:
    base = _work_dir()
    logs = base / "logs"
    for p in (base, logs):
        p.mkdir(parents=True, exist_ok=True)
    return {"base": base, "logs": logs}


def default_config_path() -> Path:
    """Return the YAML config path, honouring ``FORUMFLOW_CONFIG``."""
    env = os.getenv("FORUMFLOW_CONFIG")
    if env:
        return resolve_config_path(env)
    return _config_dir() / "forum.yaml"


def resolve_config_path(path: str | Path) -> Path:
    p = Path(path)
    if p.is_absolute():
        return p
    if p.exists():
        return p.resolve()
    # Support paths with or without leading 'forumflow/'
    parts = p.parts
    if parts and parts[0] == "forumflow":
        return _project_root() / p
    return _project_root() / "forumflow" / p
