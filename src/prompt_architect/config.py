"""Environment-driven settings and platform-aware data paths."""

import os
import sys
from pathlib import Path

APP_NAME = "prompt-architect"

DEFAULT_AGENT_URL = "http://127.0.0.1:8000/api/agent"
DEFAULT_AGENT_ID = "6984881838c06c33b0302dd8"
DEFAULT_TIMEOUT = 120.0


def get_data_path() -> Path:
    """Return the directory holding the persisted prompt library."""
    env = os.environ.get("PROMPT_ARCHITECT_DATA_PATH")
    if env:
        return Path(env)

    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME
    elif sys.platform == "win32":
        return Path(os.environ.get("APPDATA", "")) / APP_NAME
    else:  # Linux
        return Path.home() / ".local" / "share" / APP_NAME


def get_agent_url() -> str:
    return os.environ.get("PROMPT_ARCHITECT_AGENT_URL") or DEFAULT_AGENT_URL


def get_agent_id() -> str:
    return os.environ.get("PROMPT_ARCHITECT_AGENT_ID") or DEFAULT_AGENT_ID


def get_api_key() -> str:
    return os.environ.get("PROMPT_ARCHITECT_API_KEY", "")


def get_timeout() -> float:
    """Return the agent transport timeout in seconds."""
    raw = os.environ.get("PROMPT_ARCHITECT_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT
    return value if value > 0 else DEFAULT_TIMEOUT
