"""
Daemon configuration.

Settings are read from the environment once at startup. `main()` loads a
`.env` file first, so values there apply unless already set in the shell.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

SERVICE_NAME = "google-workspace-tools"

_TRUTHY = {"1", "true", "yes", "on"}


def _env_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    value = env.get(key)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in _TRUTHY


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    value = env.get(key)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {value!r}") from None


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the daemon."""

    user_google_email: str = "default"
    anthropic_api_key: str | None = None
    anthropic_model: str | None = None
    composio_project_id: str | None = None
    connected_account_id: str | None = None
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "INFO"
    strict_validation: bool = False
    allow_remote_shutdown: bool = False
    max_tool_rounds: int | None = None

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        """
        Build settings from environment variables.

        Raises:
            ValueError: if an integer setting is not an integer
        """
        env = os.environ if env is None else env
        return cls(
            user_google_email=env.get("USER_GOOGLE_EMAIL") or "default",
            anthropic_api_key=env.get("ANTHROPIC_API_KEY") or None,
            anthropic_model=env.get("ANTHROPIC_MODEL") or None,
            composio_project_id=env.get("COMPOSIO_PROJECT_ID") or None,
            connected_account_id=env.get("CONNECTED_ACCOUNT_ID") or None,
            host=env.get("HOST") or "127.0.0.1",
            port=_env_int(env, "PORT", 8080),
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
            strict_validation=_env_bool(env, "STRICT_VALIDATION", False),
            allow_remote_shutdown=_env_bool(env, "ALLOW_REMOTE_SHUTDOWN", False),
            max_tool_rounds=_env_int(env, "MAX_TOOL_ROUNDS", 0) or None,
        )

    @property
    def planner_configured(self) -> bool:
        return bool(self.anthropic_api_key)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging in the daemon's format."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )
