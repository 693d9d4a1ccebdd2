"""Runtime settings for the auto-responder."""

from __future__ import annotations

import logging
import math
import os
import threading
from dataclasses import dataclass, field
from pathlib import Path

from gmail_autoreply.exceptions import ConfigError

GMAIL_MODIFY_SCOPE = "https://www.googleapis.com/auth/gmail.modify"

DEFAULT_REPLY_BODY = "Boss is busy, will get back to you soon"
DEFAULT_LABEL_NAME = "autoreply"
DEFAULT_QUERY = "is:unread"
DEFAULT_MIN_INTERVAL = 45.0
DEFAULT_MAX_INTERVAL = 120.0


@dataclass
class Settings:
    """Everything the poller needs to run.

    Paths default to the process working directory, matching where the
    installed-app flow drops ``credentials.json`` and writes ``token.json``.
    Intervals are in seconds.
    """

    token_path: Path = field(default_factory=lambda: Path.cwd() / "token.json")
    client_secret_path: Path = field(
        default_factory=lambda: Path.cwd() / "credentials.json"
    )
    scopes: list[str] = field(default_factory=lambda: [GMAIL_MODIFY_SCOPE])
    query: str = DEFAULT_QUERY
    label_name: str = DEFAULT_LABEL_NAME
    reply_body: str = DEFAULT_REPLY_BODY
    min_interval: float = DEFAULT_MIN_INTERVAL
    max_interval: float = DEFAULT_MAX_INTERVAL
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        """Build settings from ``AUTOREPLY_*`` environment variables.

        Unset variables keep their defaults. The result is validated.
        """
        env = os.environ if environ is None else environ
        settings = cls()

        if env.get("AUTOREPLY_TOKEN_PATH"):
            settings.token_path = Path(env["AUTOREPLY_TOKEN_PATH"])
        if env.get("AUTOREPLY_CLIENT_SECRET_PATH"):
            settings.client_secret_path = Path(env["AUTOREPLY_CLIENT_SECRET_PATH"])
        settings.query = env.get("AUTOREPLY_QUERY", settings.query)
        settings.label_name = env.get("AUTOREPLY_LABEL", settings.label_name)
        settings.reply_body = env.get("AUTOREPLY_BODY", settings.reply_body)
        settings.log_level = env.get("AUTOREPLY_LOG_LEVEL", settings.log_level).upper()
        settings.min_interval = _float_env(
            env, "AUTOREPLY_MIN_INTERVAL", settings.min_interval,
        )
        settings.max_interval = _float_env(
            env, "AUTOREPLY_MAX_INTERVAL", settings.max_interval,
        )

        settings.validate()
        return settings

    def validate(self) -> None:
        for name in ("min_interval", "max_interval"):
            if not math.isfinite(getattr(self, name)):
                raise ConfigError(f"{name} must be finite, got {getattr(self, name)}")
        if self.min_interval <= 0:
            raise ConfigError(
                f"min_interval must be positive, got {self.min_interval}"
            )
        if self.max_interval > threading.TIMEOUT_MAX:
            raise ConfigError(
                f"max_interval must be at most {threading.TIMEOUT_MAX}, got {self.max_interval}"
            )
        if self.min_interval > self.max_interval:
            raise ConfigError(
                f"min_interval ({self.min_interval}) is greater than "
                f"max_interval ({self.max_interval})"
            )
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigError(f"Unknown log level {self.log_level!r}")
        if not self.label_name:
            raise ConfigError("label_name must not be empty")


def _float_env(env, name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e
