"""SDK options and path helpers."""

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .models import DEFAULT_MAX_BREADCRUMBS, SentryLevel

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "sentry_core.log"

SDK_NAME = "sentry-core"
SDK_VERSION = "0.1.0"

_TRUE_VALUES = {"1", "true", "yes", "on"}


class SentryOptions(BaseModel):
    """Options the SDK is initialized with. An empty DSN disables the SDK."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    dsn: str | None = None
    debug: bool = False
    diagnostic_level: SentryLevel = SentryLevel.DEBUG
    diagnostic_logger: Any = None
    max_breadcrumbs: int = Field(DEFAULT_MAX_BREADCRUMBS, ge=0)
    release: str | None = None
    environment: str | None = None
    send_timeout: float = Field(10.0, gt=0)
    sdk_name: str = SDK_NAME
    sdk_version: str = SDK_VERSION

    @property
    def is_enabled(self) -> bool:
        return bool(self.dsn and self.dsn.strip())

    @classmethod
    def from_env(cls, **overrides: Any) -> "SentryOptions":
        """Build options from SENTRY_* environment variables."""
        values: dict[str, Any] = {
            "dsn": os.getenv("SENTRY_DSN") or None,
            "debug": os.getenv("SENTRY_DEBUG", "").strip().lower() in _TRUE_VALUES,
            "release": os.getenv("SENTRY_RELEASE") or None,
            "environment": os.getenv("SENTRY_ENVIRONMENT") or None,
        }
        max_breadcrumbs = os.getenv("SENTRY_MAX_BREADCRUMBS")
        if max_breadcrumbs:
            values["max_breadcrumbs"] = int(max_breadcrumbs)
        values.update(overrides)
        return cls(**values)
