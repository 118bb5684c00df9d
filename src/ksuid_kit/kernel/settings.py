"""
Settings - Runtime configuration for the CLI and library helpers

Read once from the environment. The identifier format itself has no knobs:
epoch, lengths and alphabet are fixed constants, not settings.
"""

import os
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from ksuid_kit.kernel.logging import is_production

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_TRUTHY = {"1", "true", "yes", "on"}


class KsuidSettings(BaseModel):
    """
    Runtime settings

    Controls logging output and the opt-in retry policy used when the
    entropy source is temporarily unavailable.
    """

    log_level: LogLevel = Field(
        default="WARNING",
        description="Minimum level for structured log output",
    )

    json_logs: bool = Field(
        default=False,
        description="Emit JSON logs instead of console-formatted logs",
    )

    entropy_retry_attempts: int = Field(
        default=1,
        ge=1,
        le=10,
        description="Attempts per identifier when reading entropy (1 = no retry)",
    )

    entropy_retry_min_wait_ms: int = Field(
        default=10,
        ge=0,
        description="Minimum backoff between entropy read attempts",
    )

    entropy_retry_max_wait_ms: int = Field(
        default=250,
        ge=0,
        description="Maximum backoff between entropy read attempts",
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_backoff_window(self) -> "KsuidSettings":
        if self.entropy_retry_min_wait_ms > self.entropy_retry_max_wait_ms:
            raise ValueError("entropy_retry_min_wait_ms must not exceed entropy_retry_max_wait_ms")
        return self


def load_settings(environ: Mapping[str, str] | None = None) -> KsuidSettings:
    """
    Build settings from environment variables

    Recognised variables: KSUID_LOG_LEVEL, KSUID_JSON_LOGS and
    KSUID_ENTROPY_RETRIES. JSON logs default to on in production
    (ENVIRONMENT=production).

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Validated settings
    """
    env = os.environ if environ is None else environ
    values: dict[str, object] = {}

    if "KSUID_LOG_LEVEL" in env:
        values["log_level"] = env["KSUID_LOG_LEVEL"].upper()

    if "KSUID_JSON_LOGS" in env:
        values["json_logs"] = env["KSUID_JSON_LOGS"].strip().lower() in _TRUTHY
    else:
        values["json_logs"] = is_production(env)

    if "KSUID_ENTROPY_RETRIES" in env:
        values["entropy_retry_attempts"] = env["KSUID_ENTROPY_RETRIES"]

    return KsuidSettings(**values)
