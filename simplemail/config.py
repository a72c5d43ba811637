from __future__ import annotations

"""Mailer configuration (loaded from environment variables + .env).

Design:
- The library core never reads the environment; only load_config() does.
- Address lists are comma separated (SIMPLEMAIL_BCC="ops@example.com, audit@example.com").
- Environment variables always override .env file values.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from simplemail.transport.base import DEFAULT_SMTP_PORT, DEFAULT_TIMEOUT_SECONDS


class MailerConfig(BaseModel):
    smtp_host: str = "localhost"
    smtp_port: int = DEFAULT_SMTP_PORT
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    local_hostname: str | None = None

    # Defaults applied to every mail sent by the resulting Mailer
    from_email: str | None = None
    default_to: list[str] = Field(default_factory=list)
    default_cc: list[str] = Field(default_factory=list)
    default_bcc: list[str] = Field(default_factory=list)

    delivery_log_path: Path | None = None
    log_level: str = "INFO"

    @field_validator("smtp_host")
    @classmethod
    def _host_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("smtp_host cannot be blank")
        return value

    @field_validator("smtp_port")
    @classmethod
    def _valid_port(cls, value: int) -> int:
        if value < 1 or value > 65535:
            raise ValueError("port must be in 1..65535")
        return value

    @field_validator("timeout_seconds")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("value must be positive")
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"


def load_config(env_file: str | None = ".env") -> MailerConfig:
    if env_file:
        # Shell environment wins over .env values
        load_dotenv(env_file, override=False)
    delivery_log = _getenv_opt("SIMPLEMAIL_DELIVERY_LOG")
    return MailerConfig(
        smtp_host=_getenv_str("SIMPLEMAIL_SMTP_HOST", "localhost"),
        smtp_port=int(_getenv_str("SIMPLEMAIL_SMTP_PORT", str(DEFAULT_SMTP_PORT))),
        timeout_seconds=float(_getenv_str("SIMPLEMAIL_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))),
        local_hostname=_getenv_opt("SIMPLEMAIL_LOCAL_HOSTNAME"),
        from_email=_getenv_opt("SIMPLEMAIL_FROM"),
        default_to=_getenv_list("SIMPLEMAIL_TO"),
        default_cc=_getenv_list("SIMPLEMAIL_CC"),
        default_bcc=_getenv_list("SIMPLEMAIL_BCC"),
        delivery_log_path=Path(delivery_log) if delivery_log else None,
        log_level=_getenv_str("SIMPLEMAIL_LOG_LEVEL", "INFO"),
    )


def _getenv_opt(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return value


def _getenv_str(name: str, default: str) -> str:
    value = _getenv_opt(name)
    return value if value is not None else default


def _getenv_list(name: str) -> list[str]:
    value = _getenv_opt(name)
    if value is None:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]
