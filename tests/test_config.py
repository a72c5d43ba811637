from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from simplemail.config import MailerConfig, load_config


def test_defaults_without_environment(clean_env: pytest.MonkeyPatch) -> None:
    config = load_config(env_file=None)

    assert config.smtp_host == "localhost"
    assert config.smtp_port == 25
    assert config.timeout_seconds == 30.0
    assert config.from_email is None
    assert config.default_bcc == []
    assert config.delivery_log_path is None


def test_environment_values_are_loaded(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("SIMPLEMAIL_SMTP_HOST", "mail.example.com")
    clean_env.setenv("SIMPLEMAIL_SMTP_PORT", "2525")
    clean_env.setenv("SIMPLEMAIL_FROM", "App <app@x.com>")
    clean_env.setenv("SIMPLEMAIL_BCC", "ops@x.com, audit@x.com,")
    clean_env.setenv("SIMPLEMAIL_DELIVERY_LOG", str(tmp_path / "delivery.jsonl"))
    clean_env.setenv("SIMPLEMAIL_LOG_LEVEL", "debug")

    config = load_config(env_file=None)

    assert config.smtp_host == "mail.example.com"
    assert config.smtp_port == 2525
    assert config.from_email == "App <app@x.com>"
    assert config.default_bcc == ["ops@x.com", "audit@x.com"]
    assert config.delivery_log_path == tmp_path / "delivery.jsonl"
    assert config.log_level == "DEBUG"


def test_env_file_is_read_but_shell_wins(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "SIMPLEMAIL_SMTP_HOST=from-file.example.com\nSIMPLEMAIL_TO=team@x.com\n",
        encoding="utf-8",
    )
    clean_env.setenv("SIMPLEMAIL_TO", "shell@x.com")

    config = load_config(env_file=str(env_file))

    assert config.smtp_host == "from-file.example.com"
    assert config.default_to == ["shell@x.com"]


@pytest.mark.parametrize(
    "overrides",
    [{"smtp_port": 0}, {"smtp_port": 70000}, {"timeout_seconds": 0}, {"smtp_host": "  "}],
)
def test_invalid_values_are_rejected(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        MailerConfig(**overrides)
