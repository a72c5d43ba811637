from __future__ import annotations

import pytest

from fakes import RecordingTransport
from simplemail.models import Mail

ENV_NAMES = (
    "SIMPLEMAIL_SMTP_HOST",
    "SIMPLEMAIL_SMTP_PORT",
    "SIMPLEMAIL_TIMEOUT_SECONDS",
    "SIMPLEMAIL_LOCAL_HOSTNAME",
    "SIMPLEMAIL_FROM",
    "SIMPLEMAIL_TO",
    "SIMPLEMAIL_CC",
    "SIMPLEMAIL_BCC",
    "SIMPLEMAIL_DELIVERY_LOG",
    "SIMPLEMAIL_LOG_LEVEL",
)


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def complete_mail() -> Mail:
    return (
        Mail()
        .with_sender("user@x.com")
        .add_to("friend@example.com")
        .with_subject("Hello")
        .with_text("hello")
    )


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    # setenv first so monkeypatch also undoes anything load_dotenv writes
    for name in ENV_NAMES:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch
