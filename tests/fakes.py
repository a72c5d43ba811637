from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from simplemail.envelope import Envelope
from simplemail.transport.base import TransportSettings


class RecordingTransport:
    """Keeps every envelope instead of sending it."""

    def __init__(self) -> None:
        self.sent: list[tuple[Envelope, TransportSettings]] = []

    def send(self, envelope: Envelope, *, settings: TransportSettings) -> None:
        self.sent.append((envelope, settings))


class FailingTransport:
    def __init__(self, exc: Exception) -> None:
        self.exc = exc
        self.calls = 0

    def send(self, envelope: Envelope, *, settings: TransportSettings) -> None:
        self.calls += 1
        raise self.exc


def read_jsonl(path: Path) -> list[dict[str, Any]]:
    if not path.exists():
        return []
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]
