from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class DeliveryLog:
    """Append-only JSONL log of delivery events, one object per line.

    Safe to share between threads and between Mailer instances.
    """

    path: Path

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = Lock()

    def log(
        self,
        *,
        level: str,
        event: str,
        stage: str,
        status: str = "ok",
        host: str | None = None,
        sender: str | None = None,
        recipient_count: int | None = None,
        error_type: str | None = None,
        error_message: str | None = None,
        latency_ms: int | None = None,
        **extra: Any,
    ) -> None:
        payload: dict[str, Any] = {
            "timestamp": utc_now_iso(),
            "level": level.lower(),
            "event": event,
            "stage": stage,
            "status": status,
            "host": host,
            "sender": sender,
            "recipient_count": recipient_count,
            "error_type": error_type,
            "error_message": error_message,
            "latency_ms": latency_ms,
        }
        payload.update(extra)
        with self._lock:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(payload, ensure_ascii=True) + "\n")

    def debug(self, event: str, stage: str, **kwargs: Any) -> None:
        self.log(level="debug", event=event, stage=stage, **kwargs)

    def info(self, event: str, stage: str, **kwargs: Any) -> None:
        self.log(level="info", event=event, stage=stage, **kwargs)

    def error(self, event: str, stage: str, **kwargs: Any) -> None:
        self.log(level="error", event=event, stage=stage, status="error", **kwargs)
