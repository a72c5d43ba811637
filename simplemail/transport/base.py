from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from simplemail.envelope import Envelope

DEFAULT_SMTP_PORT = 25
DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class TransportSettings:
    """Connection settings passed explicitly with every send."""

    host: str
    port: int = DEFAULT_SMTP_PORT
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    local_hostname: str | None = None


class Transport(Protocol):
    def send(self, envelope: Envelope, *, settings: TransportSettings) -> None:
        """Deliver one envelope or raise a DeliveryError subclass."""
