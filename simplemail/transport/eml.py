from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path

from simplemail.envelope import Envelope
from simplemail.errors import MessagingError
from simplemail.render.mime import write_eml_file
from simplemail.transport.base import TransportSettings

logger = logging.getLogger(__name__)


class EmlTransport:
    """Development transport that writes each envelope to an .eml file instead of sending it."""

    def __init__(self, *, out_dir: Path) -> None:
        self.out_dir = Path(out_dir)
        self.written: list[Path] = []

    def send(self, envelope: Envelope, *, settings: TransportSettings) -> None:
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        out_path = self.out_dir / f"{stamp}-{uuid.uuid4().hex[:8]}.eml"
        try:
            write_eml_file(message=envelope.message, out_path=out_path)
        except (OSError, UnicodeError) as exc:
            raise MessagingError(f"unable to write {out_path}: {exc}", stage="eml", host=settings.host) from exc
        self.written.append(out_path)
        logger.debug("Wrote %s for %d recipient(s)", out_path, len(envelope.recipients()))
