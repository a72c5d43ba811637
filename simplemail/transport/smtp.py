from __future__ import annotations

import logging
import smtplib

from simplemail.envelope import Envelope
from simplemail.errors import MessagingError, SendFailedError
from simplemail.transport.base import TransportSettings

logger = logging.getLogger(__name__)


class SmtpTransport:
    """Plain SMTP transport: one connection per envelope, no reuse, no retry."""

    def send(self, envelope: Envelope, *, settings: TransportSettings) -> None:
        recipients = envelope.recipients()
        logger.debug(
            "Opening SMTP session to %s:%s for %d recipient(s)",
            settings.host,
            settings.port,
            len(recipients),
        )
        try:
            with smtplib.SMTP(
                settings.host,
                settings.port,
                timeout=settings.timeout,
                local_hostname=settings.local_hostname,
            ) as server:
                refused = server.send_message(
                    envelope.message,
                    from_addr=envelope.sender.ascii_address,
                    to_addrs=recipients,
                )
        except smtplib.SMTPRecipientsRefused as exc:
            raise SendFailedError(
                f"all recipients refused by {settings.host}",
                host=settings.host,
                refused=exc.recipients,
            ) from exc
        except smtplib.SMTPSenderRefused as exc:
            raise SendFailedError(
                f"sender {exc.sender!r} refused by {settings.host}: {exc.smtp_code} {exc.smtp_error!r}",
                host=settings.host,
            ) from exc
        except smtplib.SMTPDataError as exc:
            raise SendFailedError(
                f"message data refused by {settings.host}: {exc.smtp_code} {exc.smtp_error!r}",
                host=settings.host,
            ) from exc
        except (smtplib.SMTPException, OSError, UnicodeError) as exc:
            raise MessagingError(
                f"SMTP delivery via {settings.host}:{settings.port} failed: {exc}",
                host=settings.host,
            ) from exc

        # Partial refusal still counts as a failed send.
        if refused:
            raise SendFailedError(
                f"{len(refused)} recipient(s) refused by {settings.host}",
                host=settings.host,
                refused=refused,
            )
