from __future__ import annotations

import logging
import time
from typing import Iterable

from simplemail.address import MailAddress, coerce_address, coerce_addresses
from simplemail.config import MailerConfig
from simplemail.envelope import Envelope
from simplemail.errors import (
    DeliveryError,
    InvalidArgumentError,
    InvalidConfigError,
    MissingSenderError,
    SendFailedError,
)
from simplemail.models import FrozenMail, Mail
from simplemail.render.mime import build_mime_message
from simplemail.storage.delivery_log import DeliveryLog
from simplemail.transport.base import (
    DEFAULT_SMTP_PORT,
    DEFAULT_TIMEOUT_SECONDS,
    Transport,
    TransportSettings,
)
from simplemail.transport.smtp import SmtpTransport

logger = logging.getLogger(__name__)


class Mailer:
    """Sends one-off mails over a single SMTP host.

    A Mailer may carry a default sender and default to/cc/bcc lists:

    - the mail's own sender wins over the default sender (an info message is
      logged when both are present)
    - default recipients are added to every mail, ahead of the mail's own,
      without de-duplication

    Instances are immutable once built and can be shared between threads;
    connection settings travel with each send call instead of living in
    process-wide state.
    """

    def __init__(
        self,
        host: str,
        bccs: Iterable[str | MailAddress] | None = None,
        *,
        sender: str | MailAddress | None = None,
        to: Iterable[str | MailAddress] | None = None,
        cc: Iterable[str | MailAddress] | None = None,
        port: int = DEFAULT_SMTP_PORT,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        local_hostname: str | None = None,
        transport: Transport | None = None,
        delivery_log: DeliveryLog | None = None,
    ) -> None:
        if not isinstance(host, str) or not host.strip():
            raise InvalidConfigError("smtp host can not be blank")
        if isinstance(port, bool) or not isinstance(port, int) or port < 1 or port > 65535:
            raise InvalidConfigError(f"smtp port must be in 1..65535, got {port!r}")
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise InvalidConfigError(f"timeout must be positive, got {timeout!r}")
        self._settings = TransportSettings(
            host=host.strip(),
            port=port,
            timeout=timeout,
            local_hostname=local_hostname,
        )
        self._sender = None if sender is None else coerce_address(sender, argument="sender")
        self._to = coerce_addresses(to, argument="to")
        self._cc = coerce_addresses(cc, argument="cc")
        self._bcc = coerce_addresses(bccs, argument="bcc")
        self._transport: Transport = transport if transport is not None else SmtpTransport()
        self._delivery_log = delivery_log

    @classmethod
    def builder(cls, host: str) -> MailerBuilder:
        return MailerBuilder(host)

    @classmethod
    def from_config(cls, config: MailerConfig, *, transport: Transport | None = None) -> Mailer:
        delivery_log = DeliveryLog(path=config.delivery_log_path) if config.delivery_log_path else None
        return cls(
            config.smtp_host,
            config.default_bcc,
            sender=config.from_email,
            to=config.default_to,
            cc=config.default_cc,
            port=config.smtp_port,
            timeout=config.timeout_seconds,
            local_hostname=config.local_hostname,
            transport=transport,
            delivery_log=delivery_log,
        )

    @property
    def host(self) -> str:
        return self._settings.host

    @property
    def settings(self) -> TransportSettings:
        return self._settings

    @property
    def default_sender(self) -> MailAddress | None:
        return self._sender

    @property
    def default_to(self) -> tuple[MailAddress, ...]:
        return self._to

    @property
    def default_cc(self) -> tuple[MailAddress, ...]:
        return self._cc

    @property
    def default_bcc(self) -> tuple[MailAddress, ...]:
        return self._bcc

    def prepare(self, mail: Mail | FrozenMail | None) -> Envelope:
        """Validate a mail, merge this mailer's defaults into it and build the envelope.

        Raises:
            InvalidArgumentError: mail is None, has no 'to' address or no body.
            MissingSenderError: neither the mail nor this mailer have a sender.
        """
        if mail is None:
            raise InvalidArgumentError("mail argument can not be None")
        if not isinstance(mail, (Mail, FrozenMail)):
            raise InvalidArgumentError(f"expected a Mail, got {type(mail).__name__}")
        frozen = mail.freeze()

        sender = self._determine_sender(frozen)
        if not frozen.has_to():
            raise InvalidArgumentError("mail argument must have at least one 'to' address")
        if not frozen.has_body():
            raise InvalidArgumentError("mail argument must have a text or an html body")

        to = self._to + frozen.to
        cc = self._cc + frozen.cc
        bcc = self._bcc + frozen.bcc
        message = build_mime_message(
            sender=sender,
            to=to,
            cc=cc,
            subject=frozen.subject,
            text=frozen.text,
            html=frozen.html,
        )
        return Envelope(sender=sender, to=to, cc=cc, bcc=bcc, message=message)

    def deliver(self, mail: Mail | FrozenMail | None) -> bool:
        """Send a mail once.

        Argument and configuration problems raise (see prepare()). Transport
        failures do not: they are logged and reported as False. No retry is
        attempted.
        """
        envelope = self.prepare(mail)
        subject = envelope.message.get("Subject")
        subject = str(subject) if subject is not None else None
        start = time.perf_counter()
        try:
            self._transport.send(envelope, settings=self._settings)
        except DeliveryError as exc:
            latency_ms = int((time.perf_counter() - start) * 1000)
            logger.error(
                "Delivery of %r from %s via %s failed: %s",
                subject,
                envelope.sender.address,
                self.host,
                exc,
                exc_info=exc,
            )
            if self._delivery_log is not None:
                self._delivery_log.error(
                    "mail_delivery_failed",
                    stage=exc.stage,
                    host=self.host,
                    sender=envelope.sender.address,
                    recipient_count=len(envelope.recipients()),
                    error_type=exc.__class__.__name__,
                    error_message=str(exc),
                    latency_ms=latency_ms,
                    refused=sorted(exc.refused) if isinstance(exc, SendFailedError) else [],
                )
            return False

        latency_ms = int((time.perf_counter() - start) * 1000)
        logger.debug(
            "Delivered %r from %s to %d recipient(s) via %s in %dms",
            subject,
            envelope.sender.address,
            len(envelope.recipients()),
            self.host,
            latency_ms,
        )
        if self._delivery_log is not None:
            self._delivery_log.debug(
                "mail_delivered",
                stage="transport",
                host=self.host,
                sender=envelope.sender.address,
                recipient_count=len(envelope.recipients()),
                latency_ms=latency_ms,
                message_id=str(envelope.message["Message-ID"]),
            )
        return True

    def _determine_sender(self, mail: FrozenMail) -> MailAddress:
        if mail.sender is not None:
            if self._sender is not None:
                logger.info(
                    "Both mail and mailer have a sender address - using %s from the mail",
                    mail.sender,
                )
                if self._delivery_log is not None:
                    self._delivery_log.info(
                        "mail_sender_override",
                        stage="prepare",
                        host=self.host,
                        sender=mail.sender.address,
                        default_sender=self._sender.address,
                    )
            return mail.sender
        if self._sender is not None:
            return self._sender
        raise MissingSenderError(
            "this mailer has no default sender address and the mail does not provide one"
        )

    def __repr__(self) -> str:
        return (
            f"Mailer(host={self.host!r}, port={self._settings.port}, sender={self._sender}, "
            f"to={len(self._to)}, cc={len(self._cc)}, bcc={len(self._bcc)})"
        )


class MailerBuilder:
    """Accumulates mailer defaults before producing an immutable Mailer.

    Address arguments are validated as they are added, exactly like Mail's
    setters.
    """

    def __init__(self, host: str) -> None:
        self._host = host
        self._sender: MailAddress | None = None
        self._to: list[MailAddress] = []
        self._cc: list[MailAddress] = []
        self._bcc: list[MailAddress] = []
        self._port = DEFAULT_SMTP_PORT
        self._timeout = DEFAULT_TIMEOUT_SECONDS
        self._local_hostname: str | None = None
        self._transport: Transport | None = None
        self._delivery_log: DeliveryLog | None = None

    def with_sender(self, sender: str | MailAddress) -> MailerBuilder:
        """Sender used for any mail that does not set its own."""
        self._sender = coerce_address(sender, argument="sender")
        return self

    def add_to(self, to: str | MailAddress) -> MailerBuilder:
        self._to.append(coerce_address(to, argument="to"))
        return self

    def add_cc(self, cc: str | MailAddress) -> MailerBuilder:
        self._cc.append(coerce_address(cc, argument="cc"))
        return self

    def add_bcc(self, bcc: str | MailAddress) -> MailerBuilder:
        self._bcc.append(coerce_address(bcc, argument="bcc"))
        return self

    def with_port(self, port: int) -> MailerBuilder:
        self._port = port
        return self

    def with_timeout(self, timeout: float) -> MailerBuilder:
        self._timeout = timeout
        return self

    def with_local_hostname(self, local_hostname: str) -> MailerBuilder:
        self._local_hostname = local_hostname
        return self

    def with_transport(self, transport: Transport) -> MailerBuilder:
        self._transport = transport
        return self

    def with_delivery_log(self, delivery_log: DeliveryLog) -> MailerBuilder:
        self._delivery_log = delivery_log
        return self

    def build(self) -> Mailer:
        return Mailer(
            self._host,
            self._bcc,
            sender=self._sender,
            to=self._to,
            cc=self._cc,
            port=self._port,
            timeout=self._timeout,
            local_hostname=self._local_hostname,
            transport=self._transport,
            delivery_log=self._delivery_log,
        )
