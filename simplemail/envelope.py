from __future__ import annotations

from dataclasses import dataclass
from email.message import EmailMessage

from simplemail.address import MailAddress


@dataclass(frozen=True)
class Envelope:
    """Fully assembled outgoing message plus its SMTP envelope addresses.

    Recipient tuples keep mailer defaults first, then the mail's own values,
    with duplicates preserved.
    """

    sender: MailAddress
    to: tuple[MailAddress, ...]
    cc: tuple[MailAddress, ...]
    bcc: tuple[MailAddress, ...]
    message: EmailMessage

    def recipients(self) -> list[str]:
        return [a.ascii_address for a in (*self.to, *self.cc, *self.bcc)]
