from __future__ import annotations

from email.message import EmailMessage
from email.policy import SMTP
from email.utils import formatdate, make_msgid
from pathlib import Path
from typing import Sequence

from simplemail.address import MailAddress
from simplemail.errors import InvalidArgumentError


def build_mime_message(
    *,
    sender: MailAddress,
    to: Sequence[MailAddress],
    cc: Sequence[MailAddress] = (),
    subject: str | None = None,
    text: str | None = None,
    html: str | None = None,
) -> EmailMessage:
    """Build the RFC 5322 message for one delivery.

    Body layout:
    - text only: single text/plain part
    - html only: single text/html part
    - both: multipart/mixed wrapping one multipart/alternative (text, then html)

    Bcc addresses never appear in the headers; they only travel in the SMTP
    envelope.
    """
    if text is None and html is None:
        raise InvalidArgumentError("mail has neither a text nor an html body")

    msg = EmailMessage()
    msg["From"] = sender.to_header()
    msg["To"] = [a.to_header() for a in to]
    if cc:
        msg["Cc"] = [a.to_header() for a in cc]
    if subject is not None:
        msg["Subject"] = subject
    msg["Date"] = formatdate(localtime=True)
    msg["Message-ID"] = make_msgid(domain=sender.ascii_domain)

    if text is not None and html is not None:
        msg.set_content(text, subtype="plain", charset="utf-8")
        msg.add_alternative(html, subtype="html", charset="utf-8")
        msg.make_mixed()
    elif text is not None:
        msg.set_content(text, subtype="plain", charset="utf-8")
    else:
        msg.set_content(html, subtype="html", charset="utf-8")
    return msg


def write_eml_file(*, message: EmailMessage, out_path: Path) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("wb") as f:
        f.write(message.as_bytes(policy=SMTP))
