from __future__ import annotations

"""Mail composition models.

Hierarchy:
- Mail: mutable, fluent accumulator the caller builds step by step
- FrozenMail: immutable snapshot taken when a Mail is handed to a Mailer

Completeness is never checked while building; Mailer.deliver decides.
"""

from pydantic import BaseModel, ConfigDict, field_validator

from simplemail.address import MailAddress, coerce_address


def single_line(value: str | None) -> str | None:
    """Join the lines of a multi-line value with single spaces."""
    if value is None:
        return None
    lines = value.splitlines()
    if lines == [value]:
        return value
    return " ".join(line.strip() for line in lines if line.strip())


class FrozenMail(BaseModel):
    """Read-only view of a Mail at the moment of handoff."""

    model_config = ConfigDict(frozen=True)

    sender: MailAddress | None = None
    to: tuple[MailAddress, ...] = ()
    cc: tuple[MailAddress, ...] = ()
    bcc: tuple[MailAddress, ...] = ()
    subject: str | None = None
    text: str | None = None
    html: str | None = None

    @field_validator("subject")
    @classmethod
    def _fold_subject(cls, value: str | None) -> str | None:
        return single_line(value)

    def has_sender(self) -> bool:
        return self.sender is not None

    def has_to(self) -> bool:
        return bool(self.to)

    def has_subject(self) -> bool:
        return self.subject is not None

    def has_text(self) -> bool:
        return self.text is not None

    def has_html(self) -> bool:
        return self.html is not None

    def has_body(self) -> bool:
        return self.has_text() or self.has_html()

    def is_complete(self) -> bool:
        return self.has_sender() and self.has_to() and self.has_body()

    def freeze(self) -> FrozenMail:
        return self


class Mail:
    """Fluent builder for one outgoing email.

    Every setter returns the Mail itself so calls can be chained::

        mail = (
            Mail()
            .with_sender("Reports <reports@example.com>")
            .add_to("ops@example.com")
            .with_subject("Nightly run")
            .with_text("All jobs finished.")
        )

    Address setters take either a string, which is parsed and rejected with
    InvalidAddressError when malformed, or an already built MailAddress,
    which must not be None (NullArgumentError). A rejected value leaves the
    Mail unchanged.
    """

    def __init__(self) -> None:
        self._sender: MailAddress | None = None
        self._to: list[MailAddress] = []
        self._cc: list[MailAddress] = []
        self._bcc: list[MailAddress] = []
        self._subject: str | None = None
        self._text: str | None = None
        self._html: str | None = None

    def with_sender(self, sender: str | MailAddress) -> Mail:
        self._sender = coerce_address(sender, argument="sender")
        return self

    def add_to(self, to: str | MailAddress) -> Mail:
        self._to.append(coerce_address(to, argument="to"))
        return self

    def add_cc(self, cc: str | MailAddress) -> Mail:
        self._cc.append(coerce_address(cc, argument="cc"))
        return self

    def add_bcc(self, bcc: str | MailAddress) -> Mail:
        self._bcc.append(coerce_address(bcc, argument="bcc"))
        return self

    def with_subject(self, subject: str | None) -> Mail:
        """Subject line; embedded line breaks are folded into single spaces."""
        self._subject = single_line(subject)
        return self

    def with_text(self, text: str | None) -> Mail:
        self._text = text
        return self

    def with_html(self, html: str | None) -> Mail:
        self._html = html
        return self

    @property
    def sender(self) -> MailAddress | None:
        return self._sender

    @property
    def to(self) -> tuple[MailAddress, ...]:
        return tuple(self._to)

    @property
    def cc(self) -> tuple[MailAddress, ...]:
        return tuple(self._cc)

    @property
    def bcc(self) -> tuple[MailAddress, ...]:
        return tuple(self._bcc)

    @property
    def subject(self) -> str | None:
        return self._subject

    @property
    def text(self) -> str | None:
        return self._text

    @property
    def html(self) -> str | None:
        return self._html

    def has_sender(self) -> bool:
        return self._sender is not None

    def has_to(self) -> bool:
        return bool(self._to)

    def has_subject(self) -> bool:
        return self._subject is not None

    def has_text(self) -> bool:
        return self._text is not None

    def has_html(self) -> bool:
        return self._html is not None

    def has_body(self) -> bool:
        return self.has_text() or self.has_html()

    def is_complete(self) -> bool:
        """True when sender, at least one 'to' and a text or html body are set."""
        return self.has_sender() and self.has_to() and self.has_body()

    def freeze(self) -> FrozenMail:
        return FrozenMail(
            sender=self._sender,
            to=tuple(self._to),
            cc=tuple(self._cc),
            bcc=tuple(self._bcc),
            subject=self._subject,
            text=self._text,
            html=self._html,
        )

    def __repr__(self) -> str:
        return (
            f"Mail(sender={self._sender}, to={[str(a) for a in self._to]}, "
            f"cc={[str(a) for a in self._cc]}, bcc={[str(a) for a in self._bcc]}, "
            f"subject={self._subject!r})"
        )
