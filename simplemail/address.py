from __future__ import annotations

"""Typed email addresses.

Every address entering the library (mail fields, mailer defaults, config) is
parsed into a MailAddress up front so malformed input fails at the call that
supplied it, never later at delivery time.
"""

from email.headerregistry import Address
from email.utils import getaddresses
from typing import Iterable

from pydantic import BaseModel, ConfigDict, EmailStr, ValidationError, field_validator

from simplemail.errors import InvalidAddressError, NullArgumentError


class MailAddress(BaseModel):
    """A validated addr-spec plus optional display name."""

    model_config = ConfigDict(frozen=True)

    address: EmailStr
    name: str | None = None

    @field_validator("name")
    @classmethod
    def _blank_name_is_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @classmethod
    def parse(cls, raw: str) -> MailAddress:
        """Parse ``user@host`` or ``Display Name <user@host>``.

        Raises InvalidAddressError for blank input, more than one address,
        or anything the addr-spec validator rejects.
        """
        if not isinstance(raw, str) or not raw.strip():
            raise InvalidAddressError(raw, "blank")
        pairs = getaddresses([raw])
        if len(pairs) != 1:
            raise InvalidAddressError(raw, "expected exactly one address")
        name, addr = pairs[0]
        if not addr:
            raise InvalidAddressError(raw)
        try:
            return cls(address=addr, name=name or None)
        except ValidationError as exc:
            errors = exc.errors()
            reason = str(errors[0].get("msg")) if errors else None
            raise InvalidAddressError(raw, reason) from exc

    @property
    def domain(self) -> str:
        return self.address.rsplit("@", 1)[1]

    @property
    def ascii_domain(self) -> str:
        """IDNA form of the domain; unchanged when it cannot be encoded."""
        try:
            return self.domain.encode("idna").decode("ascii")
        except UnicodeError:
            return self.domain

    @property
    def ascii_address(self) -> str:
        local = self.address.rsplit("@", 1)[0]
        return f"{local}@{self.ascii_domain}"

    def to_header(self) -> Address:
        # Wire form: headers carry the IDNA domain
        return Address(display_name=self.name or "", addr_spec=self.ascii_address)

    def __str__(self) -> str:
        return str(Address(display_name=self.name or "", addr_spec=self.address))


def coerce_address(value: str | MailAddress | None, *, argument: str) -> MailAddress:
    if value is None:
        raise NullArgumentError(argument)
    if isinstance(value, MailAddress):
        return value
    if isinstance(value, str):
        return MailAddress.parse(value)
    raise InvalidAddressError(value, f"{argument} must be a str or MailAddress")


def coerce_addresses(values: Iterable[str | MailAddress] | None, *, argument: str) -> tuple[MailAddress, ...]:
    # All-or-nothing: one bad entry rejects the whole batch.
    if values is None:
        return ()
    if isinstance(values, (str, MailAddress)):
        values = [values]
    return tuple(coerce_address(value, argument=argument) for value in values)
