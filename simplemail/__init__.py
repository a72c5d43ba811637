"""Compose an email with a fluent builder and send it over SMTP."""

from simplemail.address import MailAddress
from simplemail.config import MailerConfig, load_config
from simplemail.envelope import Envelope
from simplemail.errors import (
    DeliveryError,
    InvalidAddressError,
    InvalidArgumentError,
    InvalidConfigError,
    MessagingError,
    MissingSenderError,
    NullArgumentError,
    SendFailedError,
    SimpleMailError,
)
from simplemail.mailer import Mailer, MailerBuilder
from simplemail.models import FrozenMail, Mail

__all__ = [
    "DeliveryError",
    "Envelope",
    "FrozenMail",
    "InvalidAddressError",
    "InvalidArgumentError",
    "InvalidConfigError",
    "Mail",
    "MailAddress",
    "Mailer",
    "MailerBuilder",
    "MailerConfig",
    "MessagingError",
    "MissingSenderError",
    "NullArgumentError",
    "SendFailedError",
    "SimpleMailError",
    "load_config",
]
