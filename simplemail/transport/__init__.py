"""Pluggable transports that hand assembled envelopes to the outside world."""

from simplemail.transport.base import Transport, TransportSettings
from simplemail.transport.eml import EmlTransport
from simplemail.transport.smtp import SmtpTransport

__all__ = ["EmlTransport", "SmtpTransport", "Transport", "TransportSettings"]
