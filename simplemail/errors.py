from __future__ import annotations


class SimpleMailError(Exception):
    """Base error type for library-specific exceptions."""


class InvalidAddressError(SimpleMailError, ValueError):
    """A supplied string could not be parsed as an email address."""

    def __init__(self, value: object, reason: str | None = None):
        message = f"{value!r} is not a valid email address"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.value = value


class NullArgumentError(SimpleMailError, ValueError):
    """A required argument was None."""

    def __init__(self, argument: str):
        super().__init__(f"{argument} argument can not be None")
        self.argument = argument


class InvalidConfigError(SimpleMailError, ValueError):
    """Mailer configuration is unusable (e.g. blank SMTP host)."""


class InvalidArgumentError(SimpleMailError, ValueError):
    """Mail handed to the mailer is missing or incomplete."""


class MissingSenderError(SimpleMailError, RuntimeError):
    """Neither the mail nor the mailer provide a sender address."""


class DeliveryError(SimpleMailError):
    """Transport failed to hand the message over."""

    def __init__(self, message: str, *, stage: str = "transport", host: str | None = None):
        super().__init__(message)
        self.stage = stage
        self.host = host


class SendFailedError(DeliveryError):
    """Server refused the sender, some recipients, or the message data."""

    def __init__(
        self,
        message: str,
        *,
        stage: str = "transport",
        host: str | None = None,
        refused: dict[str, tuple[int, bytes]] | None = None,
    ):
        super().__init__(message, stage=stage, host=host)
        self.refused = dict(refused or {})


class MessagingError(DeliveryError):
    """Generic transport failure (connection, protocol, filesystem)."""
