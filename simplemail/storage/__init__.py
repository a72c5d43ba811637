"""Optional on-disk records of delivery attempts."""

from simplemail.storage.delivery_log import DeliveryLog

__all__ = ["DeliveryLog"]
