"""Status enums shared by the quotation and machine pages."""

from enum import Enum


class QuotationStatus(str, Enum):
    """Lifecycle of a rental quotation."""

    DRAFT = "draft"
    SENT = "sent"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EXPIRED = "expired"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def color(self) -> str:
        return _QUOTATION_COLORS[self]

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]


class DeliveryStatus(str, Enum):
    """Delivery progress of an accepted quotation."""

    PENDING = "pending"
    DELIVERED = "delivered"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def color(self) -> str:
        return _DELIVERY_COLORS[self]

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


# Radix color names used by the status badges
_QUOTATION_COLORS = {
    QuotationStatus.DRAFT: "gray",
    QuotationStatus.SENT: "blue",
    QuotationStatus.ACCEPTED: "green",
    QuotationStatus.REJECTED: "red",
    QuotationStatus.EXPIRED: "orange",
}

_DELIVERY_COLORS = {
    DeliveryStatus.PENDING: "yellow",
    DeliveryStatus.DELIVERED: "blue",
    DeliveryStatus.COMPLETED: "green",
    DeliveryStatus.CANCELLED: "red",
}


def status_color(status: str | None) -> str:
    """Return the badge color for a quotation status, gray when unknown."""
    try:
        return QuotationStatus(status).color
    except ValueError:
        return "gray"
