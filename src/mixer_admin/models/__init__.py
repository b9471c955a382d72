"""
Data models for the Mixer Admin dashboard.

This package provides:
- Pagination and ListPage: the normalized list envelope
- Status enums for quotations and deliveries

Records returned by the backend stay plain dictionaries (``Record``).
"""

from mixer_admin.models.common import ListPage, Pagination, Record
from mixer_admin.models.statuses import (
    DeliveryStatus,
    QuotationStatus,
    SortOrder,
    status_color,
)

__all__ = [
    "DeliveryStatus",
    "ListPage",
    "Pagination",
    "QuotationStatus",
    "Record",
    "SortOrder",
    "status_color",
]
