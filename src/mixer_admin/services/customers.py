"""
Customer records: listing, lookup, CRUD and quotation history.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from mixer_admin.lib import logs
from mixer_admin.models.common import ListPage, Record
from mixer_admin.services.base import ResourceApi, require
from mixer_admin.services.errors import ApiError

LOG = logs.logger(__file__)

# Filters accepted by GET /admin/customers, in cache-key order
LIST_FILTERS = ("city", "has_gst", "sort_by", "sort_order")


def empty_customer_stats() -> dict:
    """Zeroed stats used when the stats endpoint is unavailable."""
    return {
        "total_customers": 0,
        "customers_with_gst": 0,
        "new_today": 0,
        "new_this_week": 0,
        "new_this_month": 0,
        "last_updated": datetime.now(timezone.utc).isoformat(),
    }


class CustomerApi(ResourceApi):
    base_path = "/admin/customers"

    async def list(self, filters: Mapping[str, Any] | None = None) -> ListPage:
        """
        Fetch one page of customers.

        Args:
            filters: ``page``, ``limit``, ``search`` plus any of
                     ``city``, ``has_gst``, ``sort_by``, ``sort_order``.
        """
        params = {"page": 1, "limit": 10, **(filters or {})}
        return await self._list(
            self.base_path, params, error_message="Failed to fetch customers"
        )

    async def search_for_quotation(self, query: str) -> list[Record]:
        """Look customers up by name/contact for the quotation form."""
        require(query, "Search query is required")
        data = await self._get(
            self._path("search"),
            params={"q": query.strip()},
            error_message="Failed to search customers",
        )
        return list(data or [])

    async def stats(self) -> dict:
        """
        Return customer statistics.

        The stats endpoint is optional on older backends, so failures fall
        back to zeroed values flagged with ``fallback`` instead of raising.
        """
        try:
            data = await self._get(
                self._path("stats"),
                error_message="Failed to fetch customer statistics",
                notify_errors=False,
            )
        except ApiError as exc:
            LOG.warning("Customer stats unavailable, using fallback: %s", exc.message)
            return {**empty_customer_stats(), "fallback": True}
        return {**empty_customer_stats(), **(data or {}), "fallback": False}

    async def get(self, customer_id: Any) -> Record | None:
        require(customer_id, "Customer ID is required")
        return await self._get(
            self._path(customer_id),
            error_message=f"Failed to fetch customer with ID {customer_id}",
            quiet_statuses=(404,),
        )

    async def create(self, data: Mapping[str, Any]) -> Record | None:
        require(data, "Customer data is required")
        body = await self._send(
            "POST",
            self.base_path,
            json=dict(data),
            error_message="Failed to create customer",
            success_message="Customer created successfully",
        )
        return body.get("data")

    async def update(self, customer_id: Any, data: Mapping[str, Any]) -> Record | None:
        require(customer_id, "Customer ID is required")
        require(data, "Customer data is required")
        body = await self._send(
            "PUT",
            self._path(customer_id),
            json=dict(data),
            error_message=f"Failed to update customer with ID {customer_id}",
            success_message="Customer updated successfully",
        )
        return body.get("data")

    async def delete(self, customer_id: Any) -> None:
        require(customer_id, "Customer ID is required")
        await self._send(
            "DELETE",
            self._path(customer_id),
            error_message=f"Failed to delete customer with ID {customer_id}",
            success_message="Customer deleted successfully",
        )

    async def quotations(self, customer_id: Any) -> list[Record]:
        """Quotation history of one customer. Failures are not notified."""
        require(customer_id, "Customer ID is required")
        data = await self._get(
            self._path(customer_id, "quotations"),
            error_message=f"Failed to fetch quotations for customer {customer_id}",
            notify_errors=False,
        )
        return list(data or [])
