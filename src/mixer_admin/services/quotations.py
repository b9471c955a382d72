"""
Rental quotations: listing, CRUD, status transitions, numbering, history
and PDF download.
"""

from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import quote

from mixer_admin.lib import logs
from mixer_admin.models.common import ListPage, Record
from mixer_admin.models.statuses import QuotationStatus, SortOrder
from mixer_admin.services.base import ResourceApi, require
from mixer_admin.services.errors import ClientValidationError

LOG = logs.logger(__file__)

LIST_FILTERS = (
    "customer_name",
    "status",
    "delivery_status",
    "machine_id",
    "start_date",
    "end_date",
    "date",
    "sort_by",
    "sort_order",
)


def list_params(filters: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    Build the query parameters for GET /admin/quotations.

    Pagination comes first and sorting last; sorting defaults to newest
    first and the page size to 20.
    """
    filters = filters or {}
    return {
        "page": filters.get("page") or 1,
        "limit": filters.get("limit") or 20,
        "search": filters.get("search"),
        "customer_name": filters.get("customer_name"),
        "status": filters.get("status"),
        "delivery_status": filters.get("delivery_status"),
        "machine_id": filters.get("machine_id"),
        "start_date": filters.get("start_date"),
        "end_date": filters.get("end_date"),
        "date": filters.get("date"),
        "sort_by": filters.get("sort_by") or "created_at",
        "sort_order": filters.get("sort_order") or SortOrder.DESC.value,
    }


class QuotationApi(ResourceApi):
    base_path = "/admin/quotations"

    async def list(self, filters: Mapping[str, Any] | None = None) -> ListPage:
        return await self._list(
            self.base_path, list_params(filters), error_message="Failed to fetch quotations"
        )

    async def get(self, quotation_id: Any) -> Record | None:
        require(quotation_id, "Quotation ID is required")
        return await self._get(
            self._path(quotation_id),
            error_message=f"Failed to fetch quotation with ID {quotation_id}",
            quiet_statuses=(404,),
        )

    async def create(self, data: Mapping[str, Any]) -> Record | None:
        require(data, "Quotation data is required")
        body = await self._send(
            "POST",
            self.base_path,
            json=dict(data),
            error_message="Failed to create quotation",
            success_message="Quotation created successfully",
        )
        return body.get("data")

    async def update(self, quotation_id: Any, data: Mapping[str, Any]) -> Record | None:
        require(quotation_id, "Quotation ID is required")
        require(data, "Quotation data is required")
        body = await self._send(
            "PUT",
            self._path(quotation_id),
            json=dict(data),
            error_message=f"Failed to update quotation with ID {quotation_id}",
            success_message="Quotation updated successfully",
        )
        return body.get("data")

    async def delete(self, quotation_id: Any) -> None:
        require(quotation_id, "Quotation ID is required")
        await self._send(
            "DELETE",
            self._path(quotation_id),
            error_message=f"Failed to delete quotation with ID {quotation_id}",
            success_message="Quotation deleted successfully",
        )

    async def update_status(self, quotation_id: Any, status: str) -> None:
        """
        Move a quotation to another status.

        Raises:
            ClientValidationError: The id is missing or the status is not
                one of draft, sent, accepted, rejected, expired.
        """
        require(quotation_id, "Quotation ID is required")
        require(status, "Status is required")
        if isinstance(status, QuotationStatus):
            status = status.value
        if status not in QuotationStatus.values():
            raise ClientValidationError(
                "Invalid status. Must be one of: " + ", ".join(QuotationStatus.values())
            )
        await self._send(
            "PUT",
            self._path(quotation_id, "status"),
            json={"status": status},
            error_message=f"Failed to update quotation status for ID {quotation_id}",
            success_message="Quotation status updated successfully",
        )

    async def next_number(self) -> Any:
        return await self._get(
            self._path("next-number"),
            error_message="Failed to get next quotation number",
            notify_errors=False,
        )

    async def customer_history(self, customer_id: Any) -> list[Record]:
        require(customer_id, "Customer ID is required")
        data = await self._get(
            self._path("customer", customer_id),
            error_message=f"Failed to fetch customer history for ID {customer_id}",
            notify_errors=False,
        )
        return list(data or [])

    async def pricing_history(self, customer_name: str, customer_contact: str) -> list[Record]:
        """Earlier prices quoted to a customer identified by name and contact."""
        require(customer_name, "Customer name and contact are required")
        require(customer_contact, "Customer name and contact are required")
        data = await self._get(
            self._path("history", quote(customer_name, safe=""), quote(customer_contact, safe="")),
            error_message="Failed to fetch customer pricing history",
            notify_errors=False,
        )
        return list(data or [])

    async def stats(self) -> dict:
        data = await self._get(
            self._path("stats"),
            error_message="Failed to fetch quotation statistics",
            notify_errors=False,
        )
        return dict(data or {})

    async def pdf(self, quotation_id: Any) -> bytes:
        """Download the rendered PDF of a quotation."""
        require(quotation_id, "Quotation ID is required")
        response = await self._request(
            "GET",
            self._path(quotation_id, "pdf"),
            error_message="Failed to generate PDF",
        )
        LOG.debug("pdf %s: %d bytes", quotation_id, len(response.content))
        return response.content
