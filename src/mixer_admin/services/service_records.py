"""
Machine service (maintenance) records.
"""

from __future__ import annotations

from typing import Any, Mapping

from mixer_admin.models.common import ListPage, Record
from mixer_admin.services.base import ResourceApi, require

LIST_FILTERS = ("machine_id", "start_date", "end_date", "operator", "site_location")


class ServiceRecordApi(ResourceApi):
    base_path = "/admin/services"

    async def list(self, filters: Mapping[str, Any] | None = None) -> ListPage:
        params = {"page": 1, "limit": 10, **(filters or {})}
        return await self._list(
            self.base_path, params, error_message="Failed to fetch service records"
        )

    async def get(self, record_id: Any) -> Record | None:
        require(record_id, "Service record ID is required")
        return await self._get(
            self._path(record_id),
            error_message=f"Failed to fetch service record with ID {record_id}",
            quiet_statuses=(404,),
        )

    async def by_machine(self, machine_id: Any) -> list[Record]:
        """Service history of one machine, newest first."""
        require(machine_id, "Machine ID is required")
        data = await self._get(
            self._path("machine", machine_id),
            error_message=f"Failed to fetch service records for machine {machine_id}",
            notify_errors=False,
        )
        return list(data or [])

    async def create(self, data: Mapping[str, Any]) -> Record | None:
        require(data, "Service record data is required")
        body = await self._send(
            "POST",
            self.base_path,
            json=dict(data),
            error_message="Failed to create service record",
            success_message="Service record created successfully",
        )
        return body.get("data")

    async def update(self, record_id: Any, data: Mapping[str, Any]) -> Record | None:
        require(record_id, "Service record ID is required")
        require(data, "Service record data is required")
        body = await self._send(
            "PUT",
            self._path(record_id),
            json=dict(data),
            error_message=f"Failed to update service record with ID {record_id}",
            success_message="Service record updated successfully",
        )
        return body.get("data")

    async def delete(self, record_id: Any) -> None:
        require(record_id, "Service record ID is required")
        await self._send(
            "DELETE",
            self._path(record_id),
            error_message=f"Failed to delete service record with ID {record_id}",
            success_message="Service record deleted successfully",
        )

    async def categories(self) -> list[Record]:
        data = await self._get(
            self._path("categories"),
            error_message="Failed to fetch service categories",
            notify_errors=False,
        )
        return list(data or [])

    async def stats(self) -> dict:
        data = await self._get(
            self._path("stats"),
            error_message="Failed to fetch service statistics",
            notify_errors=False,
        )
        return dict(data or {})
