"""
Mixer machine inventory.
"""

from __future__ import annotations

from typing import Any, Mapping

from mixer_admin.models.common import ListPage, Record
from mixer_admin.services.base import ResourceApi, require

LIST_FILTERS = ("is_active",)


class MachineApi(ResourceApi):
    base_path = "/admin/machines"

    async def list(self, filters: Mapping[str, Any] | None = None) -> ListPage:
        params = {"page": 1, "limit": 10, **(filters or {})}
        return await self._list(
            self.base_path, params, error_message="Failed to fetch machines"
        )

    async def active(self) -> list[Record]:
        """Machines available for new quotations."""
        data = await self._get(
            self._path("active"),
            error_message="Failed to fetch active machines",
            notify_errors=False,
        )
        return list(data or [])

    async def get(self, machine_id: Any) -> Record | None:
        require(machine_id, "Machine ID is required")
        return await self._get(
            self._path(machine_id),
            error_message=f"Failed to fetch machine with ID {machine_id}",
            quiet_statuses=(404,),
        )

    async def create(self, data: Mapping[str, Any]) -> Record | None:
        require(data, "Machine data is required")
        body = await self._send(
            "POST",
            self.base_path,
            json=dict(data),
            error_message="Failed to create machine",
            success_message="Machine created successfully",
        )
        return body.get("data")

    async def update(self, machine_id: Any, data: Mapping[str, Any]) -> Record | None:
        require(machine_id, "Machine ID is required")
        require(data, "Machine data is required")
        body = await self._send(
            "PUT",
            self._path(machine_id),
            json=dict(data),
            error_message=f"Failed to update machine with ID {machine_id}",
            success_message="Machine updated successfully",
        )
        return body.get("data")

    async def delete(self, machine_id: Any) -> None:
        require(machine_id, "Machine ID is required")
        await self._send(
            "DELETE",
            self._path(machine_id),
            error_message=f"Failed to delete machine with ID {machine_id}",
            success_message="Machine deleted successfully",
        )
