"""
Terms & conditions printed on quotations.

Terms are ordered by ``display_order``; the ones flagged ``is_default`` are
preselected when a quotation is created.
"""

from __future__ import annotations

import asyncio
from typing import Any, Iterable, Mapping

from mixer_admin.lib import logs
from mixer_admin.models.common import ListPage, Record
from mixer_admin.services.base import ResourceApi, require

LOG = logs.logger(__file__)

LIST_FILTERS = ("category", "is_default", "sort_by", "sort_order")


class TermsApi(ResourceApi):
    base_path = "/admin/terms-conditions"

    async def list(self, filters: Mapping[str, Any] | None = None) -> ListPage:
        params = {"page": 1, "limit": 10, **(filters or {})}
        return await self._list(
            self.base_path, params, error_message="Failed to fetch terms and conditions"
        )

    async def get(self, terms_id: Any) -> Record | None:
        require(terms_id, "Terms and conditions ID is required")
        return await self._get(
            self._path(terms_id),
            error_message=f"Failed to fetch terms and conditions with ID {terms_id}",
            quiet_statuses=(404,),
        )

    async def defaults(self) -> list[Record]:
        data = await self._get(
            self._path("default"),
            error_message="Failed to fetch default terms and conditions",
            notify_errors=False,
        )
        return list(data or [])

    async def create(self, data: Mapping[str, Any]) -> Record | None:
        require(data, "Terms and conditions data is required")
        body = await self._send(
            "POST",
            self.base_path,
            json=dict(data),
            error_message="Failed to create terms and conditions",
            success_message="Terms and conditions created successfully",
        )
        return body.get("data")

    async def update(
        self, terms_id: Any, data: Mapping[str, Any], success_message: str | None = None
    ) -> Record | None:
        """
        Update one entry.

        Args:
            terms_id: Entry id.
            data: Changed fields.
            success_message: Override for the success toast; pass ``None``
                             to use the default message.
        """
        require(terms_id, "Terms and conditions ID is required")
        require(data, "Terms and conditions data is required")
        body = await self._send(
            "PUT",
            self._path(terms_id),
            json=dict(data),
            error_message=f"Failed to update terms and conditions with ID {terms_id}",
            success_message=success_message or "Terms and conditions updated successfully",
        )
        return body.get("data")

    async def delete(self, terms_id: Any) -> None:
        require(terms_id, "Terms and conditions ID is required")
        await self._send(
            "DELETE",
            self._path(terms_id),
            error_message=f"Failed to delete terms and conditions with ID {terms_id}",
            success_message="Terms and conditions deleted successfully",
        )

    async def duplicate(self, terms_id: Any) -> Record | None:
        require(terms_id, "Terms and conditions ID is required")
        body = await self._send(
            "POST",
            self._path(terms_id, "duplicate"),
            error_message=f"Failed to duplicate terms and conditions with ID {terms_id}",
            success_message="Terms and conditions duplicated successfully",
        )
        return body.get("data")

    async def reorder(self, items: list[Mapping[str, Any]]) -> None:
        """
        Persist a new display order.

        Args:
            items: ``{"id", "display_order"}`` pairs.
        """
        require(items, "Order data array is required")
        await self._send(
            "PUT",
            self._path("reorder"),
            json={"items": [dict(item) for item in items]},
            error_message="Failed to update display order",
            success_message="Display order updated successfully",
        )

    async def bulk_update(self, ids: Iterable[Any], changes: Mapping[str, Any]) -> None:
        """
        Apply the same change to several entries.

        The backend has no bulk endpoint, so one PUT is issued per id and
        individual toasts are suppressed in favour of a single summary.
        """
        ids = list(ids)
        require(ids, "Terms IDs array is required")
        require(changes, "Terms and conditions data is required")
        LOG.info("bulk_update - ids:%s changes:%s", ids, dict(changes))
        await asyncio.gather(
            *(self._send(
                "PUT",
                self._path(terms_id),
                json=dict(changes),
                error_message=f"Failed to update terms and conditions with ID {terms_id}",
            ) for terms_id in ids)
        )
        self.notifier.success(f"{len(ids)} terms updated successfully")

    async def stats(self) -> dict:
        data = await self._get(
            self._path("stats"),
            error_message="Failed to fetch terms statistics",
            notify_errors=False,
        )
        return dict(data or {})
