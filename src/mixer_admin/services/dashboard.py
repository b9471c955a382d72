"""
Dashboard figures: headline stats and chart series.
"""

from mixer_admin.services.base import ResourceApi


class DashboardApi(ResourceApi):
    base_path = "/admin/dashboard"

    async def stats(self) -> dict:
        data = await self._get(
            self._path("stats"),
            error_message="Failed to fetch dashboard statistics",
            notify_errors=False,
        )
        return dict(data or {})

    async def charts(self, chart_type: str = "all", period: str = "30d") -> dict:
        """
        Chart series for the dashboard.

        Args:
            chart_type: Which chart to return, or "all".
            period: Window such as "7d", "30d" or "12m".
        """
        data = await self._get(
            self._path("charts"),
            params={"chart_type": chart_type, "period": period},
            error_message="Failed to fetch chart data",
            notify_errors=False,
        )
        return dict(data or {})
