"""
Data loaders of the dashboard and company settings pages.

Their endpoints are read with ``notify_errors=False``, so a failed load is
reported here once, with a message naming the page, for the state to turn
into a toast.
"""

from dataclasses import dataclass, field
from typing import Any

from mixer_admin.lib import logs
from mixer_admin.services import AdminApi
from mixer_admin.services.errors import ApiError
from mixer_admin.utils import format_currency

LOG = logs.logger(__file__)


@dataclass
class DashboardData:
    """
    Headline cards and the revenue series of the dashboard.

    Attributes:
        cards: ``{"label", "value"}`` display strings.
        revenue: Points of the revenue chart.
        error: Message of a failed load, empty otherwise.
    """

    cards: list[dict[str, str]] = field(default_factory=list)
    revenue: list[dict[str, Any]] = field(default_factory=list)
    error: str = ""


def dashboard_cards(stats: dict) -> list[dict[str, str]]:
    return [
        {"label": "Customers", "value": str(stats.get("total_customers", 0))},
        {"label": "Quotations", "value": str(stats.get("total_quotations", 0))},
        {"label": "Accepted", "value": str(stats.get("accepted_quotations", 0))},
        {"label": "Active machines", "value": str(stats.get("active_machines", 0))},
        {"label": "Revenue", "value": format_currency(stats.get("total_revenue", 0))},
    ]


async def load_dashboard(api: AdminApi, period: str = "30d") -> DashboardData:
    """Fetch the dashboard figures; a failure yields zeroed cards and a notification."""
    try:
        stats = await api.dashboard.stats()
        charts = await api.dashboard.charts(period=period)
    except ApiError as exc:
        LOG.warning("Dashboard unavailable: %s", exc.message)
        api.notifier.error(f"Could not load the dashboard: {exc.message}")
        return DashboardData(cards=dashboard_cards({}), error=exc.message)
    return DashboardData(
        cards=dashboard_cards(stats),
        revenue=list(charts.get("revenue") or []),
    )


async def load_company(api: AdminApi) -> dict | None:
    """Fetch the company details; None (and a notification) when that fails."""
    try:
        return await api.company.details()
    except ApiError as exc:
        LOG.warning("Company details unavailable: %s", exc.message)
        api.notifier.error(f"Could not load company details: {exc.message}")
        return None
