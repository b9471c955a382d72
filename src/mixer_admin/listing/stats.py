"""
Stat cards above list pages.

Figures come from the resource's stats endpoint when it answers. When it
does not (the endpoint is missing, failed, or reported a fallback), the
cards are computed from the rows of the loaded page instead and marked
``approximate``: they describe that page only, not the whole collection,
and the UI labels them accordingly. The two sources are never mixed.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable, Mapping

from mixer_admin import utils
from mixer_admin.models.statuses import QuotationStatus


@dataclass(frozen=True)
class StatCard:
    """
    Definition of one card.

    Attributes:
        key: Field of the stats payload.
        label: Card title.
        kind: "count", "currency" or "percent".
    """

    key: str
    label: str
    kind: str = "count"

    def format(self, value: Any) -> str:
        if self.kind == "currency":
            return utils.format_currency(value)
        if self.kind == "percent":
            return utils.format_percent(value)
        return str(int(utils.to_number(value)))


@dataclass
class StatsView:
    """
    Resolved stats of a page.

    Attributes:
        values: Figures by key.
        source: "server", "client" or "none".
        approximate: True when computed from the loaded page only.
    """

    values: dict[str, Any] = field(default_factory=dict)
    source: str = "none"
    approximate: bool = False

    def cards(self, definitions: Iterable[StatCard]) -> list[dict]:
        return [
            {
                "key": card.key,
                "label": card.label,
                "value": card.format(self.values.get(card.key, 0)),
            }
            for card in definitions
        ]


def _count(items: list[dict], predicate) -> int:
    return sum(1 for item in items if predicate(item))


def _created_this_month(item: Mapping[str, Any], today: date) -> bool:
    created = utils.parse_date(item.get("created_at"))
    return created is not None and (created.year, created.month) == (today.year, today.month)


def _customers(items: list[dict]) -> dict:
    today = date.today()
    return {
        "total_customers": len(items),
        "customers_with_gst": _count(items, lambda item: bool(item.get("gst_number"))),
        "new_this_month": _count(items, lambda item: _created_this_month(item, today)),
    }


def _quotations(items: list[dict]) -> dict:
    accepted = [
        item for item in items if item.get("quotation_status") == QuotationStatus.ACCEPTED.value
    ]
    revenue = sum(utils.to_number(item.get("grand_total")) for item in accepted)
    return {
        "total_quotations": len(items),
        "pending_quotations": _count(
            items,
            lambda item: item.get("quotation_status")
            in (QuotationStatus.DRAFT.value, QuotationStatus.SENT.value),
        ),
        "accepted_quotations": len(accepted),
        "total_revenue": round(revenue, 2),
        "average_quotation_amount": round(revenue / len(accepted), 2) if accepted else 0,
        "delivered_orders": _count(
            items, lambda item: item.get("delivery_status") in ("delivered", "completed")
        ),
    }


def _services(items: list[dict]) -> dict:
    return {
        "total_records": len(items),
        "machines_serviced": len({item.get("machine_id") for item in items}),
        "total_engine_hours": sum(utils.to_number(item.get("engine_hours")) for item in items),
    }


def _terms(items: list[dict]) -> dict:
    return {
        "total_terms": len(items),
        "default_terms": _count(items, lambda item: bool(item.get("is_default"))),
        "categories": len({item.get("category") for item in items if item.get("category")}),
    }


def _machines(items: list[dict]) -> dict:
    return {
        "total_machines": len(items),
        "active_machines": _count(items, lambda item: bool(item.get("is_active"))),
    }


_CLIENT_STATS = {
    "customers": _customers,
    "quotations": _quotations,
    "services": _services,
    "terms": _terms,
    "machines": _machines,
}


def conversion_rate(values: Mapping[str, Any]) -> float:
    """Accepted quotations as a percentage of all quotations."""
    total = utils.to_number(values.get("total_quotations"))
    if not total:
        return 0.0
    return round(utils.to_number(values.get("accepted_quotations")) / total * 100, 1)


def client_stats(resource: str, items: Iterable[Mapping[str, Any]]) -> dict:
    """Compute the stats of ``resource`` from the given rows."""
    compute = _CLIENT_STATS.get(resource)
    values = compute([dict(item) for item in items]) if compute else {}
    if resource == "quotations":
        values["conversion_rate"] = conversion_rate(values)
    return values


def resolve_stats(
    resource: str,
    server: Mapping[str, Any] | None,
    items: Iterable[Mapping[str, Any]],
) -> StatsView:
    """
    Choose between server and page-computed stats.

    Args:
        resource: Resource name.
        server: Stats endpoint payload, or None when it failed.
        items: Rows of the loaded page.
    """
    if server and not server.get("fallback"):
        values = dict(server)
        if resource == "quotations" and "conversion_rate" not in values:
            values["conversion_rate"] = conversion_rate(values)
        return StatsView(values=values, source="server")
    if resource not in _CLIENT_STATS:
        return StatsView()
    return StatsView(values=client_stats(resource, items), source="client", approximate=True)
