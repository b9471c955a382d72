"""
In-memory implementation of the admin REST API.

DemoBackend answers the same routes and envelope as the real backend and
is mounted behind ``httpx.MockTransport``, so the whole client stack runs
unchanged without a server. This is useful for:
- Local development without the REST API running
- Tests that exercise the client, query and listing layers end to end
- Demonstrating the dashboard with realistic data
"""

import copy
import json
import math
import re
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable
from urllib.parse import unquote

import httpx

from mixer_admin import utils
from mixer_admin.data import demo_records
from mixer_admin.lib import logs
from mixer_admin.models.statuses import QuotationStatus

LOG = logs.logger(__file__)

API_PREFIX = "/api"

# Collections served under /admin/<name>
_COLLECTIONS = {
    "customers": "DEMO_CUSTOMERS",
    "quotations": "DEMO_QUOTATIONS",
    "services": "DEMO_SERVICE_RECORDS",
    "terms-conditions": "DEMO_TERMS",
    "machines": "DEMO_MACHINES",
}

# Fields matched by the free-text ``search`` parameter
_SEARCH_FIELDS = {
    "customers": ("company_name", "contact_person", "email", "phone", "city"),
    "quotations": ("quotation_number", "customer_name", "customer_contact"),
    "services": ("machine_number", "operator", "site_location", "notes"),
    "terms-conditions": ("title", "description"),
    "machines": ("machine_number", "name", "capacity"),
}

_DATE_FIELDS = {"quotations": "quotation_date", "services": "service_date"}
_CONTROL_PARAMS = {"page", "limit", "search", "sort_by", "sort_order", "start_date", "end_date", "date"}


class DemoBackend:
    """
    In-memory REST backend seeded with demo records.

    Attributes:
        tables: Records per collection name.
        company: The company profile.
        requests: Every request handled, oldest first.
    """

    def __init__(self, tables: dict[str, list[dict]], company: dict) -> None:
        self.tables = tables
        self.company = company
        self.requests: list[httpx.Request] = []
        self._routes: list[tuple[str, re.Pattern, Callable[..., httpx.Response]]] = [
            ("GET", re.compile(r"^/admin/customers/search$"), self._search_customers),
            ("GET", re.compile(r"^/admin/quotations/next-number$"), self._next_number),
            ("GET", re.compile(r"^/admin/quotations/customer/(?P<id>\d+)$"), self._customer_quotations),
            ("GET", re.compile(r"^/admin/customers/(?P<id>\d+)/quotations$"), self._customer_quotations),
            ("GET", re.compile(r"^/admin/quotations/history/(?P<name>[^/]+)/(?P<contact>[^/]+)$"), self._pricing_history),
            ("PUT", re.compile(r"^/admin/quotations/(?P<id>\d+)/status$"), self._quotation_status),
            ("GET", re.compile(r"^/admin/quotations/(?P<id>\d+)/pdf$"), self._quotation_pdf),
            ("GET", re.compile(r"^/admin/services/machine/(?P<id>\d+)$"), self._machine_services),
            ("GET", re.compile(r"^/admin/services/categories$"), self._service_categories),
            ("GET", re.compile(r"^/admin/terms-conditions/default$"), self._default_terms),
            ("POST", re.compile(r"^/admin/terms-conditions/(?P<id>\d+)/duplicate$"), self._duplicate_terms),
            ("PUT", re.compile(r"^/admin/terms-conditions/reorder$"), self._reorder_terms),
            ("GET", re.compile(r"^/admin/machines/active$"), self._active_machines),
            ("GET", re.compile(r"^/admin/company$"), self._company),
            ("PUT", re.compile(r"^/admin/company$"), self._update_company),
            ("POST", re.compile(r"^/admin/company/upload-images$"), self._upload_images),
            ("GET", re.compile(r"^/admin/company/images/status$"), self._image_status),
            ("GET", re.compile(r"^/admin/dashboard/stats$"), self._dashboard_stats),
            ("GET", re.compile(r"^/admin/dashboard/charts$"), self._dashboard_charts),
            ("GET", re.compile(r"^/admin/(?P<name>[a-z-]+)/stats$"), self._stats),
            ("GET", re.compile(r"^/admin/(?P<name>[a-z-]+)$"), self._list),
            ("POST", re.compile(r"^/admin/(?P<name>[a-z-]+)$"), self._create),
            ("GET", re.compile(r"^/admin/(?P<name>[a-z-]+)/(?P<id>\d+)$"), self._get),
            ("PUT", re.compile(r"^/admin/(?P<name>[a-z-]+)/(?P<id>\d+)$"), self._update),
            ("DELETE", re.compile(r"^/admin/(?P<name>[a-z-]+)/(?P<id>\d+)$"), self._delete),
        ]

    @classmethod
    def seeded(cls) -> "DemoBackend":
        """Return a backend holding private copies of the demo records."""
        tables = {
            name: copy.deepcopy(getattr(demo_records, attr))
            for name, attr in _COLLECTIONS.items()
        }
        return cls(tables, copy.deepcopy(demo_records.DEMO_COMPANY))

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        """Dispatch one request to its route handler."""
        self.requests.append(request)
        # raw_path keeps escaped segments such as %2F intact
        path = request.url.raw_path.decode("ascii").split("?", 1)[0]
        if path.startswith(API_PREFIX):
            path = path[len(API_PREFIX):]
        path = path.rstrip("/")
        LOG.debug("demo %s %s", request.method, path)
        for method, pattern, handler in self._routes:
            if method != request.method:
                continue
            match = pattern.match(path)
            if match:
                return handler(request, **match.groupdict())
        return _fail(404, f"Route {request.method} {path} not found")

    # Generic collection routes

    def _table(self, name: str) -> list[dict] | None:
        return self.tables.get(name)

    def _list(self, request: httpx.Request, name: str) -> httpx.Response:
        table = self._table(name)
        if table is None:
            return _fail(404, f"Route GET /admin/{name} not found")
        params = request.url.params
        rows = [row for row in table if self._matches(name, row, params)]
        sort_by = params.get("sort_by") or "id"
        descending = (params.get("sort_order") or "ASC").upper() == "DESC"
        rows.sort(key=lambda row: _sort_key(row.get(sort_by)), reverse=descending)

        page = max(_int(params.get("page"), 1), 1)
        limit = max(_int(params.get("limit"), 10), 1)
        total = len(rows)
        total_pages = math.ceil(total / limit) if total else 0
        start = (page - 1) * limit
        return _ok(
            rows[start:start + limit],
            pagination={
                "current_page": page,
                "per_page": limit,
                "total": total,
                "total_pages": total_pages,
                "has_next": page < total_pages,
                "has_prev": page > 1,
            },
        )

    def _matches(self, name: str, row: dict, params: httpx.QueryParams) -> bool:
        search = (params.get("search") or "").strip().lower()
        if search and not any(
            search in str(row.get(field) or "").lower()
            for field in _SEARCH_FIELDS.get(name, ())
        ):
            return False
        day = str(row.get(_DATE_FIELDS.get(name, "created_at")) or "")[:10]
        if params.get("start_date") and day < params["start_date"]:
            return False
        if params.get("end_date") and day > params["end_date"]:
            return False
        if params.get("date") and day != params["date"]:
            return False
        for key, value in params.items():
            if key in _CONTROL_PARAMS:
                continue
            if key == "status":
                key = "quotation_status"
            if key == "has_gst":
                if (value == "true") != bool(row.get("gst_number")):
                    return False
                continue
            if key == "customer_name":
                if value.lower() not in str(row.get(key) or "").lower():
                    return False
                continue
            if key not in row:
                continue
            if str(_wire(row[key])).lower() != value.lower():
                return False
        return True

    def _get(self, request: httpx.Request, name: str, id: str) -> httpx.Response:
        row = self._find(name, id)
        if row is None:
            return _fail(404, f"{_label(name)} not found")
        return _ok(row)

    def _create(self, request: httpx.Request, name: str) -> httpx.Response:
        table = self._table(name)
        if table is None:
            return _fail(404, f"Route POST /admin/{name} not found")
        payload = _payload(request)
        if not payload:
            return _fail(400, "Validation failed", errors=[{"msg": "Body is required", "param": ""}])
        row = {
            **payload,
            "id": max((r["id"] for r in table), default=0) + 1,
            "created_at": _now(),
        }
        if name == "quotations":
            row.setdefault("quotation_number", f"QT-{date.today().year}-{len(table) + 1:04d}")
            row.setdefault("quotation_status", QuotationStatus.DRAFT.value)
            row.update(utils.quotation_totals(row.get("items") or []))
        table.append(row)
        return _ok(row, status=201, message=f"{_label(name)} created successfully")

    def _update(self, request: httpx.Request, name: str, id: str) -> httpx.Response:
        row = self._find(name, id)
        if row is None:
            return _fail(404, f"{_label(name)} not found")
        row.update({k: v for k, v in _payload(request).items() if k != "id"})
        row["updated_at"] = _now()
        return _ok(row, message=f"{_label(name)} updated successfully")

    def _delete(self, request: httpx.Request, name: str, id: str) -> httpx.Response:
        row = self._find(name, id)
        if row is None:
            return _fail(404, f"{_label(name)} not found")
        self.tables[name].remove(row)
        return _ok(None, message=f"{_label(name)} deleted successfully")

    def _find(self, name: str, id: str) -> dict | None:
        for row in self._table(name) or []:
            if str(row.get("id")) == str(id):
                return row
        return None

    def _stats(self, request: httpx.Request, name: str) -> httpx.Response:
        table = self._table(name)
        if table is None:
            return _fail(404, f"Route GET /admin/{name}/stats not found")
        today = date.today()
        if name == "customers":
            created = [_day(row.get("created_at")) for row in table]
            data = {
                "total_customers": len(table),
                "customers_with_gst": sum(1 for row in table if row.get("gst_number")),
                "new_today": sum(1 for d in created if d == today),
                "new_this_week": sum(1 for d in created if d and d > today - timedelta(days=7)),
                "new_this_month": sum(1 for d in created if d and (d.year, d.month) == (today.year, today.month)),
            }
        elif name == "quotations":
            data = _quotation_stats(table)
        elif name == "services":
            data = {
                "total_records": len(table),
                "machines_serviced": len({row.get("machine_id") for row in table}),
                "total_engine_hours": sum(int(row.get("engine_hours") or 0) for row in table),
            }
        elif name == "terms-conditions":
            data = {
                "total_terms": len(table),
                "default_terms": sum(1 for row in table if row.get("is_default")),
                "categories": len({row.get("category") for row in table}),
            }
        else:
            data = {"total": len(table)}
        data["last_updated"] = _now()
        return _ok(data)

    # Resource specific routes

    def _search_customers(self, request: httpx.Request) -> httpx.Response:
        query = (request.url.params.get("q") or "").strip().lower()
        if not query:
            return _fail(400, "Search query is required")
        rows = [
            row for row in self.tables["customers"]
            if any(query in str(row.get(f) or "").lower() for f in _SEARCH_FIELDS["customers"])
        ]
        return _ok(rows, count=len(rows), searchQuery=query)

    def _next_number(self, request: httpx.Request) -> httpx.Response:
        year = date.today().year
        return _ok({"quotation_number": f"QT-{year}-{len(self.tables['quotations']) + 1:04d}"})

    def _customer_quotations(self, request: httpx.Request, id: str) -> httpx.Response:
        rows = [row for row in self.tables["quotations"] if str(row.get("customer_id")) == id]
        return _ok(rows, count=len(rows))

    def _pricing_history(self, request: httpx.Request, name: str, contact: str) -> httpx.Response:
        name, contact = unquote(name).lower(), unquote(contact)
        rows = [
            row for row in self.tables["quotations"]
            if str(row.get("customer_name")).lower() == name and row.get("customer_contact") == contact
        ]
        return _ok(rows)

    def _quotation_status(self, request: httpx.Request, id: str) -> httpx.Response:
        row = self._find("quotations", id)
        if row is None:
            return _fail(404, "Quotation not found")
        status = _payload(request).get("status")
        if status not in QuotationStatus.values():
            return _fail(400, "Invalid status")
        row["quotation_status"] = status
        return _ok(row, message="Quotation status updated successfully")

    def _quotation_pdf(self, request: httpx.Request, id: str) -> httpx.Response:
        row = self._find("quotations", id)
        if row is None:
            return _fail(404, "Quotation not found")
        content = f"%PDF-1.4\n% {row['quotation_number']}\n%%EOF\n".encode()
        return httpx.Response(200, content=content, headers={"content-type": "application/pdf"})

    def _machine_services(self, request: httpx.Request, id: str) -> httpx.Response:
        rows = [row for row in self.tables["services"] if str(row.get("machine_id")) == id]
        rows.sort(key=lambda row: row.get("service_date") or "", reverse=True)
        return _ok(rows)

    def _service_categories(self, request: httpx.Request) -> httpx.Response:
        return _ok(copy.deepcopy(demo_records.DEMO_SERVICE_CATEGORIES))

    def _default_terms(self, request: httpx.Request) -> httpx.Response:
        rows = [row for row in self.tables["terms-conditions"] if row.get("is_default")]
        return _ok(sorted(rows, key=lambda row: row.get("display_order") or 0))

    def _duplicate_terms(self, request: httpx.Request, id: str) -> httpx.Response:
        row = self._find("terms-conditions", id)
        if row is None:
            return _fail(404, "Terms and conditions not found")
        table = self.tables["terms-conditions"]
        duplicate = {
            **row,
            "id": max(r["id"] for r in table) + 1,
            "title": f"{row['title']} (Copy)",
            "is_default": False,
            "display_order": max(r.get("display_order") or 0 for r in table) + 1,
            "created_at": _now(),
        }
        table.append(duplicate)
        return _ok(duplicate, status=201, message="Terms and conditions duplicated successfully")

    def _reorder_terms(self, request: httpx.Request) -> httpx.Response:
        items = _payload(request).get("items")
        if not isinstance(items, list) or not items:
            return _fail(400, "Order data array is required")
        for item in items:
            row = self._find("terms-conditions", item.get("id"))
            if row is not None:
                row["display_order"] = item.get("display_order")
        return _ok(None, message="Display order updated successfully")

    def _active_machines(self, request: httpx.Request) -> httpx.Response:
        return _ok([row for row in self.tables["machines"] if row.get("is_active")])

    def _company(self, request: httpx.Request) -> httpx.Response:
        return _ok(self.company)

    def _update_company(self, request: httpx.Request) -> httpx.Response:
        self.company.update(_payload(request))
        return _ok(self.company, message="Company details updated successfully")

    def _upload_images(self, request: httpx.Request) -> httpx.Response:
        body = request.content
        uploaded = [
            field for field in ("logo", "signature")
            if f'name="{field}"'.encode() in body
        ]
        if not uploaded:
            return _fail(400, "At least one image file is required")
        for field in uploaded:
            self.company[f"{field}_url"] = f"/uploads/company/{field}.png"
        return _ok(self.company, message="Images uploaded successfully")

    def _image_status(self, request: httpx.Request) -> httpx.Response:
        return _ok({
            "has_logo": bool(self.company.get("logo_url")),
            "has_signature": bool(self.company.get("signature_url")),
        })

    def _dashboard_stats(self, request: httpx.Request) -> httpx.Response:
        quotations = self.tables["quotations"]
        accepted = [row for row in quotations if row.get("quotation_status") == "accepted"]
        return _ok({
            "total_customers": len(self.tables["customers"]),
            "total_quotations": len(quotations),
            "accepted_quotations": len(accepted),
            "active_machines": sum(1 for row in self.tables["machines"] if row.get("is_active")),
            "total_revenue": round(sum(float(row.get("grand_total") or 0) for row in accepted), 2),
            "service_records": len(self.tables["services"]),
        })

    def _dashboard_charts(self, request: httpx.Request) -> httpx.Response:
        monthly: dict[str, float] = {}
        for row in self.tables["quotations"]:
            month = str(row.get("quotation_date") or "")[:7]
            monthly[month] = monthly.get(month, 0) + float(row.get("grand_total") or 0)
        return _ok({
            "chart_type": request.url.params.get("chart_type", "all"),
            "period": request.url.params.get("period", "30d"),
            "revenue": [{"month": month, "total": round(total, 2)} for month, total in sorted(monthly.items())],
        })


def _quotation_stats(rows: list[dict]) -> dict:
    accepted = [row for row in rows if row.get("quotation_status") == QuotationStatus.ACCEPTED.value]
    revenue = sum(float(row.get("grand_total") or 0) for row in accepted)
    return {
        "total_quotations": len(rows),
        "pending_quotations": sum(
            1 for row in rows
            if row.get("quotation_status") in (QuotationStatus.DRAFT.value, QuotationStatus.SENT.value)
        ),
        "accepted_quotations": len(accepted),
        "total_revenue": round(revenue, 2),
        "average_quotation_amount": round(revenue / len(accepted), 2) if accepted else 0,
        "delivered_orders": sum(
            1 for row in rows if row.get("delivery_status") in ("delivered", "completed")
        ),
    }


def _ok(data: Any, status: int = 200, message: str | None = None, **extra: Any) -> httpx.Response:
    body = {"success": True, "data": data, **extra}
    if message:
        body["message"] = message
    return httpx.Response(status, json=body)


def _fail(status: int, message: str, errors: list | None = None) -> httpx.Response:
    body = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return httpx.Response(status, json=body)


def _payload(request: httpx.Request) -> dict:
    if not request.content:
        return {}
    try:
        payload = json.loads(request.content)
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def _label(name: str) -> str:
    return {
        "customers": "Customer",
        "quotations": "Quotation",
        "services": "Service record",
        "terms-conditions": "Terms and conditions",
        "machines": "Machine",
    }.get(name, name.capitalize())


def _wire(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def _sort_key(value: Any) -> tuple:
    if value is None:
        return (0, "")
    if isinstance(value, (int, float)):
        return (1, value)
    return (2, str(value).lower())


def _int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _day(value: Any) -> date | None:
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()
