import asyncio

import httpx

from mixer_admin.models.statuses import QuotationStatus
from mixer_admin.services.quotations import list_params


def test_filtered_request_matches_backend_contract(make_api):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "success": True,
                "data": [{"id": i} for i in range(1, 21)],
                "pagination": {"current_page": 1, "per_page": 20, "total": 45, "total_pages": 3},
            },
        )

    api = make_api(handler)

    page = asyncio.run(
        api.quotations.list({"status": "accepted", "start_date": "2024-01-01", "page": 1})
    )

    assert seen[0].url.path == "/api/admin/quotations"
    assert seen[0].url.query.decode() == (
        "page=1&limit=20&status=accepted&start_date=2024-01-01&sort_by=created_at&sort_order=DESC"
    )
    assert page.pagination.total_pages == 3
    assert page.pagination.has_next_page
    assert not page.pagination.has_prev_page


def test_list_params_defaults():
    params = list_params({"search": "QT-2024", "sort_order": "ASC"})

    assert params["page"] == 1
    assert params["limit"] == 20
    assert params["sort_by"] == "created_at"
    assert params["sort_order"] == "ASC"
    assert params["search"] == "QT-2024"


def test_status_update_accepts_enum(api, backend, notifier):
    asyncio.run(api.quotations.update_status(1, QuotationStatus.ACCEPTED))

    row = next(row for row in backend.tables["quotations"] if row["id"] == 1)
    assert row["quotation_status"] == "accepted"
    assert [n.message for n in notifier.drain()] == ["Quotation status updated successfully"]


def test_pricing_history_escapes_path_segments(api, backend):
    customer = backend.tables["customers"][0]
    backend.tables["quotations"][0].update(
        customer_name="A/B Builders", customer_contact=customer["phone"]
    )

    rows = asyncio.run(api.quotations.pricing_history("A/B Builders", customer["phone"]))

    assert [row["id"] for row in rows] == [backend.tables["quotations"][0]["id"]]
    assert "/history/A%2FB%20Builders/" in str(backend.requests[-1].url)


def test_pdf_returns_bytes(api):
    content = asyncio.run(api.quotations.pdf(2))

    assert content.startswith(b"%PDF")
    assert b"QT-2024-0002" in content


def test_next_number_and_customer_history(api):
    number = asyncio.run(api.quotations.next_number())
    history = asyncio.run(api.quotations.customer_history(1))

    assert number["quotation_number"].endswith("-0046")
    assert history
    assert all(row["customer_id"] == 1 for row in history)
