import asyncio

import httpx
import pytest

from mixer_admin.models.common import Pagination
from mixer_admin.services.base import clean_params
from mixer_admin.services.errors import (
    ClientValidationError,
    ServerRejectedError,
    TransportError,
    normalize_field_errors,
)


def _reply(status, body):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json=body)

    return handler


def test_clean_params_drops_none_and_empty_strings():
    params = clean_params(
        {"page": 1, "search": "", "city": None, "limit": 0, "has_gst": True, "is_default": False}
    )

    assert params == {"page": 1, "limit": 0, "has_gst": "true", "is_default": "false"}


def test_list_unwraps_envelope_and_normalizes_pagination(make_api):
    api = make_api(
        _reply(
            200,
            {
                "success": True,
                "data": [{"id": 1}, {"id": 2}],
                "pagination": {"currentPage": 2, "perPage": 2, "totalItems": 5},
            },
        )
    )

    page = asyncio.run(api.customers.list({"page": 2, "limit": 2}))

    assert page.ids() == [1, 2]
    assert page.pagination == Pagination(current_page=2, per_page=2, total=5, total_pages=3)
    assert page.pagination.has_prev_page
    assert page.pagination.has_next_page
    assert page.pagination.summary() == "Showing 3 to 4 of 5 results"


def test_list_without_pagination_counts_items(make_api):
    api = make_api(_reply(200, {"success": True, "data": [{"id": 1}, {"id": 2}, {"id": 3}]}))

    page = asyncio.run(api.machines.list())

    assert page.pagination.total == 3
    assert page.pagination.total_pages == 1
    assert not page.pagination.has_next_page


def test_empty_result_has_no_pages(make_api):
    api = make_api(
        _reply(200, {"success": True, "data": [], "pagination": {"current_page": 1, "total": 0}})
    )

    page = asyncio.run(api.customers.list())

    assert page.pagination.total_pages == 0
    assert page.pagination.summary() == "Showing 0 to 0 of 0 results"
    assert not page.pagination.has_prev_page
    assert not page.pagination.has_next_page


@pytest.mark.parametrize(
    "status,body,message",
    [
        (401, {"success": False, "message": "jwt expired"}, "Session expired. Please login again."),
        (404, {}, "Resource not found."),
        (429, {}, "Too many requests. Please wait a moment."),
        (500, {}, "Server error. Please try again later."),
        (503, {"success": False, "message": "Database offline"}, "Database offline"),
        (400, {"success": False}, "Failed to fetch customers"),
    ],
)
def test_rejections_are_translated_and_notified_once(make_api, notifier, status, body, message):
    api = make_api(_reply(status, body))

    with pytest.raises(ServerRejectedError) as info:
        asyncio.run(api.customers.list())

    assert info.value.message == message
    assert info.value.http_status == status
    assert info.value.notified
    assert [n.message for n in notifier.drain()] == [message]


def test_retryable_only_for_server_errors():
    assert ServerRejectedError("x", http_status=500).retryable
    assert ServerRejectedError("x", http_status=502).retryable
    assert not ServerRejectedError("x", http_status=429).retryable
    assert not ServerRejectedError("x", http_status=404).retryable
    assert TransportError("x").retryable
    assert not ClientValidationError("x").retryable


def test_success_false_envelope_is_rejected_with_field_errors(make_api):
    api = make_api(
        _reply(
            200,
            {
                "success": False,
                "message": "Validation failed",
                "errors": [
                    {"msg": "Email is invalid", "param": "email"},
                    "Phone is required",
                ],
            },
        )
    )

    with pytest.raises(ServerRejectedError) as info:
        asyncio.run(api.customers.create({"company_name": "Acme"}))

    assert info.value.message == "Validation failed"
    assert info.value.field_errors == [
        {"field": "email", "message": "Email is invalid"},
        {"field": "", "message": "Phone is required"},
    ]


def test_normalize_field_errors_accepts_single_items():
    assert normalize_field_errors(None) == []
    assert normalize_field_errors("Bad input") == [{"field": "", "message": "Bad input"}]
    assert normalize_field_errors({"path": "phone", "message": "Too short"}) == [
        {"field": "phone", "message": "Too short"}
    ]


def test_transport_failure_becomes_transport_error(make_api, notifier):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    api = make_api(handler)

    with pytest.raises(TransportError) as info:
        asyncio.run(api.quotations.list())

    assert info.value.message == "Failed to fetch quotations"
    assert len(notifier.pending) == 1


def test_not_found_lookup_is_quiet(make_api, notifier):
    api = make_api(_reply(404, {"success": False, "message": "Customer not found"}))

    with pytest.raises(ServerRejectedError):
        asyncio.run(api.customers.get(99))

    assert notifier.pending == []


def test_client_validation_happens_before_network(make_api, notifier):
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={"success": True, "data": None})

    api = make_api(handler)

    with pytest.raises(ClientValidationError, match="Customer ID is required"):
        asyncio.run(api.customers.get(None))
    with pytest.raises(ClientValidationError, match="Search query is required"):
        asyncio.run(api.customers.search_for_quotation("   "))
    with pytest.raises(ClientValidationError, match="Invalid status"):
        asyncio.run(api.quotations.update_status(1, "approved"))
    with pytest.raises(ClientValidationError, match="At least one image file is required"):
        asyncio.run(api.company.upload_images())

    assert requests == []
    assert notifier.pending == []


def test_mutations_report_server_message_on_success(make_api, notifier):
    api = make_api(_reply(200, {"success": True, "data": {"id": 3}, "message": "Saved!"}))

    data = asyncio.run(api.machines.update(3, {"name": "Mixer"}))

    assert data == {"id": 3}
    assert [n.message for n in notifier.drain()] == ["Saved!"]


def test_bearer_token_is_sent(notifier):
    from mixer_admin.lib import clients
    from mixer_admin.services import AdminApi

    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("authorization")
        return httpx.Response(200, json={"success": True, "data": []})

    http = clients.build_http_client(
        base_url="http://api.test/api", token="secret", transport=httpx.MockTransport(handler)
    )
    asyncio.run(AdminApi.create(http, notifier).machines.active())

    assert seen["auth"] == "Bearer secret"
