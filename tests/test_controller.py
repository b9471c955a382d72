import asyncio

import httpx
import pytest

from mixer_admin.listing import controller as controller_module
from mixer_admin.listing.controller import ListController, drop_controllers, get_controller
from mixer_admin.listing.resources import get_resource
from mixer_admin.services.errors import ApiError


def _controller(name, api, query_client, debounce=0.01):
    return ListController(get_resource(name), api, query_client, debounce_seconds=debounce)


def test_load_shows_first_page(api, query_client):
    controller = _controller("customers", api, query_client)

    assert asyncio.run(controller.load())

    snapshot = controller.snapshot()
    assert len(snapshot["rows"]) == 10
    assert snapshot["pagination"]["total"] == 12
    assert snapshot["summary"] == "Showing 1 to 10 of 12 results"
    assert snapshot["window"]["pages"] == [1, 2]
    assert snapshot["query"]["status"] == "success"


def test_second_load_is_served_from_cache(api, backend, query_client):
    controller = _controller("customers", api, query_client)

    asyncio.run(controller.load())
    asyncio.run(controller.load())

    assert len(backend.requests) == 1


def test_search_is_debounced_and_resets_page(api, backend, query_client):
    controller = _controller("quotations", api, query_client)

    async def scenario():
        await controller.set_page(2)
        typed = [controller.search_input(term) for term in ("S", "Sk", "Skyline")]
        return await asyncio.gather(*typed)

    assert asyncio.run(scenario()) == [False, False, True]
    assert controller.search == "Skyline"
    assert controller.store.page == 1
    searches = [r.url.params.get("search") for r in backend.requests]
    assert searches == [None, "Skyline"]
    assert all(item["customer_name"] == "Skyline Constructions" for item in controller.page.items)


def test_filters_change_the_cache_key(api, query_client):
    controller = _controller("quotations", api, query_client)
    asyncio.run(controller.load())
    before = controller.cache_key()

    asyncio.run(controller.apply_filters(status="accepted"))

    assert controller.cache_key() != before
    assert controller.page.pagination.total == 9
    assert controller.snapshot()["active_filters"] == 1


def test_set_page_is_clamped_and_limit_validated(api, query_client):
    controller = _controller("customers", api, query_client)
    asyncio.run(controller.load())

    asyncio.run(controller.set_page(7))

    assert controller.store.page == 2
    with pytest.raises(ValueError):
        asyncio.run(controller.set_limit(15))


def test_confirmed_delete_removes_row(api, backend, query_client, notifier):
    controller = _controller("customers", api, query_client)
    asyncio.run(controller.load())
    target = controller.page.items[0]

    controller.request_delete(str(target["id"]))
    dialog = controller.dialog.to_dict()
    assert dialog["open"]
    assert dialog["variant"] == "danger"
    assert target["company_name"] in dialog["message"]

    assert asyncio.run(controller.confirm())

    assert target["id"] not in controller.page.ids()
    assert controller.page.pagination.total == 11
    assert not controller.dialog.open
    assert all(row["id"] != target["id"] for row in backend.tables["customers"])
    assert [n.message for n in notifier.drain()] == ["Customer deleted successfully"]


def test_cancelled_delete_sends_nothing(api, backend, query_client):
    controller = _controller("customers", api, query_client)
    asyncio.run(controller.load())
    sent = len(backend.requests)

    controller.request_delete(controller.page.items[0]["id"])
    assert controller.cancel()

    assert not asyncio.run(controller.confirm())
    assert len(backend.requests) == sent
    assert len(controller.page.items) == 10


def test_failed_delete_restores_row(query_client, make_api, notifier):
    customers = [{"id": i, "company_name": f"Customer {i}"} for i in (1, 2, 3)]

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "DELETE":
            return httpx.Response(500, json={"success": False, "message": "Database offline"})
        return httpx.Response(
            200, json={"success": True, "data": customers, "pagination": {"total": 3}}
        )

    controller = _controller("customers", make_api(handler), query_client)
    asyncio.run(controller.load())
    controller.request_delete(2)

    assert not asyncio.run(controller.confirm())

    assert controller.page.ids() == [1, 2, 3]
    assert [n.message for n in notifier.drain()] == ["Database offline"]
    assert not controller.dialog.open


def test_status_change_is_optimistic(api, backend, query_client):
    controller = _controller("quotations", api, query_client)
    asyncio.run(controller.load())
    target = controller.page.items[0]

    asyncio.run(controller.update_status(str(target["id"]), "rejected"))

    row = next(row for row in controller.page.items if row["id"] == target["id"])
    assert row["quotation_status"] == "rejected"
    stored = next(row for row in backend.tables["quotations"] if row["id"] == target["id"])
    assert stored["quotation_status"] == "rejected"


def test_invalid_status_is_rolled_back(api, query_client, notifier):
    controller = _controller("quotations", api, query_client)
    asyncio.run(controller.load())
    target = controller.page.items[0]

    with pytest.raises(ApiError):
        asyncio.run(controller.update_status(target["id"], "approved"))

    row = next(row for row in controller.page.items if row["id"] == target["id"])
    assert row["quotation_status"] == target["quotation_status"]
    assert len(notifier.drain()) == 1


def test_bulk_update_terms_through_dialog(api, backend, query_client, notifier):
    controller = _controller("terms", api, query_client)
    asyncio.run(controller.load())
    controller.store.select_all(["1", "2"])

    controller.request_bulk_update({"is_default": False}, "Update terms", "Mark 2 terms optional?")
    assert controller.dialog.to_dict()["variant"] == "warning"
    assert asyncio.run(controller.confirm())

    flags = {row["id"]: row["is_default"] for row in controller.page.items}
    assert flags[1] is False and flags[2] is False and flags[3] is True
    assert controller.store.selected == []
    assert [n.message for n in notifier.drain()] == ["2 terms updated successfully"]


def test_duplicate_reloads_list(api, query_client):
    controller = _controller("terms", api, query_client)
    asyncio.run(controller.load())

    asyncio.run(controller.duplicate("1"))

    assert controller.page.pagination.total == 8


def test_stats_prefer_server(api, query_client):
    controller = _controller("quotations", api, query_client)
    asyncio.run(controller.load())

    stats = asyncio.run(controller.load_stats())

    assert stats.source == "server"
    assert stats.values["total_quotations"] == 45
    assert not controller.snapshot()["stats_approximate"]


def test_machines_stats_are_approximate(api, query_client):
    controller = _controller("machines", api, query_client)
    asyncio.run(controller.load())

    stats = asyncio.run(controller.load_stats())

    assert stats.approximate
    cards = {card["key"]: card["value"] for card in controller.snapshot()["stats"]}
    assert cards == {"total_machines": "6", "active_machines": "5"}


def test_reset_clears_search_and_filters(api, query_client):
    controller = _controller("customers", api, query_client)

    async def scenario():
        await controller.search_input("pune")
        await controller.apply_filters(has_gst="true")
        await controller.reset()

    asyncio.run(scenario())

    assert controller.search == ""
    assert controller.store.search_term == ""
    assert controller.store.filters == get_resource("customers").defaults | {"page": 1}
    assert controller.page.pagination.total == 12


def test_registry_is_per_session_and_bounded(api, monkeypatch):
    monkeypatch.setattr(controller_module, "_CONTROLLERS", controller_module.OrderedDict())
    monkeypatch.setattr(controller_module, "MAX_CONTROLLERS", 2)

    first = get_controller("customers", "session-a", api)
    assert get_controller("customers", "session-a", api) is first
    assert get_controller("customers", "session-b", api) is not first
    get_controller("terms", "session-c", api)

    assert ("session-a", "customers") not in controller_module._CONTROLLERS
    drop_controllers("session-b")
    assert list(controller_module._CONTROLLERS) == [("session-c", "terms")]


def test_stat_cards_follow_a_confirmed_delete(api, query_client):
    controller = _controller("customers", api, query_client)
    asyncio.run(controller.load())
    asyncio.run(controller.load_stats())
    assert controller.stats.values["total_customers"] == 12

    controller.request_delete(controller.page.items[0]["id"])
    assert asyncio.run(controller.confirm())

    assert controller.stats.source == "server"
    assert controller.stats.values["total_customers"] == 11
    cards = {card["key"]: card["value"] for card in controller.snapshot()["stats"]}
    assert cards["total_customers"] == "11"


def test_create_form_validates_before_sending(api, backend, query_client, notifier):
    controller = _controller("customers", api, query_client)
    asyncio.run(controller.load())
    sent = len(backend.requests)

    controller.open_create()
    saved = asyncio.run(
        controller.submit_form({"company_name": "Ganesh Infra", "email": "not-an-email"})
    )

    assert not saved
    form = controller.snapshot()["form"]
    assert form["open"] and form["mode"] == "create"
    assert "Contact person is required" in form["errors"]
    assert "Valid email address is required" in form["errors"]
    assert form["values"]["company_name"] == "Ganesh Infra"
    assert len(backend.requests) == sent
    assert notifier.pending == []


def test_create_form_adds_customer_and_refreshes_stats(api, backend, query_client, notifier):
    controller = _controller("customers", api, query_client)
    asyncio.run(controller.load())
    asyncio.run(controller.load_stats())

    controller.open_create()
    saved = asyncio.run(
        controller.submit_form(
            {
                "company_name": "Ganesh Infra",
                "contact_person": "Ravi Kumar",
                "email": "ravi@ganeshinfra.in",
                "phone": "9876543210",
                "site_location": "Whitefield, Bengaluru",
                "gst_number": "",
            }
        )
    )

    assert saved
    assert not controller.form.open
    created = backend.tables["customers"][-1]
    assert created["company_name"] == "Ganesh Infra"
    assert "gst_number" not in created
    assert controller.page.pagination.total == 13
    assert controller.stats.values["total_customers"] == 13
    assert [n.message for n in notifier.drain()] == ["Customer created successfully"]


def test_edit_form_updates_row_optimistically(api, backend, query_client):
    controller = _controller("machines", api, query_client)
    asyncio.run(controller.load())
    target = controller.page.items[0]

    controller.open_edit(str(target["id"]))
    values = dict(controller.form.values)
    assert values["name"] == target["name"]
    values["price_per_day"] = "4500"
    values.pop("is_active")

    assert asyncio.run(controller.submit_form(values))

    row = next(item for item in controller.page.items if item["id"] == target["id"])
    assert row["price_per_day"] == 4500
    assert row["is_active"] is False
    stored = next(item for item in backend.tables["machines"] if item["id"] == target["id"])
    assert stored["price_per_day"] == 4500


def test_quotation_form_nests_the_item(api, backend, query_client):
    controller = _controller("quotations", api, query_client)
    asyncio.run(controller.load())

    controller.open_create()
    assert controller.form.values["item_type"] == "machine"
    saved = asyncio.run(
        controller.submit_form(
            {
                "customer_name": "Skyline Constructions",
                "customer_contact": "98450 12345",
                "item_type": "machine",
                "description": "Mixer for 3 days",
                "quantity": "3",
                "unit_price": "2500",
            }
        )
    )

    assert saved
    created = backend.tables["quotations"][-1]
    assert created["items"] == [
        {"item_type": "machine", "description": "Mixer for 3 days", "quantity": 3, "unit_price": 2500}
    ]
    assert created["quotation_status"] == "draft"
    assert created["grand_total"] == 8850.0


def test_server_rejection_keeps_form_open(query_client, make_api):
    terms = [{"id": 1, "title": "Payment", "description": "Advance", "is_default": True}]

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            return httpx.Response(
                400,
                json={
                    "success": False,
                    "message": "Validation failed",
                    "errors": [{"param": "title", "msg": "Title already exists"}],
                },
            )
        return httpx.Response(200, json={"success": True, "data": terms, "pagination": {"total": 1}})

    controller = _controller("terms", make_api(handler), query_client)
    asyncio.run(controller.load())
    controller.open_create()

    saved = asyncio.run(controller.submit_form({"title": "Payment", "description": "Advance"}))

    assert not saved
    assert controller.form.open
    assert controller.form.errors == ["title: Title already exists"]
