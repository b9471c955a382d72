import asyncio

from mixer_admin.query.observer import ListQuery, QueryStatus
from mixer_admin.services.errors import ServerRejectedError


def test_successful_load(query_client):
    query = ListQuery(query_client)

    async def fetch():
        assert query.is_loading
        assert query.status is QueryStatus.LOADING
        return ["row"]

    assert asyncio.run(query.load(("customers", 1), fetch))
    assert query.data == ["row"]
    assert query.status is QueryStatus.SUCCESS
    assert not query.is_fetching


def test_stale_data_stays_visible_during_background_refetch(query_client, clock):
    query_client.set_query_data(("customers", 1), ["old"])
    clock.advance(600)
    query = ListQuery(query_client)
    seen = {}

    async def fetch():
        seen["data"] = query.data
        seen["is_refetching"] = query.is_refetching
        seen["is_loading"] = query.is_loading
        return ["new"]

    asyncio.run(query.load(("customers", 1), fetch))

    assert seen == {"data": ["old"], "is_refetching": True, "is_loading": False}
    assert query.data == ["new"]


def test_previous_page_kept_while_next_key_loads(query_client):
    query = ListQuery(query_client)

    async def scenario():
        async def page_one():
            return ["page-1"]

        await query.load(("customers", 1), page_one)
        release = asyncio.Event()

        async def page_two():
            await release.wait()
            return ["page-2"]

        pending = asyncio.ensure_future(query.load(("customers", 2), page_two))
        await asyncio.sleep(0)
        during = (query.data, query.is_refetching)
        release.set()
        await pending
        return during

    assert asyncio.run(scenario()) == (["page-1"], True)
    assert query.data == ["page-2"]


def test_late_response_is_discarded(query_client):
    query = ListQuery(query_client)

    async def scenario():
        slow_release = asyncio.Event()

        async def slow():
            await slow_release.wait()
            return ["stale search"]

        async def fast():
            return ["latest search"]

        slow_load = asyncio.ensure_future(query.load(("customers", "a", 1), slow))
        await asyncio.sleep(0)
        latest = await query.load(("customers", "ab", 1), fast)
        slow_release.set()
        superseded = await slow_load
        return latest, superseded

    assert asyncio.run(scenario()) == (True, False)
    assert query.data == ["latest search"]
    assert query.key == ("customers", "ab", 1)


def test_failure_keeps_previous_data(query_client):
    query = ListQuery(query_client)

    async def ok():
        return ["kept"]

    async def fail():
        raise ServerRejectedError("Resource not found.", http_status=404)

    asyncio.run(query.load(("terms", 1), ok))
    assert not asyncio.run(query.load(("terms", 2), fail))

    assert query.status is QueryStatus.ERROR
    assert query.data == ["kept"]
    assert not query.show_error
    assert query.to_dict()["error"] == "Resource not found."


def test_failure_without_data_shows_error(query_client):
    query = ListQuery(query_client)

    async def fail():
        raise ServerRejectedError("Server error. Please try again later.", http_status=500)

    query_client.retry = 0
    asyncio.run(query.load(("terms", 1), fail))

    assert query.show_error
    assert query.to_dict() == {
        "status": "error",
        "is_loading": False,
        "is_refetching": False,
        "show_error": True,
        "error": "Server error. Please try again later.",
    }
