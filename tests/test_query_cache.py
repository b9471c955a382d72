import asyncio
import time

import pytest

from mixer_admin.query import keys
from mixer_admin.query.cache import QueryCache
from mixer_admin.services.errors import ServerRejectedError, TransportError


def test_list_key_orders_filters_and_normalizes_blanks():
    names = ("city", "has_gst", "sort_by", "sort_order")

    key = keys.list_key("customers", " acme ", {"sort_order": "DESC", "city": ""}, names, 2, 10)

    assert key == ("customers", "acme", None, None, None, "DESC", 2, 10)
    assert key == keys.list_key("customers", "acme", {"sort_order": "DESC"}, names, 2, 10)
    assert key != keys.list_key("customers", "acme", {"sort_order": "DESC"}, names, 3, 10)
    assert keys.matches(key, keys.resource_prefix("customers"))
    assert not keys.matches(key, keys.resource_prefix("quotations"))
    assert keys.key_hash(key) == keys.key_hash(tuple(key))


def test_fresh_entry_is_served_without_fetching(query_client, clock):
    calls = []

    async def fetch():
        calls.append(clock())
        return f"result-{len(calls)}"

    async def scenario():
        first = await query_client.fetch_query(("customers", 1), fetch)
        clock.advance(299)
        second = await query_client.fetch_query(("customers", 1), fetch)
        clock.advance(2)
        third = await query_client.fetch_query(("customers", 1), fetch)
        return first, second, third

    assert asyncio.run(scenario()) == ("result-1", "result-1", "result-2")
    assert len(calls) == 2


def test_force_and_invalidate_trigger_refetch(query_client):
    calls = []

    async def fetch():
        calls.append(1)
        return len(calls)

    async def scenario():
        await query_client.fetch_query(("terms", 1), fetch)
        forced = await query_client.fetch_query(("terms", 1), fetch, force=True)
        assert query_client.invalidate_queries(("terms",)) == 1
        refreshed = await query_client.fetch_query(("terms", 1), fetch)
        return forced, refreshed

    assert asyncio.run(scenario()) == (2, 3)


def test_invalidated_entry_stays_readable(query_cache):
    query_cache.set(("machines", 1), ["a"])

    query_cache.invalidate(("machines",))

    entry = query_cache.get(("machines", 1))
    assert entry.invalidated
    assert entry.data == ["a"]
    assert not query_cache.is_fresh(entry, 300)


def test_concurrent_fetches_share_one_request(query_client):
    calls = []

    async def scenario():
        release = asyncio.Event()

        async def fetch():
            calls.append(1)
            await release.wait()
            return "shared"

        first = asyncio.ensure_future(query_client.fetch_query(("quotations", 1), fetch))
        second = asyncio.ensure_future(query_client.fetch_query(("quotations", 1), fetch))
        await asyncio.sleep(0)
        assert query_client.is_fetching(("quotations",))
        release.set()
        return await asyncio.gather(first, second)

    assert asyncio.run(scenario()) == ["shared", "shared"]
    assert calls == [1]
    assert not query_client.is_fetching()


def test_server_errors_retry_with_backoff(query_client, sleeps):
    attempts = []

    async def fetch():
        attempts.append(1)
        if len(attempts) == 1:
            raise ServerRejectedError("Server error. Please try again later.", http_status=503)
        return "ok"

    assert asyncio.run(query_client.fetch_query(("services", 1), fetch)) == "ok"
    assert len(attempts) == 2
    assert sleeps == [1.0]


def test_retries_are_bounded(query_client, sleeps):
    query_client.retry = 2
    attempts = []

    async def fetch():
        attempts.append(1)
        raise TransportError("Failed to fetch services")

    with pytest.raises(TransportError):
        asyncio.run(query_client.fetch_query(("services", 1), fetch))

    assert len(attempts) == 3
    assert sleeps == [1.0, 2.0]


@pytest.mark.parametrize("status", [400, 401, 404, 429])
def test_client_errors_are_not_retried(query_client, sleeps, status):
    attempts = []

    async def fetch():
        attempts.append(1)
        raise ServerRejectedError("rejected", http_status=status)

    with pytest.raises(ServerRejectedError):
        asyncio.run(query_client.fetch_query(("services", 1), fetch))

    assert len(attempts) == 1
    assert sleeps == []


def test_cancelled_fetch_does_not_overwrite_cache(query_client):
    async def scenario():
        release = asyncio.Event()

        async def fetch():
            await release.wait()
            return ["A", "B", "C"]

        pending = asyncio.ensure_future(query_client.fetch_query(("customers", 1), fetch))
        await asyncio.sleep(0)
        assert query_client.cancel_queries(("customers",)) == 1
        query_client.set_query_data(("customers", 1), ["A", "C"])
        release.set()
        return await pending

    assert asyncio.run(scenario()) == ["A", "C"]
    assert query_client.get_query_data(("customers", 1)) == ["A", "C"]


def test_set_query_data_accepts_updater(query_client):
    query_client.set_query_data(("terms", 1), [1, 2])

    query_client.set_query_data(("terms", 1), lambda old: old + [3])

    assert query_client.get_query_data(("terms", 1)) == [1, 2, 3]


def test_entries_are_evicted_after_cache_time(tmp_path):
    cache = QueryCache(tmp_path / "short", cache_time=0.05)
    try:
        cache.set(("customers", 1), "data")
        assert cache.get_data(("customers", 1)) == "data"
        time.sleep(0.1)
        assert cache.get(("customers", 1)) is None
    finally:
        cache.close()


def test_remove_by_prefix(query_cache):
    query_cache.set(("customers", 1), "a")
    query_cache.set(("customers", 2), "b")
    query_cache.set(("quotations", 1), "c")

    assert query_cache.remove(("customers",)) == 2

    assert query_cache.keys() == [("quotations", 1)]


def test_restore_puts_back_absence(query_cache):
    snapshot = query_cache.snapshot(("customers", 1))
    query_cache.set(("customers", 1), "optimistic")

    query_cache.restore(("customers", 1), snapshot)

    assert query_cache.get(("customers", 1)) is None
