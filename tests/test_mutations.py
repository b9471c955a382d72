import asyncio

import httpx
import pytest

from mixer_admin.models.common import ListPage, Pagination
from mixer_admin.query.mutations import OptimisticMutation, patch_items, remove_item
from mixer_admin.services.errors import OptimisticRollbackError

KEY = ("customers", None, None, None, None, None, 1, 10)


def _page(*ids):
    return ListPage(
        items=[{"id": item_id, "name": f"Customer {item_id}"} for item_id in ids],
        pagination=Pagination.compute(1, 10, len(ids)),
    )


def test_remove_item_recomputes_pagination():
    page = remove_item("B")(_page("A", "B", "C"))

    assert page.ids() == ["A", "C"]
    assert page.pagination.total == 2


def test_patch_items_leaves_other_rows_untouched():
    page = patch_items(["A", "C"], {"name": "Renamed"})(_page("A", "B", "C"))

    assert [item["name"] for item in page.items] == ["Renamed", "Customer B", "Renamed"]


def test_failed_delete_rolls_back_with_one_notification(query_client, make_api, notifier):
    api = make_api(lambda request: httpx.Response(500, json={"success": False}))
    query_client.set_query_data(KEY, _page("A", "B", "C"))
    mutation = OptimisticMutation(query_client, notifier)
    during = {}

    async def request():
        during["ids"] = query_client.get_query_data(KEY).ids()
        await api.customers.delete("B")

    with pytest.raises(OptimisticRollbackError) as info:
        asyncio.run(mutation.run(KEY, remove_item("B"), request, invalidate=[("customers",)]))

    assert during["ids"] == ["A", "C"]
    assert query_client.get_query_data(KEY).ids() == ["A", "B", "C"]
    assert info.value.notified
    assert info.value.http_status == 500
    assert [n.message for n in notifier.drain()] == ["Server error. Please try again later."]
    assert not query_client.cache.get(KEY).invalidated


def test_unexpected_failure_is_notified_once(query_client, notifier):
    query_client.set_query_data(KEY, _page("A", "B"))
    mutation = OptimisticMutation(query_client, notifier)

    async def request():
        raise ValueError("boom")

    with pytest.raises(OptimisticRollbackError, match="boom"):
        asyncio.run(mutation.run(KEY, remove_item("A"), request))

    assert query_client.get_query_data(KEY).ids() == ["A", "B"]
    assert [n.message for n in notifier.drain()] == ["boom"]


def test_success_keeps_edit_and_invalidates(query_client, notifier):
    query_client.set_query_data(KEY, _page("A", "B", "C"))
    mutation = OptimisticMutation(query_client, notifier)

    async def request():
        return "deleted"

    result = asyncio.run(
        mutation.run(KEY, remove_item("B"), request, invalidate=[("customers",)])
    )

    entry = query_client.cache.get(KEY)
    assert result == "deleted"
    assert entry.data.ids() == ["A", "C"]
    assert entry.invalidated
    assert notifier.pending == []



def _overlapping_deletes(query_client, notifier, accepted, settle_order):
    """
    Delete A and B with both requests in flight, then answer them in
    ``settle_order``; ``accepted`` holds the ids the server accepts.

    Returns the cached ids after each answer.
    """
    query_client.set_query_data(KEY, _page("A", "B", "C"))
    mutation = OptimisticMutation(query_client, notifier)
    gates = {item_id: asyncio.Event() for item_id in ("A", "B")}

    def request_for(item_id):
        async def request():
            await gates[item_id].wait()
            if item_id not in accepted:
                raise ValueError(f"{item_id} is referenced by a quotation")
            return item_id

        return request

    async def scenario():
        tasks = {
            item_id: asyncio.ensure_future(
                mutation.run(KEY, remove_item(item_id), request_for(item_id))
            )
            for item_id in ("A", "B")
        }
        await asyncio.sleep(0)
        seen = [query_client.get_query_data(KEY).ids()]
        for item_id in settle_order:
            gates[item_id].set()
            await asyncio.gather(tasks[item_id], return_exceptions=True)
            seen.append(query_client.get_query_data(KEY).ids())
        return seen

    return asyncio.run(scenario())


def test_overlapping_rejections_restore_every_row(query_client, notifier):
    seen = _overlapping_deletes(query_client, notifier, accepted=set(), settle_order="AB")

    assert seen == [["C"], ["A", "C"], ["A", "B", "C"]]
    assert query_client.pending_edits == {}
    assert len(notifier.drain()) == 2


def test_rejection_keeps_pending_edit_of_other_mutation(query_client, notifier):
    seen = _overlapping_deletes(query_client, notifier, accepted={"B"}, settle_order="AB")

    assert seen == [["C"], ["A", "C"], ["A", "C"]]
    assert query_client.cache.get(KEY).invalidated is False


def test_rollback_after_accepted_edit_keeps_it(query_client, notifier):
    seen = _overlapping_deletes(query_client, notifier, accepted={"A"}, settle_order="AB")

    assert seen == [["C"], ["C"], ["B", "C"]]
    assert query_client.cache.get(KEY).invalidated
    assert [n.message for n in notifier.drain()] == ["B is referenced by a quotation"]


def test_rejections_in_reverse_order_restore_every_row(query_client, notifier):
    seen = _overlapping_deletes(query_client, notifier, accepted=set(), settle_order="BA")

    assert seen == [["C"], ["B", "C"], ["A", "B", "C"]]
    assert query_client.pending_edits == {}
