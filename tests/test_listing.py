import pytest

from mixer_admin.listing.dialog import ConfirmDialog, DialogVariant
from mixer_admin.listing.pagination import PageWindow, page_window
from mixer_admin.listing.resources import RESOURCES, get_resource
from mixer_admin.listing.stats import resolve_stats
from mixer_admin.listing.store import ListStore


@pytest.mark.parametrize(
    "current,total,expected",
    [
        (1, 10, PageWindow([1, 2, 3, 4, 5], False, False, True, True)),
        (10, 10, PageWindow([6, 7, 8, 9, 10], True, True, False, False)),
        (5, 10, PageWindow([3, 4, 5, 6, 7], True, True, True, True)),
        (4, 10, PageWindow([2, 3, 4, 5, 6], True, False, True, True)),
        (2, 3, PageWindow([1, 2, 3], False, False, False, False)),
        (1, 0, PageWindow()),
    ],
)
def test_page_window(current, total, expected):
    assert page_window(current, total) == expected


def test_page_window_always_contains_current_page():
    for total in range(1, 15):
        for current in range(1, total + 1):
            window = page_window(current, total)
            assert current in window.pages
            assert len(window.pages) == min(total, 5)


class TestListStore:
    def test_filter_change_resets_page_and_selection(self):
        store = ListStore({"limit": 20})
        store.set_page(3)
        store.toggle_selection("7")

        store.set_filters(status="accepted")

        assert store.page == 1
        assert store.limit == 20
        assert store.selected == []
        assert store.active_filter_count() == 1

    def test_explicit_page_wins(self):
        store = ListStore()

        store.set_filters(status="sent", page=4)

        assert store.page == 4

    def test_page_change_keeps_filters(self):
        store = ListStore()
        store.set_filters(city="Pune")

        store.set_page(2)

        assert store.filters["city"] == "Pune"
        assert store.page == 2

    def test_reset_restores_defaults(self):
        store = ListStore({"sort_by": "display_order", "sort_order": "ASC"})
        store.set_filters(is_default="true", limit=50)
        store.set_search_term("payment")
        store.toggle_mobile_filters()

        store.reset()

        assert store.filters == {"page": 1, "limit": 10, "sort_by": "display_order", "sort_order": "ASC"}
        assert store.search_term == ""
        assert not store.show_mobile_filters
        assert store.active_filter_count() == 0

    def test_select_all_toggles(self):
        store = ListStore()

        store.select_all(["1", "2"])
        assert store.selected == ["1", "2"]
        store.select_all(["1", "2"])
        assert store.selected == []

    def test_serialization(self):
        store = ListStore({"limit": 20})
        store.set_filters(status="draft")
        store.set_search_term("QT")

        restored = ListStore.from_dict(store.to_dict(), {"limit": 20})

        assert restored.to_dict() == store.to_dict()


class TestConfirmDialog:
    def test_confirm_runs_once(self):
        dialog = ConfirmDialog()
        cancelled = []
        dialog.show("Delete customer", "Sure?", lambda: "deleted", DialogVariant.DANGER,
                    on_cancel=lambda: cancelled.append(1))

        action = dialog.confirm()

        assert action() == "deleted"
        assert dialog.loading and dialog.open
        assert dialog.confirm() is None
        assert not dialog.cancel()
        assert not dialog.escape()
        dialog.finish()
        assert not dialog.open
        assert cancelled == []

    def test_cancel_runs_once(self):
        dialog = ConfirmDialog()
        cancelled = []
        dialog.show("Delete", "Sure?", lambda: None, on_cancel=lambda: cancelled.append(1))

        assert dialog.escape()
        assert not dialog.cancel()
        assert dialog.confirm() is None
        assert cancelled == [1]
        assert not dialog.open

    def test_backdrop_click_respects_prevent_flag(self):
        dialog = ConfirmDialog()
        dialog.show("Delete", "Sure?", lambda: None, prevent_backdrop_close=True)

        assert not dialog.backdrop_click()
        assert dialog.open
        dialog.prevent_backdrop_close = False
        assert dialog.backdrop_click()
        assert not dialog.open

    def test_cannot_reopen_while_loading(self):
        dialog = ConfirmDialog()
        dialog.show("Delete", "Sure?", lambda: None)
        dialog.confirm()

        with pytest.raises(RuntimeError):
            dialog.show("Other", "Again?", lambda: None)

    @pytest.mark.parametrize(
        "variant,icon,color,label",
        [
            (DialogVariant.PRIMARY, "info", "blue", "Confirm"),
            (DialogVariant.DANGER, "trash-2", "red", "Delete"),
            (DialogVariant.WARNING, "triangle-alert", "amber", "Continue"),
            (DialogVariant.SUCCESS, "circle-check", "green", "Confirm"),
        ],
    )
    def test_variant_styles(self, variant, icon, color, label):
        dialog = ConfirmDialog()
        dialog.show("Title", "Message", lambda: None, variant)

        data = dialog.to_dict()

        assert (data["icon"], data["color"], data["confirm_label"]) == (icon, color, label)


class TestStats:
    ITEMS = [
        {"id": 1, "quotation_status": "accepted", "grand_total": 1000, "delivery_status": "delivered"},
        {"id": 2, "quotation_status": "draft", "grand_total": 500, "delivery_status": "pending"},
        {"id": 3, "quotation_status": "accepted", "grand_total": 2000, "delivery_status": "pending"},
        {"id": 4, "quotation_status": "sent", "grand_total": 700, "delivery_status": "pending"},
    ]

    def test_server_stats_win(self):
        view = resolve_stats(
            "quotations", {"total_quotations": 45, "accepted_quotations": 9}, self.ITEMS
        )

        assert view.source == "server"
        assert not view.approximate
        assert view.values["conversion_rate"] == 20.0

    def test_missing_server_stats_fall_back_to_page(self):
        view = resolve_stats("quotations", None, self.ITEMS)

        assert view.source == "client"
        assert view.approximate
        assert view.values["total_quotations"] == 4
        assert view.values["pending_quotations"] == 2
        assert view.values["total_revenue"] == 3000
        assert view.values["conversion_rate"] == 50.0

    def test_fallback_payload_is_not_trusted(self):
        view = resolve_stats(
            "customers",
            {"total_customers": 0, "fallback": True},
            [{"id": 1, "gst_number": "27AAPFS1234K1Z5"}, {"id": 2}],
        )

        assert view.approximate
        assert view.values["total_customers"] == 2
        assert view.values["customers_with_gst"] == 1

    def test_cards_are_formatted(self):
        view = resolve_stats("quotations", None, self.ITEMS)

        cards = view.cards(get_resource("quotations").stat_cards)

        by_key = {card["key"]: card["value"] for card in cards}
        assert by_key["total_quotations"] == "4"
        assert by_key["conversion_rate"] == "50.0%"
        assert by_key["total_revenue"] == "₹3,000"

    def test_unknown_resource_has_no_stats(self):
        assert resolve_stats("invoices", None, []).source == "none"


def test_resource_rows_are_display_strings():
    spec = RESOURCES["quotations"]

    row = spec.row(
        {
            "id": 3,
            "quotation_number": "QT-2024-0003",
            "customer_name": "Deccan Infra Projects",
            "quotation_date": "2024-01-13",
            "grand_total": 150000,
            "quotation_status": "accepted",
            "delivery_status": "pending",
        }
    )

    assert row["id"] == "3"
    assert row["label"] == "QT-2024-0003"
    assert row["quotation_date"] == "13 Jan 2024"
    assert row["grand_total"] == "₹1,50,000"
    assert row["quotation_status"] == "Accepted"
    assert row["status"] == "accepted"
    assert row["status_color"] == "green"


def test_unknown_resource_is_rejected():
    with pytest.raises(ValueError):
        get_resource("invoices")
