"""
Resource list page for Reflex.

Builds the whole page of one resource: header, stat cards, search and
filters, the table with row actions, pagination and the confirmation
dialog. Columns come from the ResourceSpec, so every resource shares this
module.
"""

import reflex as rx

from mixer_admin.components.confirm_dialog import confirm_dialog
from mixer_admin.components.filters import filter_panel
from mixer_admin.components.layout import app_shell, page_header
from mixer_admin.components.pagination import pagination
from mixer_admin.components.record_form import record_form
from mixer_admin.components.search_bar import search_bar
from mixer_admin.listing.resources import Column, ResourceSpec
from mixer_admin.models.statuses import QuotationStatus


def _stat_card(card) -> rx.Component:
    return rx.card(
        rx.text(card["label"], size="2", class_name="muted"),
        rx.heading(card["value"], size="5"),
        class_name="stat-card",
    )


def stat_cards(state) -> rx.Component:
    """Stat cards, flagged when they only describe the loaded page."""
    return rx.cond(
        state.stats.length() > 0,
        rx.box(
            rx.grid(rx.foreach(state.stats, _stat_card), columns="5", spacing="3"),
            rx.cond(
                state.stats_approximate,
                rx.badge("Approximate: based on this page only", color_scheme="amber"),
            ),
            class_name="stats",
        ),
    )


def _cell(state, spec: ResourceSpec, column: Column, row) -> rx.Component:
    value = row[column.key]
    if column.kind == "status" and spec.name == "quotations":
        return rx.table.cell(
            rx.select.root(
                rx.select.trigger(variant="ghost"),
                rx.select.content(
                    *[rx.select.item(status.label, value=status.value) for status in QuotationStatus]
                ),
                value=row["status"],
                on_change=lambda status: state.set_status(row["id"], status),
                size="1",
            )
        )
    if column.kind == "status":
        return rx.table.cell(rx.badge(value, color_scheme=row["status_color"]))
    return rx.table.cell(value)


def _actions(state, spec: ResourceSpec, row) -> rx.Component:
    buttons = []
    if spec.form_fields:
        buttons.append(
            rx.icon_button(
                rx.icon("pencil", size=16),
                on_click=state.open_edit(row["id"]),
                variant="ghost",
                title=f"Edit {spec.singular}",
            )
        )
    if spec.name == "terms":
        buttons.append(
            rx.icon_button(
                rx.icon("copy", size=16),
                on_click=state.duplicate(row["id"]),
                variant="ghost",
                title="Duplicate",
            )
        )
    buttons.append(
        rx.icon_button(
            rx.icon("trash-2", size=16),
            on_click=state.request_delete(row["id"]),
            variant="ghost",
            color_scheme="red",
            title=f"Delete {spec.singular}",
        )
    )
    return rx.table.cell(rx.hstack(*buttons, spacing="1"))


def _row(state, spec: ResourceSpec, row) -> rx.Component:
    return rx.table.row(
        rx.table.cell(
            rx.checkbox(
                checked=state.selected.contains(row["id"]),
                on_change=lambda _checked: state.toggle_selection(row["id"]),
            )
        ),
        *[_cell(state, spec, column, row) for column in spec.columns],
        _actions(state, spec, row),
    )


def _table(state, spec: ResourceSpec) -> rx.Component:
    return rx.table.root(
        rx.table.header(
            rx.table.row(
                rx.table.column_header_cell(
                    rx.checkbox(
                        checked=state.all_selected,
                        on_change=lambda _checked: state.toggle_select_all(),
                    )
                ),
                *[rx.table.column_header_cell(column.label) for column in spec.columns],
                rx.table.column_header_cell(""),
            )
        ),
        rx.table.body(rx.foreach(state.rows, lambda row: _row(state, spec, row))),
        variant="surface",
        width="100%",
    )


def _bulk_actions(state, spec: ResourceSpec) -> rx.Component:
    if spec.name != "terms":
        return rx.fragment()
    return rx.cond(
        state.selected.length() > 0,
        rx.hstack(
            rx.text(state.selected.length(), " selected", size="2"),
            rx.button("Mark default", on_click=state.request_bulk_default(True), size="1"),
            rx.button(
                "Mark optional",
                on_click=state.request_bulk_default(False),
                size="1",
                variant="soft",
            ),
            align="center",
            spacing="2",
            class_name="bulk-actions",
        ),
    )


def _loading(spec: ResourceSpec) -> rx.Component:
    return rx.box(
        rx.box(class_name="spinner"),
        rx.text(f"Loading {spec.title.lower()}...", class_name="muted"),
        class_name="card loading-state",
    )


def _error(state) -> rx.Component:
    return rx.box(
        rx.icon("circle-alert", class_name="empty-icon", size=48),
        rx.heading("Something went wrong", size="3", as_="h3"),
        rx.text(state.error, class_name="muted"),
        rx.button("Try again", on_click=state.refresh),
        class_name="card empty-state",
    )


def _empty(state, spec: ResourceSpec) -> rx.Component:
    return rx.box(
        rx.icon("inbox", class_name="empty-icon", size=48),
        rx.heading(f"No {spec.title.lower()} found", size="3", as_="h3"),
        rx.cond(
            state.debounced_search != "",
            rx.text(
                rx.text.span('No results match "'),
                rx.text.span(state.debounced_search),
                rx.text.span('". Try a different search term.'),
                class_name="muted",
            ),
            rx.text("Adjust the filters or add a new record.", class_name="muted"),
        ),
        class_name="card empty-state",
    )


def _results(state, spec: ResourceSpec) -> rx.Component:
    return rx.box(
        rx.hstack(
            rx.text(state.result_summary, class_name="muted"),
            rx.spacer(),
            rx.cond(state.is_refetching, rx.spinner(size="1")),
            _bulk_actions(state, spec),
            class_name="results-summary",
            align="center",
        ),
        _table(state, spec),
        pagination(state),
        class_name="results",
    )


def list_page(state, spec: ResourceSpec) -> rx.Component:
    """
    Build the list page of one resource.

    Args:
        state: ListPageState subclass of the resource.
        spec: Resource declaration.

    Returns:
        The complete page component.
    """
    return app_shell(
        rx.hstack(
            page_header(spec.title),
            rx.spacer(),
            rx.button(
                rx.icon("plus", size=16),
                f"New {spec.singular}",
                on_click=state.open_create,
            ),
            align="center",
            width="100%",
        ),
        stat_cards(state),
        rx.box(
            search_bar(state, spec),
            filter_panel(state, spec),
            class_name="card search-card",
        ),
        rx.cond(
            state.show_error,
            _error(state),
            rx.cond(
                state.is_loading,
                _loading(spec),
                rx.cond(state.is_empty, _empty(state, spec), _results(state, spec)),
            ),
        ),
        confirm_dialog(state),
        record_form(state, spec),
    )
