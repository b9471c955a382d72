"""
Filter panel of a list page.
"""

import reflex as rx

from mixer_admin.listing.resources import FilterField, ResourceSpec
from mixer_admin.state import ALL


def _filter_select(state, field: FilterField) -> rx.Component:
    return rx.vstack(
        rx.text(field.label, size="1", class_name="muted"),
        rx.select.root(
            rx.select.trigger(placeholder=field.label),
            rx.select.content(
                rx.select.item("All", value=ALL),
                *[rx.select.item(text, value=value) for value, text in field.options],
            ),
            value=rx.cond(state.filters.contains(field.name), state.filters[field.name], ALL),
            on_change=lambda value: state.set_filter(field.name, value),
        ),
        spacing="1",
    )


def filter_panel(state, spec: ResourceSpec) -> rx.Component:
    """
    Build the filter selects with a reset button.

    On small screens the panel is hidden behind a toggle button showing the
    number of active filters.
    """
    toggle = rx.button(
        rx.icon("filter", size=16),
        "Filters",
        rx.cond(state.active_filters > 0, rx.badge(state.active_filters)),
        on_click=state.toggle_mobile_filters,
        variant="soft",
        class_name="mobile-filter-toggle",
    )
    fields = rx.hstack(
        *[_filter_select(state, field) for field in spec.filter_fields],
        rx.button(
            rx.icon("rotate-ccw", size=16),
            "Reset",
            on_click=state.reset_filters,
            variant="ghost",
        ),
        align="end",
        spacing="3",
        wrap="wrap",
        class_name=rx.cond(state.show_mobile_filters, "filters open", "filters"),
    )
    return rx.box(toggle, fields, class_name="filter-panel")
