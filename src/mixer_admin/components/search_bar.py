"""
Search input for list pages.

The input is bound to the raw term so typing is never held back; the state
debounces the term before it reaches the query.
"""

import reflex as rx

from mixer_admin.listing.resources import ResourceSpec


def search_bar(state, spec: ResourceSpec) -> rx.Component:
    """
    Build the search input with a clear button.

    Args:
        state: List page state class.
        spec: Resource of the page.
    """
    return rx.box(
        rx.icon("search", class_name="input-icon"),
        rx.input(
            placeholder=spec.search_placeholder,
            value=state.search_term,
            on_change=state.set_search,
            class_name="search-input",
        ),
        rx.cond(
            state.search_term != "",
            rx.icon_button(
                rx.icon("x", size=16),
                on_click=state.clear_search,
                variant="ghost",
                title="Clear search",
            ),
        ),
        class_name="input-with-icon",
    )
