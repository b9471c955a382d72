"""
Pagination control for list pages.

Shows at most five page buttons around the current page, with the first
and last pages reachable through ellipsis shortcuts, plus the page size
selector and the "Showing x to y of z results" summary.
"""

import reflex as rx

from mixer_admin.listing.pagination import PAGE_SIZES


def _page_button(state, page) -> rx.Component:
    return rx.button(
        page,
        on_click=state.go_to_page(page),
        variant=rx.cond(page == state.current_page, "solid", "soft"),
        size="1",
    )


def _ellipsis() -> rx.Component:
    return rx.text("…", class_name="muted")


def pagination(state) -> rx.Component:
    """Build the pagination bar of a list page state."""
    return rx.cond(
        state.total_pages > 0,
        rx.hstack(
            rx.text(state.summary, size="2", class_name="muted"),
            rx.spacer(),
            rx.select(
                [str(size) for size in PAGE_SIZES],
                value=state.per_page.to_string(),
                on_change=state.set_page_size,
                size="1",
            ),
            rx.hstack(
                rx.icon_button(
                    rx.icon("chevron-left", size=16),
                    on_click=state.prev_page,
                    disabled=~state.has_prev_page,
                    variant="soft",
                    size="1",
                ),
                rx.cond(state.show_first, _page_button(state, 1)),
                rx.cond(state.leading_ellipsis, _ellipsis()),
                rx.foreach(state.window_pages, lambda page: _page_button(state, page)),
                rx.cond(state.trailing_ellipsis, _ellipsis()),
                rx.cond(state.show_last, _page_button(state, state.total_pages)),
                rx.icon_button(
                    rx.icon("chevron-right", size=16),
                    on_click=state.next_page,
                    disabled=~state.has_next_page,
                    variant="soft",
                    size="1",
                ),
                spacing="1",
                align="center",
            ),
            align="center",
            spacing="3",
            class_name="pagination",
        ),
    )
