"""
Confirmation dialog for destructive and bulk actions.

The dialog is fully controlled by the list page state: Radix never closes
it on its own, escape and outside clicks are forwarded to the state, which
decides whether they cancel.
"""

import reflex as rx


def _icon(state) -> rx.Component:
    return rx.match(
        state.dialog_icon,
        ("trash-2", rx.icon("trash-2", size=22)),
        ("triangle-alert", rx.icon("triangle-alert", size=22)),
        ("circle-check", rx.icon("circle-check", size=22)),
        rx.icon("info", size=22),
    )


def confirm_dialog(state) -> rx.Component:
    """Build the confirmation dialog of a list page state."""
    return rx.dialog.root(
        rx.dialog.content(
            rx.hstack(
                rx.box(_icon(state), color=rx.color(state.dialog_color, 9)),
                rx.dialog.title(state.dialog_title, margin="0"),
                align="center",
                spacing="3",
            ),
            rx.dialog.description(state.dialog_message, margin_y="3"),
            rx.hstack(
                rx.button(
                    state.dialog_cancel_label,
                    on_click=state.cancel_dialog,
                    disabled=state.dialog_loading,
                    variant="soft",
                    color_scheme="gray",
                ),
                rx.button(
                    state.dialog_confirm_label,
                    on_click=state.confirm_dialog,
                    loading=state.dialog_loading,
                    color_scheme=state.dialog_color,
                ),
                justify="end",
                spacing="3",
            ),
            on_escape_key_down=state.dialog_escape,
            on_pointer_down_outside=state.dialog_backdrop_click,
        ),
        open=state.dialog_open,
    )
