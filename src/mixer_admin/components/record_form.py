"""
Create/edit dialog of a list page.

The inputs are uncontrolled and start from ``form_values``; the whole form
is posted to ``submit_form``, which validates it and keeps the dialog open
with the error messages when the record could not be saved.
"""

import reflex as rx

from mixer_admin.listing.forms import FormField
from mixer_admin.listing.resources import ResourceSpec

_INPUT_TYPES = {"number": "number", "date": "date"}


def _label(form_field: FormField) -> rx.Component:
    text = f"{form_field.label} *" if form_field.required else form_field.label
    return rx.text(text, size="2", weight="medium")


def _input(state, form_field: FormField) -> rx.Component:
    value = state.form_values[form_field.name]
    if form_field.kind == "checkbox":
        return rx.checkbox(
            form_field.label,
            name=form_field.name,
            default_checked=value == "true",
        )
    if form_field.kind == "textarea":
        control = rx.text_area(name=form_field.name, default_value=value, rows="3")
    else:
        props = {"step": "any"} if form_field.kind == "number" else {}
        control = rx.input(
            name=form_field.name,
            default_value=value,
            type=_INPUT_TYPES.get(form_field.kind, "text"),
            **props,
        )
    return rx.vstack(_label(form_field), control, spacing="1", width="100%")


def _errors(state) -> rx.Component:
    return rx.cond(
        state.form_errors.length() > 0,
        rx.callout.root(
            rx.callout.icon(rx.icon("circle-alert", size=16)),
            rx.vstack(
                rx.foreach(state.form_errors, lambda message: rx.text(message, size="2")),
                spacing="1",
            ),
            color_scheme="red",
            role="alert",
        ),
    )


def record_form(state, spec: ResourceSpec) -> rx.Component:
    """Build the create/edit dialog of ``spec``'s list page."""
    if not spec.form_fields:
        return rx.fragment()
    return rx.dialog.root(
        rx.dialog.content(
            rx.dialog.title(
                rx.cond(
                    state.form_mode == "edit",
                    f"Edit {spec.singular}",
                    f"New {spec.singular}",
                )
            ),
            rx.form(
                rx.vstack(
                    _errors(state),
                    *[_input(state, form_field) for form_field in spec.form_fields],
                    rx.hstack(
                        rx.button(
                            "Cancel",
                            type="button",
                            on_click=state.close_form,
                            disabled=state.form_saving,
                            variant="soft",
                            color_scheme="gray",
                        ),
                        rx.button("Save", type="submit", loading=state.form_saving),
                        justify="end",
                        spacing="3",
                        width="100%",
                    ),
                    spacing="3",
                ),
                on_submit=state.submit_form,
                reset_on_submit=False,
            ),
            on_escape_key_down=state.close_form,
            on_pointer_down_outside=state.close_form,
            max_width="560px",
        ),
        open=state.form_open,
    )
