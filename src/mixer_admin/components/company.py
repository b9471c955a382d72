"""
Company settings page: details form plus logo and signature uploads.
"""

import reflex as rx

from mixer_admin.components.layout import app_shell, page_header
from mixer_admin.state import CompanyState

_LOGO_ACCEPT = {"image/jpeg": [".jpg", ".jpeg"], "image/png": [".png"], "image/gif": [".gif"]}
_SIGNATURE_ACCEPT = {"image/jpeg": [".jpg", ".jpeg"], "image/png": [".png"]}


def _field(label: str, name: str, value, **props) -> rx.Component:
    return rx.vstack(
        rx.text(label, size="2", weight="medium"),
        rx.input(name=name, default_value=value, width="100%", **props),
        spacing="1",
        width="100%",
    )


def _details_form() -> rx.Component:
    return rx.form(
        rx.vstack(
            _field("Company name", "company_name", CompanyState.company_name, required=True),
            _field("Email", "email", CompanyState.email, type="email"),
            _field("Phone", "phone", CompanyState.phone),
            _field("GST number", "gst_number", CompanyState.gst_number),
            rx.vstack(
                rx.text("Address", size="2", weight="medium"),
                rx.text_area(name="address", default_value=CompanyState.address, width="100%"),
                spacing="1",
                width="100%",
            ),
            rx.foreach(CompanyState.errors, lambda error: rx.text(error, color_scheme="red", size="2")),
            rx.button("Save", type="submit", loading=CompanyState.is_saving),
            spacing="3",
        ),
        on_submit=CompanyState.save,
        reset_on_submit=False,
    )


def _image_upload(title: str, upload_id: str, image_url, accept: dict, limit: str, handler) -> rx.Component:
    return rx.card(
        rx.vstack(
            rx.heading(title, size="3"),
            rx.cond(
                image_url != "",
                rx.image(src=image_url, height="80px"),
                rx.text("No image uploaded", class_name="muted"),
            ),
            rx.upload(
                rx.text(f"Drop an image here or click to select ({limit})", size="2"),
                id=upload_id,
                accept=accept,
                max_files=1,
                class_name="upload-zone",
            ),
            rx.hstack(rx.foreach(rx.selected_files(upload_id), rx.text)),
            rx.button("Upload", on_click=handler(rx.upload_files(upload_id=upload_id))),
            spacing="3",
        )
    )


def company_page() -> rx.Component:
    return app_shell(
        page_header("Company", "Details and images printed on quotations"),
        rx.grid(
            rx.card(_details_form()),
            rx.vstack(
                _image_upload(
                    "Logo", "logo", CompanyState.logo_url, _LOGO_ACCEPT,
                    "JPEG, PNG or GIF up to 5 MB", CompanyState.upload_logo,
                ),
                _image_upload(
                    "Signature", "signature", CompanyState.signature_url, _SIGNATURE_ACCEPT,
                    "JPEG or PNG up to 2 MB", CompanyState.upload_signature,
                ),
                spacing="3",
            ),
            columns="2",
            spacing="4",
        ),
    )
