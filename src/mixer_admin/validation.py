"""
Client-side validation for the admin forms.

Each validator mirrors the rules the backend enforces so obvious mistakes
are caught before a request is sent. Validators never raise; they return a
ValidationResult whose ``errors`` list is shown next to the form.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Mapping

from mixer_admin.models.statuses import DeliveryStatus, QuotationStatus

GST_PATTERN = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]$")
EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")

MB = 1024 * 1024
LOGO_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/gif")
LOGO_MAX_BYTES = 5 * MB
SIGNATURE_TYPES = ("image/jpeg", "image/jpg", "image/png")
SIGNATURE_MAX_BYTES = 2 * MB


@dataclass
class ValidationResult:
    """Outcome of a validation pass."""

    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {"is_valid": self.is_valid, "errors": list(self.errors)}


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _digits(value: str) -> str:
    return re.sub(r"\D", "", value)


def is_valid_gst(gst_number: str | None) -> bool:
    """GST is optional; when present it must match the 15-character format."""
    if _blank(gst_number):
        return True
    return bool(GST_PATTERN.match(gst_number.strip().upper()))


def is_valid_email(email: str | None) -> bool:
    return bool(email) and bool(EMAIL_PATTERN.search(email))


def is_valid_phone(phone: str | None) -> bool:
    return bool(phone) and 10 <= len(_digits(phone)) <= 15


def validate_customer(data: Mapping[str, Any], is_update: bool = False) -> ValidationResult:
    """Validate a customer create/update payload."""
    result = ValidationResult()
    errors = result.errors
    if not is_update:
        for name, label in (
            ("company_name", "Company name"),
            ("contact_person", "Contact person"),
            ("email", "Email"),
            ("phone", "Phone number"),
            ("site_location", "Site location"),
        ):
            if _blank(data.get(name)):
                errors.append(f"{label} is required")

    for name, label, limit in (
        ("company_name", "Company name", 100),
        ("contact_person", "Contact person", 100),
        ("address", "Address", 500),
        ("site_location", "Site location", 255),
    ):
        value = data.get(name)
        if value and len(value) > limit:
            errors.append(f"{label} must be less than {limit} characters")

    email = data.get("email")
    if email and not is_valid_email(email):
        errors.append("Valid email address is required")
    phone = data.get("phone")
    if phone and not is_valid_phone(phone):
        errors.append("Phone number must be 10-15 digits")
    if not is_valid_gst(data.get("gst_number")):
        errors.append("Invalid GST number format")
    return result


def validate_quotation(data: Mapping[str, Any], is_update: bool = False) -> ValidationResult:
    """Validate a quotation payload including its items."""
    result = ValidationResult()
    errors = result.errors
    items = data.get("items")
    if not is_update:
        if _blank(data.get("customer_name")):
            errors.append("Customer name is required")
        if _blank(data.get("customer_contact")):
            errors.append("Customer contact is required")
        if not items:
            errors.append("At least one quotation item is required")

    name = data.get("customer_name")
    if name and len(name) > 100:
        errors.append("Customer name must be less than 100 characters")
    contact = data.get("customer_contact")
    if contact and len(contact) > 20:
        errors.append("Customer contact must be less than 20 characters")
    if not is_valid_gst(data.get("customer_gst_number")):
        errors.append("Invalid GST number format")

    status = data.get("quotation_status")
    if status and status not in QuotationStatus.values():
        errors.append(
            "Invalid quotation status. Must be one of: "
            + ", ".join(QuotationStatus.values())
        )
    delivery = data.get("delivery_status")
    if delivery and delivery not in DeliveryStatus.values():
        errors.append(
            "Invalid delivery status. Must be one of: "
            + ", ".join(DeliveryStatus.values())
        )

    for index, item in enumerate(items or [], start=1):
        errors.extend(
            f"Item {index}: {message}" for message in validate_quotation_item(item).errors
        )
    return result


def validate_quotation_item(item: Mapping[str, Any]) -> ValidationResult:
    result = ValidationResult()
    if not item.get("item_type"):
        result.errors.append("Item type is required")
    quantity = _number(item.get("quantity"))
    if quantity is None or quantity <= 0:
        result.errors.append("Valid quantity is required")
    unit_price = _number(item.get("unit_price"))
    if unit_price is None or unit_price < 0:
        result.errors.append("Valid unit price is required")
    return result


def validate_terms(data: Mapping[str, Any], is_update: bool = False) -> ValidationResult:
    """Validate a terms & conditions entry."""
    result = ValidationResult()
    errors = result.errors
    if not is_update:
        if _blank(data.get("title")):
            errors.append("Title is required")
        if _blank(data.get("description")):
            errors.append("Description is required")
    title = data.get("title")
    if title and len(title) > 200:
        errors.append("Title must be less than 200 characters")
    description = data.get("description")
    if description and len(description) > 2000:
        errors.append("Description must be less than 2000 characters")
    if "display_order" in data and data["display_order"] is not None:
        order = _number(data["display_order"])
        if order is None or order < 0:
            errors.append("Display order must be a valid positive number")
    return result


def validate_machine(data: Mapping[str, Any], is_update: bool = False) -> ValidationResult:
    result = ValidationResult()
    if not is_update:
        if _blank(data.get("machine_number")):
            result.errors.append("Machine number is required")
        if _blank(data.get("name")):
            result.errors.append("Machine name is required")
    for name, label in (
        ("price_per_day", "Price per day"),
        ("price_per_week", "Price per week"),
        ("price_per_month", "Price per month"),
    ):
        if data.get(name) not in (None, ""):
            value = _number(data[name])
            if value is None or value < 0:
                result.errors.append(f"{label} must be a valid positive number")
    return result


def validate_service_record(
    data: Mapping[str, Any], is_update: bool = False
) -> ValidationResult:
    result = ValidationResult()
    if not is_update:
        if _blank(data.get("machine_id")):
            result.errors.append("Machine is required")
        if _blank(data.get("service_date")):
            result.errors.append("Service date is required")
    hours = data.get("engine_hours")
    if hours not in (None, ""):
        value = _number(hours)
        if value is None or value < 0:
            result.errors.append("Engine hours must be a valid positive number")
    return result


def validate_company(data: Mapping[str, Any]) -> ValidationResult:
    """Validate the company settings form."""
    result = ValidationResult()
    errors = result.errors
    for name, label in (
        ("company_name", "Company name"),
        ("email", "Email"),
        ("phone", "Phone number"),
        ("address", "Address"),
    ):
        if _blank(data.get(name)):
            errors.append(f"{label} is required")
    name = data.get("company_name")
    if name and len(name) > 200:
        errors.append("Company name must be less than 200 characters")
    email = data.get("email")
    if email and not is_valid_email(email):
        errors.append("Valid email address is required")
    phone = data.get("phone")
    if phone and not is_valid_phone(phone):
        errors.append("Phone number must be 10-15 digits")
    if not is_valid_gst(data.get("gst_number")):
        errors.append("Invalid GST number format")
    address = data.get("address")
    if address and len(address) > 500:
        errors.append("Address must be less than 500 characters")
    return result


def validate_image(
    label: str,
    content_type: str | None,
    size: int | None,
    allowed_types: tuple[str, ...],
    max_bytes: int,
) -> ValidationResult:
    """
    Check an image upload against its allowed MIME types and size ceiling.

    Args:
        label: "Logo" or "Signature", used in messages.
        content_type: MIME type reported for the file.
        size: File size in bytes, None when there is no file.
        allowed_types: Accepted MIME types.
        max_bytes: Size ceiling in bytes.
    """
    result = ValidationResult()
    if size is None:
        result.errors.append(f"{label} file is required")
        return result
    if (content_type or "").lower() not in allowed_types:
        kinds = ", ".join(sorted({t.split("/")[1].upper() for t in allowed_types} - {"JPG"}))
        result.errors.append(f"{label} must be a {kinds} image")
    if size > max_bytes:
        result.errors.append(
            f"{label} file size must be less than {max_bytes // MB}MB"
        )
    return result


def validate_logo(content_type: str | None, size: int | None) -> ValidationResult:
    return validate_image("Logo", content_type, size, LOGO_TYPES, LOGO_MAX_BYTES)


def validate_signature(content_type: str | None, size: int | None) -> ValidationResult:
    return validate_image(
        "Signature", content_type, size, SIGNATURE_TYPES, SIGNATURE_MAX_BYTES
    )


def _number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
