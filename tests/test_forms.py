from mixer_admin.listing.forms import (
    FormField,
    RecordForm,
    build_payload,
    error_messages,
    form_values,
)
from mixer_admin.listing.resources import get_resource

FIELDS = (
    FormField("title", "Title", required=True),
    FormField("display_order", "Display order", "number"),
    FormField("is_default", "Include by default", "checkbox"),
    FormField("quantity", "Quantity", "number", group="item"),
)


def test_build_payload_converts_posted_strings():
    payload = build_payload(
        FIELDS, {"title": "  Payment ", "display_order": "3", "is_default": "on", "quantity": "2.5"}
    )

    assert payload == {
        "title": "Payment",
        "display_order": 3,
        "is_default": True,
        "items": [{"quantity": 2.5}],
    }


def test_build_payload_skips_blanks_but_sends_checkboxes():
    payload = build_payload(FIELDS, {"title": "", "display_order": "abc"})

    assert payload == {"display_order": "abc", "is_default": False}


def test_invalid_number_reaches_the_validator():
    spec = get_resource("terms")

    result = spec.validate(build_payload(spec.form_fields, {"display_order": "-1"}), is_update=True)

    assert result.errors == ["Display order must be a valid positive number"]


def test_form_values_of_record_and_defaults():
    record = {"title": "Payment", "display_order": 2.0, "is_default": True, "items": [{"quantity": 4}]}

    assert form_values(FIELDS, record) == {
        "title": "Payment",
        "display_order": "2",
        "is_default": "true",
        "quantity": "4",
    }
    assert form_values(get_resource("machines").form_fields)["is_active"] == "true"


def test_record_form_does_not_close_while_saving():
    form = RecordForm()
    form.show({"title": ""}, item_id=7)
    form.saving = True

    assert not form.close()
    assert form.to_dict()["mode"] == "edit"

    form.saving = False
    assert form.close()
    assert form.to_dict()["item_id"] == ""


def test_error_messages_fall_back_to_message():
    assert error_messages([], "Validation failed") == ["Validation failed"]
    assert error_messages([{"field": "", "message": "Body is required"}], "x") == [
        "Body is required"
    ]
