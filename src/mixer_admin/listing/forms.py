"""
Create and edit forms of the list pages.

A RecordForm holds the dialog of one page: whether it creates or edits,
the values shown in its inputs and the errors of the last submit. Browser
forms post strings, so ``build_payload`` turns them into the JSON body the
API expects before the resource's validator checks it.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping

from mixer_admin.validation import ValidationResult

Validator = Callable[[Mapping[str, Any], bool], ValidationResult]

_TRUE = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class FormField:
    """
    One input of a create/edit form.

    Attributes:
        name: Payload field.
        label: Input label.
        kind: text, textarea, number, date or checkbox.
        required: Shown as required; the validator enforces it.
        group: "item" puts the field into the first quotation item.
        default: Value of the input on a create form.
    """

    name: str
    label: str
    kind: str = "text"
    required: bool = False
    group: str = ""
    default: str = ""

    def parse(self, raw: Any) -> Any:
        """Convert a posted value; None means the field was left empty."""
        if self.kind == "checkbox":
            return raw is True or str(raw).strip().lower() in _TRUE
        if raw is None:
            return None
        text = str(raw).strip()
        if not text:
            return None
        if self.kind == "number":
            try:
                number = float(text)
            except ValueError:
                # left as typed so the validator reports it
                return text
            return int(number) if number.is_integer() else number
        return text

    def display(self, value: Any) -> str:
        if self.kind == "checkbox":
            return "true" if value else ""
        if value is None:
            return ""
        if self.kind == "date":
            return str(value)[:10]
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)


def build_payload(fields: Iterable[FormField], values: Mapping[str, Any]) -> dict:
    """
    Build the request body from posted form values.

    Empty inputs are left out; checkboxes are always sent. Fields of the
    ``item`` group become the single entry of ``items`` when any is filled.
    """
    payload: dict[str, Any] = {}
    item: dict[str, Any] = {}
    for form_field in fields:
        value = form_field.parse(values.get(form_field.name))
        if value is None:
            continue
        if form_field.group == "item":
            item[form_field.name] = value
        else:
            payload[form_field.name] = value
    if item:
        payload["items"] = [item]
    return payload


def form_values(fields: Iterable[FormField], record: Mapping[str, Any] | None = None) -> dict[str, str]:
    """Input values of a form: the record's fields, or the defaults for a new one."""
    if record is None:
        return {form_field.name: form_field.default for form_field in fields}
    items = record.get("items") or [{}]
    first_item = items[0] if isinstance(items[0], Mapping) else {}
    return {
        form_field.name: form_field.display(
            (first_item if form_field.group == "item" else record).get(form_field.name)
        )
        for form_field in fields
    }


def error_messages(field_errors: Iterable[Mapping[str, str]], fallback: str) -> list[str]:
    """Flatten server field errors for display under the form."""
    messages = [
        f"{error['field']}: {error['message']}" if error.get("field") else error["message"]
        for error in field_errors
        if error.get("message")
    ]
    return messages or [fallback]


@dataclass
class RecordForm:
    """
    Create/edit dialog of one list page.

    Attributes:
        open: Whether the dialog is shown.
        item_id: Id of the edited record; None when creating.
        values: Input values by field name.
        errors: Messages of the last failed submit.
        saving: True while the request is in flight.
    """

    open: bool = False
    item_id: Any = None
    values: dict[str, str] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    saving: bool = False

    @property
    def is_edit(self) -> bool:
        return self.item_id is not None

    def show(self, values: dict[str, str], item_id: Any = None) -> None:
        self.open = True
        self.item_id = item_id
        self.values = dict(values)
        self.errors = []
        self.saving = False

    def close(self) -> bool:
        """Close unless a submit is running; True when it closed."""
        if self.saving:
            return False
        self.open = False
        self.item_id = None
        self.errors = []
        return True

    def to_dict(self) -> dict:
        return {
            "open": self.open,
            "mode": "edit" if self.is_edit else "create",
            "item_id": "" if self.item_id is None else str(self.item_id),
            "values": dict(self.values),
            "errors": list(self.errors),
            "saving": self.saving,
        }


def posted_values(fields: Iterable[FormField], values: Mapping[str, Any]) -> dict[str, str]:
    """Input values to show again after a submit was rejected."""
    return {
        form_field.name: (
            form_field.display(form_field.parse(values.get(form_field.name)))
            if form_field.kind == "checkbox"
            else str(values.get(form_field.name) or "")
        )
        for form_field in fields
    }
