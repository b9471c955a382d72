"""
Declarations of the list pages.

Each ResourceSpec names the API client, the filters in cache-key order,
the filter defaults, the table columns and the stat cards of one page.
Rows are flattened to display strings here so the UI renders them as is.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

from mixer_admin import utils, validation
from mixer_admin.listing.forms import FormField, Validator
from mixer_admin.listing.stats import StatCard
from mixer_admin.models.statuses import DeliveryStatus, QuotationStatus, status_color
from mixer_admin.services import customers, machines, quotations, service_records, terms


@dataclass(frozen=True)
class Column:
    """
    One table column.

    Attributes:
        key: Record field.
        label: Header text.
        kind: text, date, currency, phone, gst, status, delivery or bool.
    """

    key: str
    label: str
    kind: str = "text"

    def render(self, record: Mapping[str, Any]) -> str:
        value = record.get(self.key)
        if self.kind == "date":
            return utils.format_date(value)
        if self.kind == "currency":
            return utils.format_currency(value)
        if self.kind == "phone":
            return utils.format_phone(value)
        if self.kind == "gst":
            return utils.format_gst(value) or "-"
        if self.kind in ("status", "delivery"):
            return str(value or "").capitalize() or "-"
        if self.kind == "bool":
            return "Yes" if value else "No"
        return "-" if value in (None, "") else str(value)


@dataclass(frozen=True)
class FilterField:
    """A select filter shown in the filter panel."""

    name: str
    label: str
    options: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class ResourceSpec:
    """
    Everything a list page needs to know about its resource.

    Attributes:
        name: Resource name; also the AdminApi attribute and cache prefix.
        title: Page heading.
        singular: Noun used in dialogs and messages.
        route: Page route.
        filter_names: Filters in cache-key order.
        defaults: Initial filters including ``page`` and ``limit``.
        columns: Table columns.
        filter_fields: Select filters in the filter panel.
        stat_cards: Stat cards above the table.
        label_field: Record field naming a row in dialogs.
        search_placeholder: Placeholder of the search box.
        has_stats_endpoint: Whether the API exposes ``/stats``.
        form_fields: Inputs of the create/edit form.
        validator: Check of a create (False) or update (True) payload.
    """

    name: str
    title: str
    singular: str
    route: str
    filter_names: tuple[str, ...]
    defaults: Mapping[str, Any] = field(default_factory=dict)
    columns: tuple[Column, ...] = ()
    filter_fields: tuple[FilterField, ...] = ()
    stat_cards: tuple[StatCard, ...] = ()
    label_field: str = "id"
    search_placeholder: str = "Search..."
    has_stats_endpoint: bool = True
    form_fields: tuple[FormField, ...] = ()
    validator: Validator | None = None

    def row(self, record: Mapping[str, Any]) -> dict[str, str]:
        """Flatten a record to the display strings of its columns."""
        row = {column.key: column.render(record) for column in self.columns}
        row["id"] = str(record.get("id", ""))
        row["label"] = str(record.get(self.label_field) or record.get("id", ""))
        status = record.get("quotation_status")
        row["status"] = str(status or "")
        row["status_color"] = status_color(status) if status else "gray"
        return row

    def validate(self, payload: Mapping[str, Any], is_update: bool = False) -> validation.ValidationResult:
        if self.validator is None:
            return validation.ValidationResult()
        return self.validator(payload, is_update)


_SORT_ORDER = FilterField("sort_order", "Order", (("DESC", "Newest first"), ("ASC", "Oldest first")))

RESOURCES: dict[str, ResourceSpec] = {
    spec.name: spec
    for spec in (
        ResourceSpec(
            name="customers",
            title="Customers",
            singular="customer",
            route="/customers",
            filter_names=customers.LIST_FILTERS,
            defaults={"limit": 10, "sort_by": "created_at", "sort_order": "DESC"},
            columns=(
                Column("company_name", "Company"),
                Column("contact_person", "Contact"),
                Column("phone", "Phone", "phone"),
                Column("city", "City"),
                Column("gst_number", "GST", "gst"),
                Column("created_at", "Added", "date"),
            ),
            filter_fields=(
                FilterField("has_gst", "GST", (("true", "With GST"), ("false", "Without GST"))),
                _SORT_ORDER,
            ),
            stat_cards=(
                StatCard("total_customers", "Total customers"),
                StatCard("customers_with_gst", "With GST"),
                StatCard("new_this_month", "New this month"),
            ),
            form_fields=(
                FormField("company_name", "Company name", required=True),
                FormField("contact_person", "Contact person", required=True),
                FormField("email", "Email", required=True),
                FormField("phone", "Phone", required=True),
                FormField("site_location", "Site location", required=True),
                FormField("city", "City"),
                FormField("address", "Address", "textarea"),
                FormField("gst_number", "GST number"),
            ),
            validator=validation.validate_customer,
            label_field="company_name",
            search_placeholder="Search customers by name, contact, email...",
        ),
        ResourceSpec(
            name="quotations",
            title="Quotations",
            singular="quotation",
            route="/quotations",
            filter_names=quotations.LIST_FILTERS,
            defaults={"limit": 20, "sort_by": "created_at", "sort_order": "DESC"},
            columns=(
                Column("quotation_number", "Number"),
                Column("customer_name", "Customer"),
                Column("quotation_date", "Date", "date"),
                Column("grand_total", "Total", "currency"),
                Column("quotation_status", "Status", "status"),
                Column("delivery_status", "Delivery", "delivery"),
            ),
            filter_fields=(
                FilterField(
                    "status",
                    "Status",
                    tuple((status.value, status.label) for status in QuotationStatus),
                ),
                FilterField(
                    "delivery_status",
                    "Delivery",
                    tuple((status.value, status.label) for status in DeliveryStatus),
                ),
                _SORT_ORDER,
            ),
            stat_cards=(
                StatCard("total_quotations", "Total quotations"),
                StatCard("pending_quotations", "Pending"),
                StatCard("accepted_quotations", "Accepted"),
                StatCard("conversion_rate", "Conversion rate", "percent"),
                StatCard("total_revenue", "Revenue", "currency"),
            ),
            form_fields=(
                FormField("customer_name", "Customer name", required=True),
                FormField("customer_contact", "Customer contact", required=True),
                FormField("customer_gst_number", "Customer GST number"),
                FormField("quotation_date", "Quotation date", "date"),
                FormField("item_type", "Item", required=True, group="item", default="machine"),
                FormField("description", "Item description", group="item"),
                FormField("quantity", "Quantity", "number", required=True, group="item", default="1"),
                FormField("unit_price", "Unit price", "number", required=True, group="item"),
            ),
            validator=validation.validate_quotation,
            label_field="quotation_number",
            search_placeholder="Search by quotation number or customer...",
        ),
        ResourceSpec(
            name="services",
            title="Service Records",
            singular="service record",
            route="/services",
            filter_names=service_records.LIST_FILTERS,
            defaults={"limit": 10},
            columns=(
                Column("machine_number", "Machine"),
                Column("service_date", "Date", "date"),
                Column("category", "Category"),
                Column("operator", "Operator"),
                Column("engine_hours", "Engine hours"),
                Column("site_location", "Site"),
            ),
            stat_cards=(
                StatCard("total_records", "Service records"),
                StatCard("machines_serviced", "Machines serviced"),
                StatCard("total_engine_hours", "Engine hours"),
            ),
            form_fields=(
                FormField("machine_id", "Machine ID", "number", required=True),
                FormField("service_date", "Service date", "date", required=True),
                FormField("category", "Category"),
                FormField("operator", "Operator"),
                FormField("engine_hours", "Engine hours", "number"),
                FormField("site_location", "Site"),
            ),
            validator=validation.validate_service_record,
            label_field="machine_number",
            search_placeholder="Search by machine, operator or site...",
        ),
        ResourceSpec(
            name="terms",
            title="Terms & Conditions",
            singular="term",
            route="/terms",
            filter_names=terms.LIST_FILTERS,
            defaults={"limit": 10, "sort_by": "display_order", "sort_order": "ASC"},
            columns=(
                Column("display_order", "#"),
                Column("title", "Title"),
                Column("category", "Category"),
                Column("is_default", "Default", "bool"),
            ),
            filter_fields=(
                FilterField("is_default", "Default", (("true", "Default"), ("false", "Optional"))),
            ),
            stat_cards=(
                StatCard("total_terms", "Total terms"),
                StatCard("default_terms", "Default"),
                StatCard("categories", "Categories"),
            ),
            form_fields=(
                FormField("title", "Title", required=True),
                FormField("description", "Description", "textarea", required=True),
                FormField("category", "Category"),
                FormField("display_order", "Display order", "number"),
                FormField("is_default", "Include by default", "checkbox"),
            ),
            validator=validation.validate_terms,
            label_field="title",
            search_placeholder="Search terms...",
        ),
        ResourceSpec(
            name="machines",
            title="Machines",
            singular="machine",
            route="/machines",
            filter_names=machines.LIST_FILTERS,
            defaults={"limit": 10},
            columns=(
                Column("machine_number", "Number"),
                Column("name", "Name"),
                Column("capacity", "Capacity"),
                Column("price_per_day", "Per day", "currency"),
                Column("is_active", "Active", "bool"),
            ),
            filter_fields=(
                FilterField("is_active", "Status", (("true", "Active"), ("false", "Inactive"))),
            ),
            stat_cards=(
                StatCard("total_machines", "Machines"),
                StatCard("active_machines", "Active"),
            ),
            form_fields=(
                FormField("machine_number", "Machine number", required=True),
                FormField("name", "Name", required=True),
                FormField("capacity", "Capacity"),
                FormField("price_per_day", "Price per day", "number"),
                FormField("price_per_week", "Price per week", "number"),
                FormField("price_per_month", "Price per month", "number"),
                FormField("is_active", "Active", "checkbox", default="true"),
            ),
            validator=validation.validate_machine,
            label_field="name",
            search_placeholder="Search machines...",
            has_stats_endpoint=False,
        ),
    )
}


def get_resource(name: str) -> ResourceSpec:
    try:
        return RESOURCES[name]
    except KeyError as exc:
        raise ValueError(f"Unknown resource: {name}") from exc
