"""
Reflex state management for the Mixer Admin dashboard.

List pages share ListPageState, a mixin that forwards UI events to the
page's ListController and mirrors its snapshot into state variables.
Network work runs in background events so the UI stays responsive; results
are applied under the state lock. Notifications collected by the API layer
are turned into toasts after each event.
"""

from typing import Any

import reflex as rx

from mixer_admin import config
from mixer_admin.lib import logs
from mixer_admin.listing.controller import ListController, get_controller
from mixer_admin.loaders import load_company, load_dashboard
from mixer_admin.services import get_admin_api
from mixer_admin.services.company import UploadFile
from mixer_admin.services.errors import ApiError
from mixer_admin.services.notifications import Level, Notifier
from mixer_admin.validation import validate_company

LOG = logs.logger(__file__)

# Select value standing for "no filter" (Radix selects reject "")
ALL = "all"

_TOASTS = {
    Level.SUCCESS: rx.toast.success,
    Level.ERROR: rx.toast.error,
    Level.WARNING: rx.toast.warning,
    Level.INFO: rx.toast.info,
}


def _toasts(notifier: Notifier) -> list:
    """Turn pending notifications into toast events."""
    return [_TOASTS[item.level](item.message) for item in notifier.drain()]


class ListPageState(rx.State, mixin=True):
    """
    Shared state of a resource list page.

    Subclasses name their resource by overriding _resource().
    """

    rows: list[dict[str, str]] = []
    total: int = 0
    current_page: int = 1
    total_pages: int = 0
    per_page: int = 10
    has_prev_page: bool = False
    has_next_page: bool = False
    summary: str = ""

    window_pages: list[int] = []
    show_first: bool = False
    leading_ellipsis: bool = False
    trailing_ellipsis: bool = False
    show_last: bool = False

    search_term: str = ""
    debounced_search: str = ""
    filters: dict[str, str] = {}
    active_filters: int = 0
    selected: list[str] = []
    show_mobile_filters: bool = False

    is_loading: bool = True
    is_refetching: bool = False
    show_error: bool = False
    error: str = ""

    stats: list[dict[str, str]] = []
    stats_approximate: bool = False

    dialog_open: bool = False
    dialog_title: str = ""
    dialog_message: str = ""
    dialog_color: str = "blue"
    dialog_icon: str = "info"
    dialog_confirm_label: str = "Confirm"
    dialog_cancel_label: str = "Cancel"
    dialog_loading: bool = False
    dialog_prevent_backdrop_close: bool = False

    form_open: bool = False
    form_mode: str = "create"
    form_values: dict[str, str] = {}
    form_errors: list[str] = []
    form_saving: bool = False

    @rx.var
    def is_empty(self) -> bool:
        """Check if the empty state should be shown."""
        return not self.is_loading and not self.show_error and len(self.rows) == 0

    @rx.var
    def all_selected(self) -> bool:
        return len(self.rows) > 0 and len(self.selected) == len(self.rows)

    @rx.var
    def result_summary(self) -> str:
        """Generate the search result indicator text."""
        if not self.debounced_search:
            return ""
        noun = "result" if self.total == 1 else "results"
        return f'{self.total} {noun} for "{self.debounced_search}"'

    def _resource(self) -> str:
        raise NotImplementedError

    def _controller(self) -> ListController:
        return get_controller(self._resource(), self.router.session.client_token)

    def _sync(self, controller: ListController) -> list:
        """Copy the controller snapshot into state; returns pending toasts."""
        snapshot = controller.snapshot()
        pagination = snapshot["pagination"]
        window = snapshot["window"]
        store = snapshot["store"]
        query = snapshot["query"]
        dialog = snapshot["dialog"]
        form = snapshot["form"]

        self.rows = snapshot["rows"]
        self.total = pagination["total"]
        self.current_page = pagination["current_page"]
        self.total_pages = pagination["total_pages"]
        self.per_page = pagination["per_page"]
        self.has_prev_page = pagination["has_prev_page"]
        self.has_next_page = pagination["has_next_page"]
        self.summary = snapshot["summary"]

        self.window_pages = window["pages"]
        self.show_first = window["show_first"]
        self.leading_ellipsis = window["leading_ellipsis"]
        self.trailing_ellipsis = window["trailing_ellipsis"]
        self.show_last = window["show_last"]

        self.debounced_search = snapshot["search"]
        self.filters = {
            name: str(value)
            for name, value in store["filters"].items()
            if value not in (None, "")
        }
        self.active_filters = snapshot["active_filters"]
        self.selected = [str(item_id) for item_id in store["selected"]]
        self.show_mobile_filters = store["show_mobile_filters"]

        self.is_loading = query["is_loading"] or query["status"] == "idle"
        self.is_refetching = query["is_refetching"]
        self.show_error = query["show_error"]
        self.error = query["error"]

        self.stats = snapshot["stats"] if config.SHOW_STATS else []
        self.stats_approximate = snapshot["stats_approximate"]

        self.dialog_open = dialog["open"]
        self.dialog_title = dialog["title"]
        self.dialog_message = dialog["message"]
        self.dialog_color = dialog["color"]
        self.dialog_icon = dialog["icon"]
        self.dialog_confirm_label = dialog["confirm_label"]
        self.dialog_cancel_label = dialog["cancel_label"]
        self.dialog_loading = dialog["loading"]
        self.dialog_prevent_backdrop_close = dialog["prevent_backdrop_close"]

        self.form_open = form["open"]
        self.form_mode = form["mode"]
        self.form_values = form["values"]
        self.form_errors = form["errors"]
        self.form_saving = form["saving"]
        return _toasts(controller.api.notifier)

    @rx.event(background=True)
    async def on_load(self):
        """Event handler for page load: show cached data, then fetch."""
        async with self:
            controller = self._controller()
            self.search_term = controller.store.search_term
            self._sync(controller)
        await controller.load()
        await controller.load_stats()
        async with self:
            toasts = self._sync(controller)
        yield toasts

    @rx.event(background=True)
    async def set_search(self, term: str):
        """
        Event handler for search input changes.

        The raw term is echoed immediately; the load only runs once typing
        pauses, and superseded keystrokes end here without touching state.
        """
        async with self:
            self.search_term = term
            controller = self._controller()
        if not await controller.search_input(term):
            return
        async with self:
            toasts = self._sync(controller)
        yield toasts

    @rx.event(background=True)
    async def clear_search(self):
        async with self:
            self.search_term = ""
            controller = self._controller()
        await controller.search_input("")
        async with self:
            toasts = self._sync(controller)
        yield toasts

    async def _run(self, action) -> list:
        async with self:
            controller = self._controller()
            self._sync(controller)
            self.is_refetching = True
        await action(controller)
        async with self:
            return self._sync(controller)

    @rx.event(background=True)
    async def go_to_page(self, page: int):
        yield await self._run(lambda controller: controller.set_page(int(page)))

    @rx.event(background=True)
    async def prev_page(self):
        async with self:
            page = self.current_page - 1
        if page >= 1:
            yield await self._run(lambda controller: controller.set_page(page))

    @rx.event(background=True)
    async def next_page(self):
        async with self:
            page, has_next = self.current_page + 1, self.has_next_page
        if has_next:
            yield await self._run(lambda controller: controller.set_page(page))

    @rx.event(background=True)
    async def set_page_size(self, limit: str):
        yield await self._run(lambda controller: controller.set_limit(int(limit)))

    @rx.event(background=True)
    async def set_filter(self, name: str, value: str):
        """Apply one filter from the filter panel; "all" clears it."""
        value = None if value in (ALL, "") else value
        yield await self._run(lambda controller: controller.apply_filters(**{name: value}))

    @rx.event(background=True)
    async def reset_filters(self):
        async with self:
            self.search_term = ""
        yield await self._run(lambda controller: controller.reset())

    @rx.event(background=True)
    async def refresh(self):
        yield await self._run(lambda controller: controller.refresh())

    @rx.event
    def toggle_selection(self, item_id: str):
        controller = self._controller()
        controller.store.toggle_selection(item_id)
        self._sync(controller)

    @rx.event
    def toggle_select_all(self):
        controller = self._controller()
        controller.store.select_all([row["id"] for row in self.rows])
        self._sync(controller)

    @rx.event
    def toggle_mobile_filters(self):
        controller = self._controller()
        controller.store.toggle_mobile_filters()
        self._sync(controller)

    @rx.event
    def request_delete(self, item_id: str):
        controller = self._controller()
        controller.request_delete(item_id)
        self._sync(controller)

    @rx.event(background=True)
    async def confirm_dialog(self):
        """Run the confirmed action; the dialog shows a spinner meanwhile."""
        async with self:
            controller = self._controller()
            action_started = controller.dialog.open and not controller.dialog.loading
            self.dialog_loading = action_started
        if not action_started:
            return
        try:
            await controller.confirm()
        except ApiError as exc:
            LOG.error("Dialog action failed: %s", exc.message, exc_info=True)
        async with self:
            toasts = self._sync(controller)
        yield toasts

    @rx.event
    def cancel_dialog(self):
        controller = self._controller()
        controller.cancel()
        self._sync(controller)

    @rx.event
    def dialog_escape(self):
        controller = self._controller()
        controller.dialog.escape()
        self._sync(controller)

    @rx.event
    def dialog_backdrop_click(self):
        controller = self._controller()
        controller.dialog.backdrop_click()
        self._sync(controller)

    @rx.event
    def open_create(self):
        controller = self._controller()
        controller.open_create()
        self._sync(controller)

    @rx.event
    def open_edit(self, item_id: str):
        controller = self._controller()
        controller.open_edit(item_id)
        self._sync(controller)

    @rx.event
    def close_form(self):
        controller = self._controller()
        controller.close_form()
        self._sync(controller)

    @rx.event(background=True)
    async def submit_form(self, form_data: dict):
        """Validate and save the create/edit form; errors stay on it."""
        async with self:
            controller = self._controller()
            if not controller.form.open or controller.form.saving:
                return
            self.form_saving = True
        await controller.submit_form(form_data)
        async with self:
            toasts = self._sync(controller)
        yield toasts


class CustomersState(ListPageState, rx.State):
    """State of the customers page."""

    def _resource(self) -> str:
        return "customers"


class QuotationsState(ListPageState, rx.State):
    """State of the quotations page, with inline status changes."""

    def _resource(self) -> str:
        return "quotations"

    @rx.event(background=True)
    async def set_status(self, item_id: str, status: str):
        async def change(controller: ListController):
            try:
                await controller.update_status(item_id, status)
            except ApiError as exc:
                LOG.info("Status change rolled back: %s", exc.message)

        yield await self._run(change)


class ServicesState(ListPageState, rx.State):
    def _resource(self) -> str:
        return "services"


class TermsState(ListPageState, rx.State):
    """State of the terms page, with bulk default toggling and duplication."""

    def _resource(self) -> str:
        return "terms"

    @rx.event
    def request_bulk_default(self, is_default: bool):
        controller = self._controller()
        count = len(controller.store.selected)
        label = "default" if is_default else "optional"
        controller.request_bulk_update(
            {"is_default": is_default},
            title="Update selected terms",
            message=f"Mark {count} selected terms as {label}?",
        )
        self._sync(controller)

    @rx.event(background=True)
    async def duplicate(self, item_id: str):
        async def copy(controller: ListController):
            try:
                await controller.duplicate(item_id)
            except ApiError as exc:
                LOG.info("Duplicate failed: %s", exc.message)

        yield await self._run(copy)


class MachinesState(ListPageState, rx.State):
    def _resource(self) -> str:
        return "machines"


class CompanyState(rx.State):
    """Company settings form and image uploads."""

    company_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    gst_number: str = ""
    logo_url: str = ""
    signature_url: str = ""
    errors: list[str] = []
    is_loading: bool = True
    is_saving: bool = False

    def _apply(self, data: dict | None) -> None:
        data = data or {}
        self.company_name = data.get("company_name") or ""
        self.email = data.get("email") or ""
        self.phone = data.get("phone") or ""
        self.address = data.get("address") or ""
        self.gst_number = data.get("gst_number") or ""
        self.logo_url = data.get("logo_url") or ""
        self.signature_url = data.get("signature_url") or ""

    @rx.event(background=True)
    async def on_load(self):
        api = get_admin_api()
        data = await load_company(api)
        async with self:
            self._apply(data)
            self.is_loading = False
        yield _toasts(api.notifier)

    @rx.event(background=True)
    async def save(self, form_data: dict):
        """Validate and save the details form."""
        result = validate_company(form_data)
        async with self:
            self.errors = result.errors
            self.is_saving = result.is_valid
        if not result.is_valid:
            return
        api = get_admin_api()
        try:
            data = await api.company.update_details(form_data)
        except ApiError as exc:
            LOG.info("Company update failed: %s", exc.message)
            data = None
        async with self:
            if data:
                self._apply(data)
            self.is_saving = False
        yield _toasts(api.notifier)

    async def _upload(self, field: str, files: list[rx.UploadFile]):
        if not files:
            return []
        file = files[0]
        upload = UploadFile(
            filename=file.filename or field,
            content=await file.read(),
            content_type=file.content_type or "",
        )
        api = get_admin_api()
        try:
            data = await api.company.upload_images(**{field: upload})
        except ApiError as exc:
            self.errors = [exc.message]
            if exc.notified:
                return _toasts(api.notifier)
            return [rx.toast.error(exc.message)]
        self.errors = []
        self._apply(data)
        return _toasts(api.notifier)

    @rx.event
    async def upload_logo(self, files: list[rx.UploadFile]):
        return await self._upload("logo", files)

    @rx.event
    async def upload_signature(self, files: list[rx.UploadFile]):
        return await self._upload("signature", files)


class DashboardState(rx.State):
    """Headline figures and the revenue chart of the dashboard page."""

    cards: list[dict[str, str]] = []
    revenue: list[dict[str, Any]] = []
    period: str = "30d"
    is_loading: bool = True
    error: str = ""

    @rx.event(background=True)
    async def on_load(self):
        async with self:
            period = self.period
        api = get_admin_api()
        data = await load_dashboard(api, period)
        async with self:
            self.cards = data.cards
            self.revenue = data.revenue
            self.error = data.error
            self.is_loading = False
        yield _toasts(api.notifier)

    @rx.event
    def set_period(self, period: str):
        self.period = period
        return DashboardState.on_load
