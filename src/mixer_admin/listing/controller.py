"""
Page container for resource lists.

A ListController owns everything one list page needs: its ListStore, the
debounced search, the ListQuery showing the current page, the confirmation
dialog and the stat cards. The Reflex state drives it and mirrors
``snapshot()`` into UI variables after each event.

Controllers hold asyncio objects (timers, tasks), which cannot live in
serialized Reflex state, so they are kept in a per-process registry keyed
by session token and resource.
"""

from collections import OrderedDict
from functools import cache
from typing import Any, Awaitable, Callable, Iterable, Mapping

from mixer_admin import config
from mixer_admin.lib import logs
from mixer_admin.listing.dialog import ConfirmDialog, DialogVariant
from mixer_admin.listing.forms import (
    RecordForm,
    build_payload,
    error_messages,
    form_values,
    posted_values,
)
from mixer_admin.listing.pagination import PAGE_SIZES, page_window
from mixer_admin.listing.resources import ResourceSpec, get_resource
from mixer_admin.listing.stats import StatsView, resolve_stats
from mixer_admin.listing.store import ListStore
from mixer_admin.models.common import ListPage
from mixer_admin.query import keys
from mixer_admin.query.cache import QueryCache
from mixer_admin.query.client import QueryClient
from mixer_admin.query.debounce import Debouncer
from mixer_admin.query.mutations import OptimisticMutation, patch_item, patch_items, remove_item
from mixer_admin.query.observer import ListQuery
from mixer_admin.services import AdminApi, get_admin_api
from mixer_admin.services.errors import ApiError, ClientValidationError

LOG = logs.logger(__file__)

MAX_CONTROLLERS = 512


class ListController:
    """
    Drives one list page.

    Attributes:
        spec: Resource declaration.
        api: Resource clients and the session notifier.
        store: Filters, search and selection.
        query: What the page shows.
        debouncer: Debounce of the search box.
        dialog: Confirmation dialog for destructive actions.
        form: Create/edit dialog.
        stats: Resolved stat cards.
    """

    def __init__(
        self,
        spec: ResourceSpec,
        api: AdminApi,
        client: QueryClient,
        store: ListStore | None = None,
        debounce_seconds: float = config.SEARCH_DEBOUNCE_SECONDS,
    ) -> None:
        self.spec = spec
        self.api = api
        self.resource_api = api.resource(spec.name)
        self.client = client
        self.store = store or ListStore(spec.defaults)
        self.query = ListQuery(client)
        self.debouncer = Debouncer(debounce_seconds, value=self.store.search_term.strip())
        self.dialog = ConfirmDialog()
        self.form = RecordForm()
        self.mutation = OptimisticMutation(client, api.notifier)
        self.stats = StatsView()

    @property
    def search(self) -> str:
        """The debounced search term, the only one that reaches the cache key."""
        return self.debouncer.value or ""

    @property
    def page(self) -> ListPage:
        return self.query.data or ListPage()

    def cache_key(self) -> tuple:
        return keys.list_key(
            self.spec.name,
            self.search,
            self.store.filters,
            self.spec.filter_names,
            self.store.page,
            self.store.limit,
        )

    def request_params(self) -> dict[str, Any]:
        return {**self.store.filters, "search": self.search or None}

    async def load(self, force: bool = False) -> bool:
        """Load the page for the current key; True when it is now shown."""
        params = self.request_params()
        return await self.query.load(
            self.cache_key(), lambda: self.resource_api.list(params), force=force
        )

    async def refresh(self) -> bool:
        """Refetch the current page and its stats regardless of staleness."""
        loaded = await self.load(force=True)
        await self.load_stats(force=True)
        return loaded

    async def search_input(self, term: str) -> bool:
        """
        Record a keystroke and load once typing pauses.

        Returns:
            True when this keystroke's value was emitted and loaded, False
            when a later keystroke superseded it.
        """
        self.store.set_search_term(term)
        value = (term or "").strip()
        previous = self.search
        if not await self.debouncer.push(value):
            return False
        if value != previous:
            self.store.set_page(1)
        await self.load()
        return True

    async def set_page(self, page: int) -> bool:
        total_pages = self.page.pagination.total_pages
        if total_pages:
            page = min(page, total_pages)
        self.store.set_page(page)
        return await self.load()

    async def set_limit(self, limit: int) -> bool:
        if int(limit) not in PAGE_SIZES:
            raise ValueError(f"Unsupported page size: {limit}")
        self.store.set_limit(limit)
        return await self.load()

    async def apply_filters(self, **filters: Any) -> bool:
        self.store.apply(filters)
        return await self.load()

    async def reset(self) -> bool:
        """Back to defaults: filters, search term and selection."""
        self.debouncer.cancel()
        self.debouncer.value = ""
        self.store.reset()
        return await self.load()

    async def load_stats(self, force: bool = False) -> StatsView:
        """Resolve the stat cards, preferring the server's figures."""
        server = None
        if self.spec.has_stats_endpoint:
            try:
                server = await self.client.fetch_query(
                    keys.stats_key(self.spec.name), self.resource_api.stats, force=force
                )
            except ApiError as exc:
                LOG.warning("%s stats unavailable: %s", self.spec.name, exc.message)
        self.stats = resolve_stats(self.spec.name, server, self.page.items)
        return self.stats

    def request_delete(self, item_id: Any) -> None:
        """Ask for confirmation before deleting ``item_id``."""
        label = next(
            (
                self.spec.row(item)["label"]
                for item in self.page.items
                if str(item.get("id")) == str(item_id)
            ),
            str(item_id),
        )
        self.dialog.show(
            title=f"Delete {self.spec.singular}",
            message=f'Are you sure you want to delete "{label}"? This action cannot be undone.',
            on_confirm=lambda: self.delete(item_id),
            variant=DialogVariant.DANGER,
        )

    def request_bulk_update(self, changes: dict[str, Any], title: str, message: str) -> None:
        ids = list(self.store.selected)
        if not ids:
            return
        self.dialog.show(
            title=title,
            message=message,
            on_confirm=lambda: self.bulk_update(ids, changes),
            variant=DialogVariant.WARNING,
        )

    async def confirm(self) -> bool:
        """
        Run the action the dialog guards.

        Returns:
            True when the action ran and succeeded.
        """
        action = self.dialog.confirm()
        if action is None:
            return False
        try:
            await action()
        except ApiError as exc:
            LOG.info("confirmed action failed: %s", exc.message)
            return False
        finally:
            self.dialog.finish()
        return True

    def cancel(self) -> bool:
        return self.dialog.cancel()

    def open_create(self) -> None:
        self.form.show(form_values(self.spec.form_fields))

    def open_edit(self, item_id: Any) -> None:
        """Open the form filled with the record ``item_id`` of the loaded page."""
        item_id = self._match_id(item_id)
        record = next((item for item in self.page.items if item.get("id") == item_id), None)
        if record is None:
            LOG.warning("%s %s is not on the loaded page", self.spec.singular, item_id)
            return
        self.form.show(form_values(self.spec.form_fields, record), item_id=item_id)

    def close_form(self) -> bool:
        return self.form.close()

    async def submit_form(self, values: Mapping[str, Any]) -> bool:
        """
        Validate and send the form; errors stay on the form.

        Returns:
            True when the record was saved and the form closed.
        """
        if not self.form.open or self.form.saving:
            return False
        self.form.values = posted_values(self.spec.form_fields, values)
        payload = build_payload(self.spec.form_fields, values)
        self.form.saving = True
        try:
            if self.form.is_edit:
                await self.save(self.form.item_id, payload)
            else:
                await self.create(payload)
        except ApiError as exc:
            self.form.errors = error_messages(exc.field_errors, exc.message)
            return False
        finally:
            self.form.saving = False
        self.form.close()
        return True

    def _check(self, payload: Mapping[str, Any], is_update: bool) -> None:
        result = self.spec.validate(payload, is_update)
        if not result.is_valid:
            raise ClientValidationError(result.errors[0], field_errors=result.errors)

    async def create(self, payload: Mapping[str, Any]) -> Any:
        """Validate and create a record, then reload the page and its stats."""
        self._check(payload, is_update=False)
        created = await self.resource_api.create(payload)
        self.client.invalidate_queries(keys.resource_prefix(self.spec.name))
        await self.load()
        await self.load_stats()
        return created

    async def save(self, item_id: Any, payload: Mapping[str, Any]) -> None:
        """Validate an edit and apply it optimistically."""
        self._check(payload, is_update=True)
        await self.update(item_id, dict(payload))

    async def delete(self, item_id: Any) -> None:
        """Delete with the row removed from the page until the server answers."""
        item_id = self._match_id(item_id)
        try:
            await self.mutation.run(
                self.cache_key(),
                remove_item(item_id),
                lambda: self.resource_api.delete(item_id),
                invalidate=[keys.resource_prefix(self.spec.name)],
            )
        finally:
            self.query.sync()
        self.store.clear_selection()
        await self.load_stats()

    async def update(
        self,
        item_id: Any,
        changes: dict[str, Any],
        request: Callable[[], Awaitable[Any]] | None = None,
    ) -> None:
        """
        Patch one row optimistically.

        Args:
            item_id: Row id.
            changes: Fields merged into the cached row.
            request: Server call; the resource's ``update`` when omitted.
        """
        item_id = self._match_id(item_id)
        if request is None:

            async def request():
                return await self.resource_api.update(item_id, changes)

        try:
            await self.mutation.run(
                self.cache_key(),
                patch_item(item_id, changes),
                request,
                invalidate=[keys.resource_prefix(self.spec.name)],
            )
        finally:
            self.query.sync()
        await self.load_stats()

    async def update_status(self, item_id: Any, status: str) -> None:
        """Move a quotation to ``status``."""
        item_id = self._match_id(item_id)
        await self.update(
            item_id,
            {"quotation_status": status},
            lambda: self.resource_api.update_status(item_id, status),
        )

    async def bulk_update(self, item_ids: Iterable[Any], changes: dict[str, Any]) -> None:
        """Patch several rows at once (terms only have a per-row endpoint)."""
        item_ids = [self._match_id(item_id) for item_id in item_ids]
        request = getattr(self.resource_api, "bulk_update", None)
        if request is None:
            raise ValueError(f"{self.spec.name} does not support bulk updates")
        try:
            await self.mutation.run(
                self.cache_key(),
                patch_items(item_ids, changes),
                lambda: request(item_ids, changes),
                invalidate=[keys.resource_prefix(self.spec.name)],
            )
        finally:
            self.query.sync()
        self.store.clear_selection()
        await self.load_stats()

    async def duplicate(self, item_id: Any) -> None:
        request = getattr(self.resource_api, "duplicate", None)
        if request is None:
            raise ValueError(f"{self.spec.name} does not support duplication")
        await request(self._match_id(item_id))
        self.client.invalidate_queries(keys.resource_prefix(self.spec.name))
        await self.load()
        await self.load_stats()

    def _match_id(self, item_id: Any) -> Any:
        """Return the id as typed in the loaded records (UI events send strings)."""
        for item in self.page.items:
            if str(item.get("id")) == str(item_id):
                return item.get("id")
        return item_id

    def snapshot(self) -> dict:
        """Plain-data view of the page for the Reflex state."""
        page = self.page
        pagination = page.pagination
        return {
            "rows": [self.spec.row(item) for item in page.items],
            "pagination": pagination.to_dict(),
            "summary": pagination.summary(),
            "window": page_window(pagination.current_page, pagination.total_pages).to_dict(),
            "query": self.query.to_dict(),
            "store": self.store.to_dict(),
            "search": self.search,
            "active_filters": self.store.active_filter_count(),
            "dialog": self.dialog.to_dict(),
            "form": self.form.to_dict(),
            "stats": self.stats.cards(self.spec.stat_cards),
            "stats_approximate": self.stats.approximate,
        }


@cache
def get_query_client() -> QueryClient:
    """Process-wide query client over the disk cache."""
    return QueryClient(QueryCache(config.CACHE_DIR))


_CONTROLLERS: "OrderedDict[tuple[str, str], ListController]" = OrderedDict()


def get_controller(resource: str, session: str, api: AdminApi | None = None) -> ListController:
    """
    Return the controller of ``resource`` for one browser session.

    The registry keeps the most recently used controllers and drops the
    oldest beyond MAX_CONTROLLERS.
    """
    key = (session, resource)
    controller = _CONTROLLERS.get(key)
    if controller is None:
        controller = ListController(
            get_resource(resource), api or get_admin_api(), get_query_client()
        )
        _CONTROLLERS[key] = controller
        while len(_CONTROLLERS) > MAX_CONTROLLERS:
            _CONTROLLERS.popitem(last=False)
    else:
        _CONTROLLERS.move_to_end(key)
    return controller


def drop_controllers(session: str) -> None:
    for key in [key for key in _CONTROLLERS if key[0] == session]:
        del _CONTROLLERS[key]
