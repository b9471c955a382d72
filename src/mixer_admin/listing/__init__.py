"""
List-page building blocks.

This package provides:
- ListStore: filters, search term and selection of one page
- page_window: the page buttons of the pagination control
- ConfirmDialog: confirmation gate for destructive actions
- resolve_stats: server or page-computed stat cards
- ListController: composes the above with the query layer
"""

from mixer_admin.listing.controller import ListController, get_controller
from mixer_admin.listing.dialog import ConfirmDialog, DialogVariant
from mixer_admin.listing.pagination import PAGE_SIZES, PageWindow, page_window
from mixer_admin.listing.resources import RESOURCES, ResourceSpec, get_resource
from mixer_admin.listing.stats import StatsView, resolve_stats
from mixer_admin.listing.store import ListStore

__all__ = [
    "PAGE_SIZES",
    "RESOURCES",
    "ConfirmDialog",
    "DialogVariant",
    "ListController",
    "ListStore",
    "PageWindow",
    "ResourceSpec",
    "StatsView",
    "get_controller",
    "get_resource",
    "page_window",
    "resolve_stats",
]
