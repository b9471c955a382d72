"""
Reusable Reflex UI components for the Mixer Admin dashboard.

This package provides:
- layout: application shell with the navigation sidebar
- search_bar: search input echoing every keystroke
- filters: filter panel built from a resource's filter fields
- pagination: page window with first/last shortcuts and page size
- confirm_dialog: confirmation modal driven by a list page state
- list_page: table, stat cards and every list page state
- company: company details form and image uploads
- dashboard: headline figures and revenue chart

Components are plain functions returning rx.Component; list page
components take the page's state class and ResourceSpec as arguments.
"""

from mixer_admin.components.company import company_page
from mixer_admin.components.dashboard import dashboard_page
from mixer_admin.components.layout import app_shell
from mixer_admin.components.list_page import list_page

__all__ = [
    "app_shell",
    "company_page",
    "dashboard_page",
    "list_page",
]
