"""
Application shell: navigation sidebar and page header.
"""

import reflex as rx

from mixer_admin import config
from mixer_admin.listing.resources import RESOURCES

_NAV_ICONS = {
    "customers": "users",
    "quotations": "file-text",
    "services": "wrench",
    "terms": "scroll-text",
    "machines": "truck",
}


def _nav_link(label: str, route: str, icon: str) -> rx.Component:
    return rx.link(
        rx.hstack(rx.icon(icon, size=18), rx.text(label), spacing="2", align="center"),
        href=route,
        class_name="nav-link",
        underline="none",
    )


def sidebar() -> rx.Component:
    """Build the navigation sidebar."""
    return rx.box(
        rx.heading(config.APP_TITLE, size="4", class_name="brand"),
        rx.vstack(
            _nav_link("Dashboard", "/", "layout-dashboard"),
            *[
                _nav_link(spec.title, spec.route, _NAV_ICONS.get(name, "list"))
                for name, spec in RESOURCES.items()
            ],
            _nav_link("Company", "/settings", "building-2"),
            spacing="1",
            align="stretch",
        ),
        class_name="sidebar",
    )


def page_header(title: str, subtitle: str = "") -> rx.Component:
    return rx.box(
        rx.heading(title, size="6", as_="h1"),
        rx.text(subtitle, class_name="muted") if subtitle else rx.fragment(),
        class_name="page-header",
    )


def app_shell(*children: rx.Component, **props) -> rx.Component:
    """Wrap page content with the sidebar."""
    return rx.box(
        sidebar(),
        rx.box(*children, class_name="app-container"),
        class_name="app-shell",
        **props,
    )
