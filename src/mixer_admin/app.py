"""
Reflex application entry point for the Mixer Admin dashboard.

This module initializes the Reflex app and registers one page per resource
plus the dashboard and company settings.
"""

import subprocess
import sys

import reflex as rx

from mixer_admin import config
from mixer_admin.components.company import company_page
from mixer_admin.components.dashboard import dashboard_page
from mixer_admin.components.list_page import list_page
from mixer_admin.lib import logs, objects
from mixer_admin.listing.resources import get_resource
from mixer_admin.state import (
    CompanyState,
    CustomersState,
    DashboardState,
    MachinesState,
    QuotationsState,
    ServicesState,
    TermsState,
)

LOG = logs.logger(__file__)

LOG.info("Admin service: %s", config.SERVICE_KIND)
if config.SERVICE_KIND == "live":
    LOG.info("API base URL: %s", config.API_BASE_URL)

_FONT_URL = "https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&display=swap"

# Resource name -> page state
LIST_PAGES = {
    "customers": CustomersState,
    "quotations": QuotationsState,
    "services": ServicesState,
    "terms": TermsState,
    "machines": MachinesState,
}

# Create the Reflex app
app = rx.App(
    theme=rx.theme(
        appearance="light",
        has_background=True,
        radius="large",
        accent_color="orange",
    ),
    stylesheets=[
        _FONT_URL,
        "/styles.css",
    ],
)

app.add_page(
    dashboard_page,
    route="/",
    title=f"Dashboard | {config.APP_TITLE}",
    on_load=DashboardState.on_load,
)

for _name, _state in LIST_PAGES.items():
    _spec = get_resource(_name)
    app.add_page(
        # Bind the loop variables; add_page compiles the component later
        lambda state=_state, spec=_spec: list_page(state, spec),
        route=_spec.route,
        title=f"{_spec.title} | {config.APP_TITLE}",
        on_load=_state.on_load,
    )

app.add_page(
    company_page,
    route="/settings",
    title=f"Company | {config.APP_TITLE}",
    on_load=CompanyState.on_load,
)


def main() -> None:
    """
    Entrypoint used via `mixer-admin`.

    ``mixer-admin process-config`` prints the backend supervisor entry as
    JSON; anything else starts the app with `reflex run`.
    """
    if sys.argv[1:2] == ["process-config"]:
        print(objects.to_json(config.ProcessConfig.from_env().to_dict(), indent=2))
        return
    subprocess.run([sys.executable, "-m", "reflex", "run", "--port", str(config.APP_PORT)])


if __name__ == "__main__":
    main()
