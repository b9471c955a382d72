"""
Service factory for the Mixer Admin dashboard.

This module provides get_admin_api(), which bundles one client per REST
resource over a shared ``httpx.AsyncClient`` chosen by configuration.

Available backends:
- live: the REST API at MIXER_ADMIN_API_BASE_URL
- demo: in-memory DemoBackend served through httpx.MockTransport

The HTTP client is cached at the module level, so the same connection pool
is reused across sessions. Configure via MIXER_ADMIN_SERVICE.
"""

from dataclasses import dataclass
from functools import cache
from typing import Callable, Dict

import httpx

from mixer_admin import config
from mixer_admin.lib import clients, logs
from mixer_admin.services.company import CompanyApi
from mixer_admin.services.customers import CustomerApi
from mixer_admin.services.dashboard import DashboardApi
from mixer_admin.services.demo import DemoBackend
from mixer_admin.services.machines import MachineApi
from mixer_admin.services.notifications import Notifier
from mixer_admin.services.quotations import QuotationApi
from mixer_admin.services.service_records import ServiceRecordApi
from mixer_admin.services.terms import TermsApi

LOG = logs.logger(__file__)

DEMO_BASE_URL = "http://demo.local/api"

_CLIENT_REGISTRY: Dict[str, Callable[[], httpx.AsyncClient]] = {
    "live": clients.http_client,
    "demo": lambda: clients.build_http_client(
        base_url=DEMO_BASE_URL, transport=DemoBackend.seeded().transport()
    ),
}


@dataclass
class AdminApi:
    """One client per REST resource, sharing an HTTP client and notifier."""

    customers: CustomerApi
    quotations: QuotationApi
    services: ServiceRecordApi
    terms: TermsApi
    machines: MachineApi
    company: CompanyApi
    dashboard: DashboardApi
    notifier: Notifier

    @classmethod
    def create(cls, http: httpx.AsyncClient, notifier: Notifier | None = None) -> "AdminApi":
        notifier = notifier or Notifier()
        return cls(
            customers=CustomerApi(http, notifier),
            quotations=QuotationApi(http, notifier),
            services=ServiceRecordApi(http, notifier),
            terms=TermsApi(http, notifier),
            machines=MachineApi(http, notifier),
            company=CompanyApi(http, notifier),
            dashboard=DashboardApi(http, notifier),
            notifier=notifier,
        )

    def resource(self, name: str):
        """Return the client for a resource name such as ``"customers"``."""
        try:
            return getattr(self, name)
        except AttributeError as exc:
            raise ValueError(f"Unknown resource: {name}") from exc


@cache
def get_http_client(kind: str | None = None) -> httpx.AsyncClient:
    """Return the configured HTTP client implementation."""
    resolved_kind = (kind or config.SERVICE_KIND).lower()
    LOG.info("get_http_client - kind:%s resolved_kind:%s", kind, resolved_kind)
    try:
        factory = _CLIENT_REGISTRY[resolved_kind]
    except KeyError as exc:
        msg = f"Unknown admin service kind: {resolved_kind}"
        raise ValueError(msg) from exc
    return factory()


def get_admin_api(notifier: Notifier | None = None, kind: str | None = None) -> AdminApi:
    """
    Return resource clients bound to the configured backend.

    Args:
        notifier: Per-session notifier; a new one is created when omitted.
        kind: "live" or "demo"; defaults to MIXER_ADMIN_SERVICE.
    """
    return AdminApi.create(get_http_client(kind), notifier)
