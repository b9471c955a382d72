import httpx
import pytest

from mixer_admin.lib import clients
from mixer_admin.query.cache import QueryCache
from mixer_admin.query.client import QueryClient
from mixer_admin.services import DEMO_BASE_URL, AdminApi
from mixer_admin.services.demo import DemoBackend
from mixer_admin.services.notifications import Notifier


class FakeClock:
    """Manually advanced time source for staleness tests."""

    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def backend():
    return DemoBackend.seeded()


@pytest.fixture()
def notifier():
    return Notifier()


@pytest.fixture()
def api(backend, notifier):
    http = clients.build_http_client(
        base_url=DEMO_BASE_URL, token="", transport=backend.transport()
    )
    return AdminApi.create(http, notifier)


@pytest.fixture()
def make_api(notifier):
    """Build an AdminApi whose requests are answered by ``handler``."""

    def factory(handler):
        http = clients.build_http_client(
            base_url="http://api.test/api", token="", transport=httpx.MockTransport(handler)
        )
        return AdminApi.create(http, notifier)

    return factory


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def query_cache(tmp_path, clock):
    cache = QueryCache(tmp_path / "query-cache", cache_time=600, clock=clock)
    yield cache
    cache.close()


@pytest.fixture()
def sleeps():
    """Delays requested by retry backoff; nothing actually sleeps."""
    return []


@pytest.fixture()
def query_client(query_cache, sleeps):
    async def sleep(seconds: float) -> None:
        sleeps.append(seconds)

    return QueryClient(query_cache, stale_time=300, retry=1, retry_delay=1.0, sleep=sleep)
