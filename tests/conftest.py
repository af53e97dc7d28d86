import httpx
import pytest

from plagiarism.cache import CacheStore
from plagiarism.client import PlagiarismClient
from plagiarism.rate_limit import RateLimiter
from plagiarism.settings import Settings
from tests.helpers import API_URL, FakeClock, Upstream


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def upstream():
    return Upstream()


@pytest.fixture
def settings():
    return Settings(api_url=API_URL, api_token="test-token")


@pytest.fixture
def cache(clock):
    return CacheStore(ttl_seconds=600, clock=clock)


@pytest.fixture
def limiter(clock):
    return RateLimiter(max_requests=20, window_seconds=900, clock=clock)


@pytest.fixture
def plagiarism_client(upstream):
    return PlagiarismClient(API_URL, "test-token", transport=httpx.MockTransport(upstream))
