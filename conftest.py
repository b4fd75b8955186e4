import pytest
from datetime import datetime, timezone
from httpx import AsyncClient, ASGITransport

from onstreet_mock.main import app
from onstreet_mock.api.deps import get_catalog, get_ledger, get_now, get_quote_cache
from onstreet_mock.core.config import settings
from onstreet_mock.models.zone import TariffBlock, Zone
from onstreet_mock.services.catalog import ZoneCatalog
from onstreet_mock.services.ledger import TicketLedger
from onstreet_mock.services.quote_cache import QuoteCache


FIXED_NOW = datetime(2025, 3, 1, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def catalog():
    return ZoneCatalog()


@pytest.fixture
def ledger():
    return TicketLedger(seed_plates=["1234ABC"])


@pytest.fixture
def empty_ledger():
    return TicketLedger()


@pytest.fixture
def quote_cache():
    return QuoteCache()


@pytest.fixture
def commission_zone():
    """Zone whose blocks carry a commission and whose durations are not sorted"""
    return Zone(
        id="coche",
        name="Zona coche",
        color="#0055FF",
        blocks=(
            TariffBlock(minutes=60, duration_seconds=3600, price_in_cents=120, commission_price_in_cents=10),
            TariffBlock(minutes=15, duration_seconds=900, price_in_cents=40, commission_price_in_cents=5),
            TariffBlock(minutes=30, duration_seconds=1800, price_in_cents=70),
        ),
        max_duration_seconds=7200,
    )


@pytest.fixture
def empty_zone():
    return Zone(id="empty", name="Zona vacía", color="#CCCCCC", blocks=(), max_duration_seconds=0)


@pytest.fixture
async def test_client(catalog, ledger, quote_cache):
    app.dependency_overrides[get_catalog] = lambda: catalog
    app.dependency_overrides[get_ledger] = lambda: ledger
    app.dependency_overrides[get_quote_cache] = lambda: quote_cache

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def frozen_client(test_client, fixed_now):
    app.dependency_overrides[get_now] = lambda: fixed_now
    yield test_client


@pytest.fixture
def app_settings():
    """Return application settings"""
    return settings


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "pricing: marks tests related to tariff steps and rate quotes"
    )
    config.addinivalue_line(
        "markers", "ledger: marks tests related to paying and validating tickets"
    )
    config.addinivalue_line(
        "markers", "cache: marks tests related to the rate quote cache"
    )
    config.addinivalue_line(
        "markers", "webhooks: marks tests related to ticket notifications"
    )
    config.addinivalue_line(
        "markers", "rate_limit: marks tests related to rate limiting"
    )
