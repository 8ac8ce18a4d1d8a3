import pytest


@pytest.fixture(scope="session")
def _availability_domain():
    """Initialize the availability domain once per session."""
    from availability.domain import availability

    availability.init()
    return availability


@pytest.fixture(scope="session", autouse=True)
def setup_db(_availability_domain):
    from availability.utils.db import drop_db, setup_db

    setup_db(_availability_domain)

    yield

    drop_db(_availability_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_availability_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _availability_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()
