import os
from pathlib import Path

import pytest

# Test layer is taken from the directory a test module lives in.
LAYER_MARKERS = {
    "domain": pytest.mark.domain,
    "application": pytest.mark.application,
    "bdd": pytest.mark.bdd,
    "integration": pytest.mark.integration,
}


def pytest_addoption(parser):
    parser.addoption("--env", action="store", default="test", help="PROTEAN_ENV overlay to initialise domains with")


def pytest_sessionstart(session):
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    for item in items:
        layers = set(Path(item.fspath).parts) & LAYER_MARKERS.keys()
        for layer in layers:
            item.add_marker(LAYER_MARKERS[layer])
        if "integration" in layers and item.get_closest_marker("fast") is None:
            item.add_marker(pytest.mark.slow)


@pytest.fixture(autouse=True)
def reset_adapters():
    """Give every test a fresh cache, payment gateway and auth service."""
    from identity.auth import reset_auth_service
    from payments.gateway import reset_gateway
    from shared.cache import reset_cache

    reset_cache()
    reset_gateway()
    reset_auth_service()

    yield

    reset_cache()
    reset_gateway()
    reset_auth_service()
