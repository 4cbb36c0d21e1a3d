import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield


@pytest.fixture
def gateway():
    """A fresh fake payment gateway installed as the active one."""
    from payments.gateway import set_gateway
    from payments.gateway.fake_adapter import FakeGateway

    fake = FakeGateway()
    set_gateway(fake)
    return fake


@pytest.fixture
def store_settings():
    """Default store settings persisted so slots come from real business hours."""
    from ordering.delivery.settings import InitializeStoreSettings, load_store_settings
    from protean import current_domain

    current_domain.process(InitializeStoreSettings(), asynchronous=False)
    return load_store_settings()


@pytest.fixture
def open_slot(store_settings):
    """The first bookable delivery slot under the default settings."""
    from ordering.delivery.availability import get_delivery_slots

    return next(slot for slot in get_delivery_slots() if slot.available)
