import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def support_bed():
    from support.domain import support

    bed = DomainFixture(support)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(support_bed):
    with support_bed.domain_context():
        yield
