"""Table management for domains persisted through SQLAlchemy providers."""

from collections.abc import Iterator

from protean.domain import Domain
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain) -> Iterator:
    for provider in domain.providers.values():
        if provider.conn_info["provider"] in SQL_PROVIDERS:
            yield provider


def _engine(provider) -> Engine:
    return create_engine(provider.conn_info["database_uri"])


def _register_models(domain: Domain, provider) -> None:
    # A repository builds its model, and so its table, the first time _dao is touched
    records = [*domain.registry.aggregates.values(), *domain.registry.entities.values()]
    for record in records:
        if record.cls.meta_.provider == provider.name:
            domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain) -> None:
    """Create the domain's tables on every SQL provider it uses."""
    with domain.domain_context():
        for provider in _sql_providers(domain):
            _register_models(domain, provider)
            provider._metadata.create_all(_engine(provider))


def drop_db(domain: Domain) -> None:
    with domain.domain_context():
        for provider in _sql_providers(domain):
            provider._metadata.drop_all(_engine(provider))
