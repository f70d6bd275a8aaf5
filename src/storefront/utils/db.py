"""Schema management for SQL-backed providers.

Protean builds SQLAlchemy tables lazily, when a repository's DAO is first
touched. These helpers touch every DAO up front so ``create_all`` sees the
complete metadata.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    for _, provider in domain.providers.items():
        if provider.conn_info["provider"] in _SQL_PROVIDERS:
            yield provider


def _register_tables(domain: Domain, provider) -> None:
    records = list(domain.registry.aggregates.values()) + list(domain.registry.entities.values())
    for record in records:
        if record.cls.meta_.provider == provider.name:
            domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain) -> None:
    """Create tables for every aggregate and entity on SQL providers."""
    with domain.domain_context():
        for provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])
            _register_tables(domain, provider)
            provider._metadata.create_all(engine)
            logger.info("Database schema created", provider=provider.name)


def drop_db(domain: Domain) -> None:
    """Drop every table known to the SQL providers."""
    with domain.domain_context():
        for provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])
            _register_tables(domain, provider)
            provider._metadata.drop_all(engine)
            logger.info("Database schema dropped", provider=provider.name)
