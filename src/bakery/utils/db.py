from protean.domain import Domain
from sqlalchemy import create_engine

_RELATIONAL_PROVIDERS = ("sqlite", "postgresql")


def setup_db(domain: Domain):
    """Create relational tables for every aggregate and entity of the domain.

    Memory providers need no schema and are skipped.
    """
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] not in _RELATIONAL_PROVIDERS:
                continue

            engine = create_engine(provider.conn_info["database_uri"])

            # Accessing _dao forces each model to register with SQLAlchemy's metadata
            for _, record in domain.registry.aggregates.items():
                if record.cls.meta_.provider == provider.name:
                    domain.repository_for(record.cls)._dao  # noqa: B018

            for _, record in domain.registry.entities.items():
                if record.cls.meta_.provider == provider.name:
                    domain.repository_for(record.cls)._dao  # noqa: B018

            provider._metadata.create_all(engine)


def drop_db(domain: Domain):
    """Drop relational tables created by setup_db."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in _RELATIONAL_PROVIDERS:
                engine = create_engine(provider.conn_info["database_uri"])
                provider._metadata.drop_all(engine)
