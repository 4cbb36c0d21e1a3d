"""Pourhouse database management CLI.

Provides commands to create and drop database schemas for all domains, and
to seed a fresh installation with the default accounts and store settings.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Default users + store settings
"""

import argparse

DOMAIN_NAMES = ["identity", "catalogue", "ordering", "support"]


def _domains():
    from catalogue.domain import catalogue
    from identity.domain import identity
    from ordering.domain import ordering
    from support.domain import support

    return {"identity": identity, "catalogue": catalogue, "ordering": ordering, "support": support}


def _selected(names=None) -> dict:
    domains = _domains()
    return {name: domains[name] for name in names} if names else domains


def setup_databases(names=None):
    """Create tables for the named domains (all of them by default)."""
    from shared.db import setup_db

    for name, domain in _selected(names).items():
        domain.init()
        setup_db(domain)
        print(f"{name}: schema created")


def drop_databases(names=None):
    from shared.db import drop_db

    for name, domain in _selected(names).items():
        domain.init()
        drop_db(domain)
        print(f"{name}: schema dropped")


def seed():
    """Create the default user/admin accounts and the store settings record."""
    from identity.user.seeding import SeedUsers
    from ordering.delivery.settings import InitializeStoreSettings

    domains = _domains()

    identity = domains["identity"]
    identity.init()
    with identity.domain_context():
        created = identity.process(SeedUsers(), asynchronous=False)
    print(f"Seeded {len(created)} user(s).")

    ordering = domains["ordering"]
    ordering.init()
    with ordering.domain_context():
        settings_id = ordering.process(InitializeStoreSettings(), asynchronous=False)
    print(f"Store settings ready ({settings_id}).")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Pourhouse database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command, help_text in (("setup-db", "Create database tables"), ("drop-db", "Drop database tables")):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument("--domain", choices=DOMAIN_NAMES, nargs="*", help="Limit to these domains (default: all)")
    subparsers.add_parser("seed", help="Create default accounts and store settings")

    args = parser.parse_args(argv)
    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    else:
        seed()


if __name__ == "__main__":
    main()
