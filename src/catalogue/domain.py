"""Catalogue bounded context: the drinks menu and the items each user may order."""

from protean.domain import Domain

from shared.logging import configure_logging

configure_logging()

catalogue = Domain(name="catalogue")
