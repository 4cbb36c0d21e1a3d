"""Support bounded context: tickets raised by users and answered by admins."""

from protean.domain import Domain

from shared.logging import configure_logging

configure_logging()

support = Domain(name="support")
