"""Ordering bounded context: shopping carts, orders and delivery booking.

Carts and orders are plain CQRS aggregates. Store settings drive the
delivery slots offered at checkout.
"""

from protean.domain import Domain

from shared.logging import configure_logging

configure_logging()

ordering = Domain(name="ordering")
