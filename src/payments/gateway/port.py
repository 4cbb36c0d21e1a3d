"""Payment gateway port (abstract interface).

Defines the contract that checkout relies on. The storefront only ever talks
to a simulated gateway, but keeping the port lets a hosted provider's SDK
slot in without touching the ordering domain.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class PaymentCustomer:
    """Customer details sent along with a charge."""

    first_name: str
    last_name: str
    email: str
    phone: str | None = None


@dataclass(frozen=True)
class ChargeResult:
    """Result of a payment charge attempt."""

    success: bool
    status: str
    message: str
    payment_id: str | None = None
    transaction_id: str | None = None
    receipt_number: str | None = None
    error_code: str | None = None


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_charge(
        self,
        amount_cents: int,
        currency: str,
        order_number: str,
        customer: PaymentCustomer,
        card_token: str | None,
    ) -> ChargeResult:
        """Charge the customer's card for ``amount_cents``."""
        ...

    @abstractmethod
    def validate_card_token(self, card_token: str) -> bool:
        """Return True when the tokenized card can be charged."""
        ...
