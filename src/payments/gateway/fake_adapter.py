"""Configurable fake payment gateway.

Simulates the hosted card processor without any external calls. It succeeds
by default and can be told at runtime to decline with one of the processor's
canned reasons, which keeps checkout tests deterministic.
"""

from uuid import uuid4

from payments.gateway.port import ChargeResult, PaymentCustomer, PaymentGateway

DECLINE_REASONS = {
    "INSUFFICIENT_FUNDS": "Insufficient funds on card",
    "CARD_DECLINED": "Card declined by issuer",
    "INVALID_CARD": "Invalid card number or details",
    "EXPIRED_CARD": "Card has expired",
    "PROCESSING_ERROR": "Unable to process payment at this time",
}

CARD_TOKEN_PREFIX = "sq0"


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_code: str = "CARD_DECLINED"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_code: str = "CARD_DECLINED") -> None:
        """Configure gateway behavior at runtime."""
        if failure_code not in DECLINE_REASONS:
            raise ValueError(f"Unknown decline code: {failure_code}")
        self.should_succeed = should_succeed
        self.failure_code = failure_code

    def create_charge(
        self,
        amount_cents: int,
        currency: str,
        order_number: str,
        customer: PaymentCustomer,
        card_token: str | None,
    ) -> ChargeResult:
        self.calls.append(
            {
                "method": "create_charge",
                "amount_cents": amount_cents,
                "currency": currency,
                "order_number": order_number,
                "customer_email": customer.email,
            }
        )

        if self.should_succeed:
            payment_id = f"fake_pay_{uuid4().hex[:12]}"
            return ChargeResult(
                success=True,
                status="completed",
                message="Payment processed successfully",
                payment_id=payment_id,
                transaction_id=f"fake_txn_{uuid4().hex[:12]}",
                receipt_number=payment_id[-6:].upper(),
            )

        return ChargeResult(
            success=False,
            status="failed",
            message=DECLINE_REASONS[self.failure_code],
            error_code=self.failure_code,
        )

    def validate_card_token(self, card_token: str) -> bool:
        return bool(card_token) and card_token.startswith(CARD_TOKEN_PREFIX)
