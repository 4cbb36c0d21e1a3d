"""Card processor access for checkout.

The active adapter is chosen by ``PAYMENT_GATEWAY`` the first time it is
needed; tests install their own with set_gateway().
"""

from payments.gateway.fake_adapter import FakeGateway
from payments.gateway.port import PaymentGateway
from shared.config import PAYMENT_GATEWAY

ADAPTERS: dict[str, type[PaymentGateway]] = {
    "fake": FakeGateway,
}

_active: PaymentGateway | None = None


def build_gateway(name: str = PAYMENT_GATEWAY) -> PaymentGateway:
    try:
        adapter = ADAPTERS[name]
    except KeyError:
        raise ValueError(f"Unknown payment gateway: {name}") from None
    return adapter()


def get_gateway() -> PaymentGateway:
    global _active
    if _active is None:
        _active = build_gateway()
    return _active


def set_gateway(gateway: PaymentGateway) -> None:
    global _active
    _active = gateway


def reset_gateway() -> None:
    global _active
    _active = None
