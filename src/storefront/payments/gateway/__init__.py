"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- StripeGateway when STRIPE_SECRET_KEY is set
- FakeGateway otherwise (development and tests)
"""

from storefront import config
from storefront.payments.gateway.fake_adapter import FakeGateway
from storefront.payments.gateway.port import (
    IntentStatus,
    PaymentGateway,
    PaymentGatewayError,
    PaymentIntent,
    WebhookNotice,
)

__all__ = [
    "FakeGateway",
    "IntentStatus",
    "PaymentGateway",
    "PaymentGatewayError",
    "PaymentIntent",
    "WebhookNotice",
    "get_gateway",
    "reset_gateway",
    "set_gateway",
]

_current_gateway: PaymentGateway | None = None


def _default_gateway() -> PaymentGateway:
    secret_key = config.stripe_secret_key()
    if secret_key:
        from storefront.payments.gateway.stripe_adapter import StripeGateway

        return StripeGateway(api_key=secret_key, webhook_secret=config.stripe_webhook_secret())
    return FakeGateway()


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway, building the default on first use."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = _default_gateway()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None
