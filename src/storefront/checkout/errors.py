"""Checkout failures that surface to the customer as 400 responses."""

from protean.exceptions import ValidationError


class EmptyCartError(ValidationError):
    def __init__(self):
        super().__init__({"cart": ["Cart is empty"]})


class PaymentNotConfirmedError(ValidationError):
    """The processor has not reported the payment as succeeded."""

    def __init__(self, reason: str | None = None):
        message = "Payment has not succeeded"
        if reason:
            message = f"{message}: {reason}"
        super().__init__({"payment": [message]})


class CartChangedError(ValidationError):
    """The cart total no longer matches what the customer paid."""

    def __init__(self):
        super().__init__({"cart": ["Cart changed after payment was started; please check out again"]})


class UnavailableProductError(ValidationError):
    def __init__(self, product_name: str):
        super().__init__({"cart": [f"{product_name} is no longer available"]})
