"""Payment gateway port (abstract interface).

The storefront talks to its payment processor only through this contract,
so the Stripe adapter and the in-memory fake are interchangeable in every
command handler and route.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum


class IntentStatus(Enum):
    """Processor states collapsed to the three the storefront acts on."""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class PaymentIntent:
    """A charge attempt as the processor reports it."""

    intent_id: str
    client_secret: str
    amount_cents: int
    currency: str
    status: IntentStatus
    failure_reason: str | None = None
    metadata: dict = field(default_factory=dict)


@dataclass(frozen=True)
class WebhookNotice:
    """A verified processor callback about one payment intent."""

    intent_id: str
    status: IntentStatus
    failure_reason: str | None = None


class PaymentGatewayError(Exception):
    """The processor could not be reached or refused the request."""


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_payment_intent(
        self,
        amount_cents: int,
        currency: str,
        metadata: dict,
        idempotency_key: str,
    ) -> PaymentIntent:
        """Open a charge attempt the browser can confirm with the client secret."""
        ...

    @abstractmethod
    def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent:
        """Fetch the processor's current view of an intent."""
        ...

    @abstractmethod
    def parse_webhook(self, payload: bytes, signature: str) -> WebhookNotice | None:
        """Verify a callback's signature and decode it.

        Returns ``None`` when the signature does not check out, or when the
        callback is about something other than a payment intent outcome.
        Implementations must not raise on bad signatures.
        """
        ...
