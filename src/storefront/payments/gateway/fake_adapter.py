"""Configurable fake payment gateway for development and testing.

No external calls are made. Intents live in memory; whether a created
intent ends up ``succeeded`` or ``failed`` when the processor is asked
about it follows the runtime configuration, which mimics a customer
confirming with a good or a declined card. ``unavailable`` makes every
call raise, for exercising outage handling.

Webhooks are JSON documents ``{"paymentIntentId", "status",
"failureReason"}`` signed with the literal ``test-signature``.
"""

import json
from uuid import uuid4

from storefront.payments.gateway.port import (
    IntentStatus,
    PaymentGateway,
    PaymentGatewayError,
    PaymentIntent,
    WebhookNotice,
)

VALID_SIGNATURE = "test-signature"


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.unavailable: bool = False
        self.calls: list[dict] = []
        self._intents: dict[str, PaymentIntent] = {}
        self._by_idempotency_key: dict[str, str] = {}

    def configure(self, should_succeed: bool, failure_reason: str = "Card declined", unavailable: bool = False) -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.unavailable = unavailable

    def _check_available(self) -> None:
        if self.unavailable:
            raise PaymentGatewayError("Payment service unavailable")

    def create_payment_intent(
        self,
        amount_cents: int,
        currency: str,
        metadata: dict,
        idempotency_key: str,
    ) -> PaymentIntent:
        self.calls.append(
            {
                "method": "create_payment_intent",
                "amount_cents": amount_cents,
                "currency": currency,
                "metadata": dict(metadata),
                "idempotency_key": idempotency_key,
            }
        )
        self._check_available()

        if idempotency_key in self._by_idempotency_key:
            return self._intents[self._by_idempotency_key[idempotency_key]]

        intent_id = f"pi_fake_{uuid4().hex[:16]}"
        intent = PaymentIntent(
            intent_id=intent_id,
            client_secret=f"{intent_id}_secret_{uuid4().hex[:8]}",
            amount_cents=amount_cents,
            currency=currency,
            status=IntentStatus.PENDING,
            metadata=dict(metadata),
        )
        self._intents[intent_id] = intent
        self._by_idempotency_key[idempotency_key] = intent_id
        return intent

    def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent:
        self.calls.append({"method": "retrieve_payment_intent", "intent_id": intent_id})
        self._check_available()

        intent = self._intents.get(intent_id)
        if intent is None:
            raise PaymentGatewayError(f"No such payment intent: {intent_id}")

        # The customer "confirms" the first time the storefront asks
        if intent.status is IntentStatus.PENDING:
            intent = self.settle(
                intent_id,
                IntentStatus.SUCCEEDED if self.should_succeed else IntentStatus.FAILED,
            )
        return intent

    def settle(self, intent_id: str, status: IntentStatus) -> PaymentIntent:
        """Force an intent into ``status``, as a test or a manual confirmation would."""
        intent = self._intents[intent_id]
        settled = PaymentIntent(
            intent_id=intent.intent_id,
            client_secret=intent.client_secret,
            amount_cents=intent.amount_cents,
            currency=intent.currency,
            status=status,
            failure_reason=self.failure_reason if status is IntentStatus.FAILED else None,
            metadata=intent.metadata,
        )
        self._intents[intent_id] = settled
        return settled

    def parse_webhook(self, payload: bytes, signature: str) -> WebhookNotice | None:
        self.calls.append({"method": "parse_webhook", "signature": signature})
        if signature != VALID_SIGNATURE:
            return None

        try:
            body = json.loads(payload)
            status = IntentStatus(body["status"])
            intent_id = body["paymentIntentId"]
        except (ValueError, KeyError, TypeError):
            return None

        if intent_id in self._intents and status is not IntentStatus.PENDING:
            self.settle(intent_id, status)
        return WebhookNotice(
            intent_id=intent_id,
            status=status,
            failure_reason=body.get("failureReason"),
        )
