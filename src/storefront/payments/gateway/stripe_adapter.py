"""Stripe payment gateway adapter, built on the stripe-python SDK."""

import stripe

from storefront.payments.gateway.port import (
    IntentStatus,
    PaymentGateway,
    PaymentGatewayError,
    PaymentIntent,
    WebhookNotice,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_OUTCOME_EVENTS = {
    "payment_intent.succeeded": IntentStatus.SUCCEEDED,
    "payment_intent.payment_failed": IntentStatus.FAILED,
    "payment_intent.canceled": IntentStatus.FAILED,
}


def _failure_message(intent) -> str | None:
    error = intent.get("last_payment_error")
    if not error:
        return None
    return error.get("message") or error.get("code")


def _status_of(intent) -> IntentStatus:
    status = intent.get("status")
    if status == "succeeded":
        return IntentStatus.SUCCEEDED
    if status == "canceled":
        return IntentStatus.FAILED
    if status == "requires_payment_method" and intent.get("last_payment_error"):
        return IntentStatus.FAILED
    return IntentStatus.PENDING


def _to_intent(intent) -> PaymentIntent:
    return PaymentIntent(
        intent_id=intent["id"],
        client_secret=intent.get("client_secret") or "",
        amount_cents=int(intent["amount"]),
        currency=intent["currency"],
        status=_status_of(intent),
        failure_reason=_failure_message(intent),
        metadata=dict(intent.get("metadata") or {}),
    )


class StripeGateway(PaymentGateway):
    """Production gateway. Card details never reach the storefront; the browser
    confirms the intent with Stripe.js using the client secret."""

    def __init__(self, api_key: str, webhook_secret: str | None) -> None:
        self.api_key = api_key
        self.webhook_secret = webhook_secret

    def create_payment_intent(
        self,
        amount_cents: int,
        currency: str,
        metadata: dict,
        idempotency_key: str,
    ) -> PaymentIntent:
        try:
            intent = stripe.PaymentIntent.create(
                api_key=self.api_key,
                idempotency_key=idempotency_key,
                amount=amount_cents,
                currency=currency,
                metadata=metadata,
                automatic_payment_methods={"enabled": True},
            )
        except stripe.StripeError as exc:
            logger.error("Stripe refused payment intent", error=str(exc))
            raise PaymentGatewayError(exc.user_message or str(exc)) from exc
        return _to_intent(intent)

    def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent:
        try:
            intent = stripe.PaymentIntent.retrieve(intent_id, api_key=self.api_key)
        except stripe.StripeError as exc:
            logger.error("Stripe intent lookup failed", intent_id=intent_id, error=str(exc))
            raise PaymentGatewayError(exc.user_message or str(exc)) from exc
        return _to_intent(intent)

    def parse_webhook(self, payload: bytes, signature: str) -> WebhookNotice | None:
        if not self.webhook_secret:
            logger.warning("Stripe webhook received but STRIPE_WEBHOOK_SECRET is not set")
            return None

        try:
            event = stripe.Webhook.construct_event(payload, signature, self.webhook_secret)
        except (ValueError, stripe.SignatureVerificationError):
            return None

        status = _OUTCOME_EVENTS.get(event["type"])
        if status is None:
            return None

        intent = event["data"]["object"]
        return WebhookNotice(
            intent_id=intent["id"],
            status=status,
            failure_reason=_failure_message(intent),
        )
