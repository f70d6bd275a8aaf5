"""Payment aggregate: the storefront's record of one payment intent.

The aggregate identity is the processor's payment-intent id. The record is
written when the intent is opened, moves to ``succeeded`` or ``failed`` from
a verified webhook or a direct lookup at the processor, and is linked to
exactly one order once the order commits.

State Machine:
    PENDING → SUCCEEDED
    PENDING → FAILED → SUCCEEDED (customer retried with another card)
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront
from storefront.payments.events import (
    PaymentFailed,
    PaymentInitiated,
    PaymentLinkedToOrder,
    PaymentSucceeded,
)


class PaymentStatus(Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


_VALID_TRANSITIONS = {
    PaymentStatus.PENDING: {PaymentStatus.SUCCEEDED, PaymentStatus.FAILED},
    PaymentStatus.FAILED: {PaymentStatus.SUCCEEDED},
    PaymentStatus.SUCCEEDED: set(),  # Terminal
}


@storefront.aggregate
class Payment:
    user_id = Identifier(required=True)
    amount = String(required=True, max_length=20)
    amount_cents = Integer(required=True, min_value=0)
    currency = String(required=True, max_length=3)
    status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    failure_reason = String(max_length=500)
    order_id = Identifier()
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def initiate(cls, intent_id, user_id, amount, amount_cents, currency):
        now = datetime.now(UTC)
        payment = cls(
            id=intent_id,
            user_id=user_id,
            amount=amount,
            amount_cents=amount_cents,
            currency=currency,
            status=PaymentStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        payment.raise_(
            PaymentInitiated(
                payment_id=intent_id,
                user_id=str(user_id),
                amount=amount,
                amount_cents=amount_cents,
                currency=currency,
                initiated_at=now,
            )
        )
        return payment

    @property
    def succeeded(self) -> bool:
        return self.status == PaymentStatus.SUCCEEDED.value

    def _assert_can_transition(self, target_status: PaymentStatus) -> None:
        current = PaymentStatus(self.status)
        if target_status not in _VALID_TRANSITIONS[current]:
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def record_success(self):
        """Mark the payment captured. Repeated notices are ignored."""
        if self.succeeded:
            return
        self._assert_can_transition(PaymentStatus.SUCCEEDED)
        now = datetime.now(UTC)
        self.status = PaymentStatus.SUCCEEDED.value
        self.failure_reason = None
        self.updated_at = now
        self.raise_(
            PaymentSucceeded(
                payment_id=str(self.id),
                user_id=str(self.user_id),
                amount=self.amount,
                succeeded_at=now,
            )
        )

    def record_failure(self, reason):
        """Mark the attempt declined. A late failure notice never undoes a success."""
        if self.succeeded or self.status == PaymentStatus.FAILED.value:
            return
        self._assert_can_transition(PaymentStatus.FAILED)
        now = datetime.now(UTC)
        self.status = PaymentStatus.FAILED.value
        self.failure_reason = reason
        self.updated_at = now
        self.raise_(
            PaymentFailed(
                payment_id=str(self.id),
                user_id=str(self.user_id),
                reason=reason,
                failed_at=now,
            )
        )

    def link_order(self, order_id):
        if not self.succeeded:
            raise ValidationError({"payment": ["Payment has not succeeded"]})
        if self.order_id is not None and str(self.order_id) != str(order_id):
            raise ValidationError({"payment": ["Payment already used for another order"]})
        self.order_id = order_id
        self.updated_at = datetime.now(UTC)
        self.raise_(PaymentLinkedToOrder(payment_id=str(self.id), order_id=str(order_id)))
