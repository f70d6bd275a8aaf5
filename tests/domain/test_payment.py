"""Domain tests for the Payment aggregate."""

import pytest
from protean.exceptions import ValidationError
from storefront.payments.events import PaymentFailed, PaymentInitiated, PaymentLinkedToOrder, PaymentSucceeded
from storefront.payments.payment import Payment, PaymentStatus


def _payment():
    return Payment.initiate(
        intent_id="pi_test_001",
        user_id="user-001",
        amount="21.60",
        amount_cents=2160,
        currency="usd",
    )


class TestPaymentLifecycle:
    def test_initiated_payment_is_pending(self):
        payment = _payment()
        assert payment.id == "pi_test_001"
        assert payment.status == PaymentStatus.PENDING.value
        assert isinstance(payment._events[0], PaymentInitiated)

    def test_success(self):
        payment = _payment()
        payment.record_success()
        assert payment.succeeded
        assert any(isinstance(e, PaymentSucceeded) for e in payment._events)

    def test_repeated_success_is_ignored(self):
        payment = _payment()
        payment.record_success()
        payment.record_success()
        assert len([e for e in payment._events if isinstance(e, PaymentSucceeded)]) == 1

    def test_failure_keeps_reason(self):
        payment = _payment()
        payment.record_failure("Card declined")
        assert payment.status == "failed"
        assert payment.failure_reason == "Card declined"
        assert any(isinstance(e, PaymentFailed) for e in payment._events)

    def test_failed_payment_can_still_succeed(self):
        payment = _payment()
        payment.record_failure("Card declined")
        payment.record_success()
        assert payment.succeeded
        assert payment.failure_reason is None

    def test_late_failure_does_not_undo_success(self):
        payment = _payment()
        payment.record_success()
        payment.record_failure("Card declined")
        assert payment.succeeded


class TestOrderLink:
    def test_link_requires_success(self):
        payment = _payment()
        with pytest.raises(ValidationError):
            payment.link_order("order-001")

    def test_link(self):
        payment = _payment()
        payment.record_success()
        payment.link_order("order-001")
        assert payment.order_id == "order-001"
        assert any(isinstance(e, PaymentLinkedToOrder) for e in payment._events)

    def test_cannot_pay_for_two_orders(self):
        payment = _payment()
        payment.record_success()
        payment.link_order("order-001")
        with pytest.raises(ValidationError):
            payment.link_order("order-002")
