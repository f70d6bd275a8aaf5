"""Server-side confirmation that a payment really succeeded.

The browser saying "payment done" is not evidence. Before an order is
committed, the payment record must already be ``succeeded`` (a signed
webhook got there first) or the processor must say so when asked directly.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.checkout.errors import PaymentNotConfirmedError
from storefront.payments.gateway import IntentStatus, get_gateway
from storefront.payments.outcome import RecordPaymentOutcome
from storefront.payments.payment import Payment, PaymentStatus
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_RECORDED_STATUS = {
    IntentStatus.SUCCEEDED: PaymentStatus.SUCCEEDED,
    IntentStatus.FAILED: PaymentStatus.FAILED,
}


def load_owned_payment(payment_intent_id: str, user_id) -> Payment:
    """The caller's payment; someone else's intent is reported as missing."""
    payment = current_domain.repository_for(Payment).get(payment_intent_id)
    if str(payment.user_id) != str(user_id):
        raise ObjectNotFoundError(f"Payment {payment_intent_id} does not exist")
    return payment


def confirm_payment(payment_intent_id: str, user_id) -> Payment:
    """Ensure the payment succeeded, asking the processor if we have not heard yet."""
    payment = load_owned_payment(payment_intent_id, user_id)
    if payment.succeeded:
        return payment

    intent = get_gateway().retrieve_payment_intent(payment_intent_id)
    recorded = _RECORDED_STATUS.get(intent.status)
    if recorded is not None:
        current_domain.process(
            RecordPaymentOutcome(
                payment_id=payment_intent_id,
                status=recorded.value,
                failure_reason=intent.failure_reason,
            ),
            asynchronous=False,
        )

    if intent.status is not IntentStatus.SUCCEEDED:
        logger.info("Order attempted before payment succeeded", payment_id=payment_intent_id)
        raise PaymentNotConfirmedError(intent.failure_reason)

    return current_domain.repository_for(Payment).get(payment_intent_id)
