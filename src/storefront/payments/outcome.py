"""Recording what the processor says happened to a payment intent.

Two sources feed this command: signed webhooks, and the lookup the checkout
performs before committing an order. Both are server-to-processor facts;
nothing the browser reports is trusted here.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.payments.payment import Payment, PaymentStatus
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Payment")
class RecordPaymentOutcome:
    payment_id = String(required=True, max_length=255)
    status = String(required=True, choices=PaymentStatus, max_length=20)
    failure_reason = String(max_length=500)


@storefront.command_handler(part_of=Payment)
class PaymentOutcomeHandler:
    @handle(RecordPaymentOutcome)
    def record_outcome(self, command):
        repo = current_domain.repository_for(Payment)
        try:
            payment = repo.get(command.payment_id)
        except ObjectNotFoundError:
            # Intents opened outside this storefront (dashboard, other apps)
            logger.warning("Outcome for unknown payment intent ignored", payment_id=command.payment_id)
            return None

        status = PaymentStatus(command.status)
        if status == PaymentStatus.SUCCEEDED:
            payment.record_success()
        elif status == PaymentStatus.FAILED:
            payment.record_failure(reason=command.failure_reason or "Payment failed")
        else:
            return payment.status

        repo.add(payment)
        logger.info("Payment outcome recorded", payment_id=str(payment.id), status=payment.status)
        return payment.status
