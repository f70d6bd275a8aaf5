"""Payment processor callbacks and fake-gateway controls."""

from fastapi import APIRouter, Header, HTTPException, Request
from protean.utils.globals import current_domain

from storefront import config
from storefront.api.schemas import ConfigureGatewayRequest, GatewayConfigResponse, StatusResponse
from storefront.payments.gateway import FakeGateway, IntentStatus, get_gateway
from storefront.payments.outcome import RecordPaymentOutcome
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.post("/webhook", response_model=StatusResponse)
async def process_webhook(
    request: Request,
    x_gateway_signature: str = Header(default=""),
    stripe_signature: str = Header(default=""),
) -> StatusResponse:
    """Record a payment outcome reported by the processor.

    The raw body is verified against the signature header before anything is
    decoded; unsigned or mis-signed callbacks are rejected with 401.
    """
    payload = await request.body()
    notice = get_gateway().parse_webhook(payload, x_gateway_signature or stripe_signature)
    if notice is None:
        logger.warning("Rejected payment webhook")
        raise HTTPException(status_code=401, detail="Invalid webhook signature")

    if notice.status is IntentStatus.PENDING:
        return StatusResponse(status="ignored")

    current_domain.process(
        RecordPaymentOutcome(
            payment_id=notice.intent_id,
            status=notice.status.value,
            failure_reason=notice.failure_reason,
        ),
        asynchronous=False,
    )
    return StatusResponse(status="processed")


@router.post("/gateway/configure", response_model=GatewayConfigResponse)
async def configure_gateway(body: ConfigureGatewayRequest) -> GatewayConfigResponse:
    """Configure the FakeGateway behavior (non-production only)."""
    if config.is_production():
        raise HTTPException(status_code=403, detail="Gateway configuration not available in production")

    gateway = get_gateway()
    if not isinstance(gateway, FakeGateway):
        raise HTTPException(status_code=400, detail="Gateway configuration only available for FakeGateway")

    gateway.configure(
        should_succeed=body.should_succeed,
        failure_reason=body.failure_reason,
        unavailable=body.unavailable,
    )
    return GatewayConfigResponse(
        gateway=type(gateway).__name__,
        should_succeed=gateway.should_succeed,
        failure_reason=gateway.failure_reason,
        unavailable=gateway.unavailable,
    )
