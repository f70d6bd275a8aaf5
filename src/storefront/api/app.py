"""FastAPI application factory.

Every request runs inside the storefront's Protean domain context, so route
handlers and the commands they dispatch can use ``current_domain``.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.domain import storefront
from storefront.payments.gateway import PaymentGatewayError
from storefront.utils.logging import bind_request_context, clear_request_context, get_logger

logger = get_logger(__name__)


async def _payment_gateway_error(request: Request, exc: PaymentGatewayError) -> JSONResponse:
    logger.error("Payment processor error", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content={"error": {"payment": [str(exc) or "Payment processor error"]}})


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are client errors: 400 with messages keyed by field."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.setdefault(".".join(location) or "body", []).append(error.get("msg", "Invalid value"))
    return JSONResponse(status_code=400, content={"error": errors})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Storefront API",
        description="Catalogue, cart, checkout, orders and product requests",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context and per-request log context."""
        clear_request_context()
        bind_request_context(method=request.method, path=request.url.path)
        try:
            with storefront.domain_context():
                return await call_next(request)
        finally:
            clear_request_context()

    register_exception_handlers(app)
    app.add_exception_handler(PaymentGatewayError, _payment_gateway_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)

    from storefront.api import admin, auth, cart, catalogue, checkout, orders, payments, sourcing

    for module in (auth, catalogue, cart, checkout, orders, sourcing, payments, admin):
        app.include_router(module.router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": storefront.name})

    return app
