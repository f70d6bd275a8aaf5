"""Application settings read from the ``[custom]`` table of ``domain.toml``.

Secrets never live in ``domain.toml``; they come from the environment.
"""

import os
from decimal import Decimal

from protean.utils.globals import current_domain

_DEFAULTS = {
    "currency": "usd",
    "tax_rate": "0.08",
    "shipping_cost": "0.00",
    "session_cookie_name": "storefront_session",
    "session_cookie_secure": False,
    "session_ttl_hours": 24,
    "low_stock_threshold": 10,
    "recent_activity_limit": 5,
}


def setting(name: str):
    """Look up a custom setting, falling back to the packaged default."""
    custom = current_domain.config.get("custom") or {}
    return custom.get(name, _DEFAULTS[name])


def currency() -> str:
    return str(setting("currency")).lower()


def tax_rate() -> Decimal:
    return Decimal(str(setting("tax_rate")))


def shipping_cost() -> Decimal:
    return Decimal(str(setting("shipping_cost")))


def session_cookie_name() -> str:
    return setting("session_cookie_name")


def session_cookie_secure() -> bool:
    return bool(setting("session_cookie_secure"))


def session_ttl_hours() -> int:
    return int(setting("session_ttl_hours"))


def low_stock_threshold() -> int:
    return int(setting("low_stock_threshold"))


def recent_activity_limit() -> int:
    return int(setting("recent_activity_limit"))


def is_production() -> bool:
    return os.environ.get("PROTEAN_ENV") == "production"


def stripe_secret_key() -> str | None:
    return os.environ.get("STRIPE_SECRET_KEY")


def stripe_webhook_secret() -> str | None:
    return os.environ.get("STRIPE_WEBHOOK_SECRET")
