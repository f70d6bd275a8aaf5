"""Storefront FastAPI application.

The domain is initialized at module level so uvicorn workers share it.
PROTEAN_ENV selects the config overlay from storefront/domain.toml
(in-memory adapters by default, PostgreSQL under "production").

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from storefront.api import create_app
from storefront.domain import storefront

storefront.init()

app = create_app()
