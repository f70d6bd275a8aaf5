"""HTTP API for the storefront."""

from storefront.api.app import create_app

__all__ = ["create_app"]
