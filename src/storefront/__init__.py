"""Storefront: catalogue, cart, checkout, orders and product requests."""
