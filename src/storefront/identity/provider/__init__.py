"""Identity provider factory.

get_identity_provider() / set_identity_provider() swap implementations;
FakeIdentityProvider is the default until a real adapter is installed.
"""

from storefront.identity.provider.fake_adapter import FakeIdentityProvider
from storefront.identity.provider.port import ExternalProfile, IdentityProvider

__all__ = [
    "ExternalProfile",
    "FakeIdentityProvider",
    "IdentityProvider",
    "get_identity_provider",
    "reset_identity_provider",
    "set_identity_provider",
]

_current_provider: IdentityProvider | None = None


def get_identity_provider() -> IdentityProvider:
    global _current_provider
    if _current_provider is None:
        _current_provider = FakeIdentityProvider()
    return _current_provider


def set_identity_provider(provider: IdentityProvider) -> None:
    global _current_provider
    _current_provider = provider


def reset_identity_provider() -> None:
    global _current_provider
    _current_provider = None
