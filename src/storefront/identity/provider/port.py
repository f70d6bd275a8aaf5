"""External identity provider port.

The storefront does not run an OpenID Connect flow itself. Whatever sits in
front of it (a hosted login page, an auth proxy) hands the client a token;
adapters behind this port turn that token into a verified profile.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ExternalProfile:
    """Claims the provider vouches for."""

    subject: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None


class IdentityProvider(ABC):
    @abstractmethod
    def verify_token(self, token: str) -> ExternalProfile | None:
        """Return the profile behind ``token``, or ``None`` if it is not valid."""
        ...
