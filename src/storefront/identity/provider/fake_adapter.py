"""In-memory identity provider for development and tests.

Tokens are issued explicitly with ``issue_token`` and verify until revoked.
"""

from uuid import uuid4

from storefront.identity.provider.port import ExternalProfile, IdentityProvider


class FakeIdentityProvider(IdentityProvider):
    def __init__(self) -> None:
        self._tokens: dict[str, ExternalProfile] = {}

    def issue_token(self, profile: ExternalProfile) -> str:
        token = f"fake_idp_{uuid4().hex}"
        self._tokens[token] = profile
        return token

    def revoke_token(self, token: str) -> None:
        self._tokens.pop(token, None)

    def verify_token(self, token: str) -> ExternalProfile | None:
        return self._tokens.get(token)
