"""Domain events for the User and Session aggregates."""

from protean.fields import Boolean, DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A user account was created, by password sign-up or first external login."""

    __version__ = 1

    user_id = Identifier(required=True)
    email = String(required=True, max_length=254)
    via_external_provider = Boolean(default=False)
    registered_at = DateTime(required=True)


@storefront.event(part_of="User")
class UserProfileUpdated:
    __version__ = 1

    user_id = Identifier(required=True)
    email = String(required=True, max_length=254)
    updated_at = DateTime(required=True)


@storefront.event(part_of="User")
class AdminGranted:
    """The user may now call admin endpoints."""

    __version__ = 1

    user_id = Identifier(required=True)
    granted_at = DateTime(required=True)


@storefront.event(part_of="Session")
class SessionStarted:
    __version__ = 1

    session_id = Identifier(required=True)
    user_id = Identifier(required=True)
    expires_at = DateTime(required=True)


@storefront.event(part_of="Session")
class SessionEnded:
    __version__ = 1

    session_id = Identifier(required=True)
    user_id = Identifier(required=True)
    ended_at = DateTime(required=True)
