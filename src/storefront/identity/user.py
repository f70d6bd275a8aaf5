"""User aggregate: the account behind a session, with the admin flag."""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String

from storefront.domain import storefront
from storefront.identity.events import AdminGranted, UserProfileUpdated, UserRegistered
from storefront.shared.email import is_valid_email, normalize_email


@storefront.aggregate
class User:
    """A storefront account.

    Accounts are created by password registration or on first sign-in through
    the external identity provider (``external_id`` holds the provider's subject).
    ``is_admin`` gates every ``/api/admin`` endpoint. Users are never deleted.
    """

    email: String(required=True, max_length=254)
    first_name: String(max_length=100)
    last_name: String(max_length=100)
    profile_image_url: String(max_length=1000)
    password_hash: String(max_length=255)
    external_id: String(max_length=255)
    is_admin: Boolean(default=False)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        if not is_valid_email(self.email):
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})

    @classmethod
    def register(cls, email, password_hash=None, first_name=None, last_name=None):
        now = datetime.now(UTC)
        user = cls(
            email=normalize_email(email),
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            is_admin=False,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                email=user.email,
                via_external_provider=False,
                registered_at=now,
            )
        )
        return user

    @classmethod
    def from_external_profile(cls, external_id, email, first_name=None, last_name=None, profile_image_url=None):
        now = datetime.now(UTC)
        user = cls(
            email=normalize_email(email),
            external_id=external_id,
            first_name=first_name,
            last_name=last_name,
            profile_image_url=profile_image_url,
            is_admin=False,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                email=user.email,
                via_external_provider=True,
                registered_at=now,
            )
        )
        return user

    @property
    def display_name(self) -> str:
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) or self.email

    def update_profile(self, email=None, first_name=None, last_name=None, profile_image_url=None):
        """Refresh profile fields; ``None`` leaves a field untouched."""
        if email is not None:
            self.email = normalize_email(email)
        if first_name is not None:
            self.first_name = first_name
        if last_name is not None:
            self.last_name = last_name
        if profile_image_url is not None:
            self.profile_image_url = profile_image_url

        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(UserProfileUpdated(user_id=str(self.id), email=self.email, updated_at=now))

    def grant_admin(self):
        if self.is_admin:
            return
        now = datetime.now(UTC)
        self.is_admin = True
        self.updated_at = now
        self.raise_(AdminGranted(user_id=str(self.id), granted_at=now))


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        return self._dao.query.filter(email=normalize_email(email)).all().first

    def find_by_external_id(self, external_id: str) -> User | None:
        return self._dao.query.filter(external_id=external_id).all().first
