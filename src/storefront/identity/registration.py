"""User registration and sign-in: password accounts and external identities."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.passwords import MIN_PASSWORD_LENGTH, hash_password, verify_password
from storefront.identity.user import User
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class InvalidCredentialsError(Exception):
    """Email/password pair did not match an account."""


@storefront.command(part_of="User")
class RegisterUser:
    """Create a password-backed account."""

    email: String(required=True, max_length=254)
    password: String(required=True, max_length=255)
    first_name: String(max_length=100)
    last_name: String(max_length=100)


@storefront.command(part_of="User")
class UpsertExternalUser:
    """Create or refresh the account behind a verified external identity."""

    external_id: String(required=True, max_length=255)
    email: String(required=True, max_length=254)
    first_name: String(max_length=100)
    last_name: String(max_length=100)
    profile_image_url: String(max_length=1000)


@storefront.command_handler(part_of=User)
class RegistrationHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        if len(command.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError({"password": [f"Password must be at least {MIN_PASSWORD_LENGTH} characters"]})

        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise ValidationError({"email": ["An account with this email already exists"]})

        user = User.register(
            email=command.email,
            password_hash=hash_password(command.password),
            first_name=command.first_name,
            last_name=command.last_name,
        )
        repo.add(user)
        logger.info("User registered", user_id=str(user.id))
        return str(user.id)

    @handle(UpsertExternalUser)
    def upsert_external_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.find_by_external_id(command.external_id)

        if user is None:
            existing = repo.find_by_email(command.email)
            if existing is not None and existing.external_id not in (None, command.external_id):
                raise ValidationError({"email": ["Email is linked to a different identity"]})
            if existing is not None:
                # Password account signing in through the provider for the first time
                user = existing
                user.external_id = command.external_id
            else:
                user = User.from_external_profile(
                    external_id=command.external_id,
                    email=command.email,
                    first_name=command.first_name,
                    last_name=command.last_name,
                    profile_image_url=command.profile_image_url,
                )
                repo.add(user)
                logger.info("User created from external identity", user_id=str(user.id))
                return str(user.id)

        user.update_profile(
            email=command.email,
            first_name=command.first_name,
            last_name=command.last_name,
            profile_image_url=command.profile_image_url,
        )
        repo.add(user)
        return str(user.id)


def authenticate(email: str, password: str) -> User:
    """Check an email/password pair; raises ``InvalidCredentialsError`` on mismatch."""
    user = current_domain.repository_for(User).find_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Failed login attempt")
        raise InvalidCredentialsError()
    return user
