"""Granting the admin flag."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user import User
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="User")
class GrantAdmin:
    email: String(required=True, max_length=254)


@storefront.command_handler(part_of=User)
class GrantAdminHandler:
    @handle(GrantAdmin)
    def grant_admin(self, command):
        repo = current_domain.repository_for(User)
        user = repo.find_by_email(command.email)
        if user is None:
            raise ObjectNotFoundError(f"No user with email {command.email}")
        user.grant_admin()
        repo.add(user)
        logger.info("Admin granted", user_id=str(user.id))
        return str(user.id)
