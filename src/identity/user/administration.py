"""Administrative account changes: commands and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.user.directory import get_user
from identity.user.registration import ensure_email_available
from identity.user.user import User, UserRole
from shared.media import destroy_image

logger = structlog.get_logger(__name__)


@identity.command(part_of="User")
class AdminUpdateUser:
    user_id: Identifier(required=True)
    name: String(min_length=4, max_length=30)
    email: String(max_length=254)
    role: String(choices=UserRole)


@identity.command(part_of="User")
class DeleteUser:
    user_id: Identifier(required=True)


@identity.command_handler(part_of=User)
class UserAdministrationHandler:
    @handle(AdminUpdateUser)
    def update_user(self, command):
        user = get_user(command.user_id)
        email = ensure_email_available(command.email, user_id=user.id) if command.email else None

        user.admin_update(name=command.name, email=email, role=command.role)
        current_domain.repository_for(User).add(user)

        logger.info("User updated by administrator", user_id=str(user.id), role=user.role)
        return str(user.id)

    @handle(DeleteUser)
    def delete_user(self, command):
        user = get_user(command.user_id)

        if user.avatar is not None:
            destroy_image(user.avatar.public_id)

        current_domain.repository_for(User)._dao.delete(user)
        logger.info("User deleted", user_id=str(command.user_id))
