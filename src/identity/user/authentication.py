"""Login: command and handler."""

import structlog
from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.user.credentials import verify_password
from identity.user.directory import find_user_by_email
from identity.user.errors import AuthenticationFailed
from identity.user.session import session_for
from identity.user.user import User

logger = structlog.get_logger(__name__)


@identity.command(part_of="User")
class LoginUser:
    email: String(required=True, max_length=254)
    password: String(required=True, max_length=128)


@identity.command_handler(part_of=User)
class LoginUserHandler:
    @handle(LoginUser)
    def login(self, command):
        user = find_user_by_email(command.email)
        if user is None or not verify_password(command.password, user.password_hash):
            logger.warning("Login rejected", email=command.email)
            raise AuthenticationFailed()

        user.record_login()
        current_domain.repository_for(User).add(user)

        logger.info("User logged in", user_id=str(user.id))
        return session_for(user)
