"""User registration: command and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String, Text
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.shared.email import EmailAddress
from identity.user.credentials import hash_password
from identity.user.directory import find_user_by_email
from identity.user.session import session_for
from identity.user.user import User
from shared.media import upload_image

logger = structlog.get_logger(__name__)


@identity.command(part_of="User")
class RegisterUser:
    name: String(required=True, min_length=4, max_length=30)
    email: String(required=True, max_length=254)
    password: String(required=True, min_length=8, max_length=128)
    avatar: Text()  # image source: URL or data URI


def ensure_email_available(email: str, user_id=None) -> str:
    """Validate `email` and make sure no other account uses it."""
    normalised = EmailAddress.normalise(email)
    existing = find_user_by_email(normalised)
    if existing is not None and str(existing.id) != str(user_id):
        raise ValidationError({"email": ["Email is already registered"]})
    return normalised


@identity.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        email = ensure_email_available(command.email)
        avatar = upload_image(command.avatar, "avatars") if command.avatar else None

        user = User.register(
            name=command.name,
            email=email,
            password_hash=hash_password(command.password),
            avatar=avatar,
        )
        current_domain.repository_for(User).add(user)

        logger.info("User registered", user_id=str(user.id))
        return session_for(user)
