"""Password recovery and password changes: commands and handlers.

A forgotten-password request stores the SHA-256 hash of a random token and
mails the raw token inside a reset link. The link is valid for
``RESET_TOKEN_TTL_MINUTES``. If the mail cannot be sent, the token is
cleared and nothing is saved.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.mail import get_mailer
from identity.user.credentials import hash_password, hash_reset_token, new_reset_token, verify_password
from identity.user.directory import find_user_by_email, find_user_by_reset_token, get_user
from identity.user.errors import PasswordRecoveryFailed
from identity.user.session import session_for
from identity.user.user import User
from shared import config

logger = structlog.get_logger(__name__)


@identity.command(part_of="User")
class ForgotPassword:
    email: String(required=True, max_length=254)
    reset_url_base: String(required=True, max_length=500)


@identity.command(part_of="User")
class ResetPassword:
    token: String(required=True, max_length=128)
    password: String(required=True, min_length=8, max_length=128)
    confirm_password: String(required=True, max_length=128)


@identity.command(part_of="User")
class UpdatePassword:
    user_id: Identifier(required=True)
    old_password: String(required=True, max_length=128)
    new_password: String(required=True, min_length=8, max_length=128)
    confirm_password: String(required=True, max_length=128)


def _reset_message(reset_url: str) -> str:
    return (
        f"Your password reset token is:\n\n{reset_url}\n\n"
        "If you have not requested this email then, please ignore it."
    )


def _require_match(password, confirm_password):
    if password != confirm_password:
        raise ValidationError({"confirm_password": ["Passwords do not match"]})


@identity.command_handler(part_of=User)
class PasswordHandler:
    @handle(ForgotPassword)
    def forgot_password(self, command):
        repo = current_domain.repository_for(User)
        user = find_user_by_email(command.email)
        if user is None:
            raise ObjectNotFoundError({"email": ["User not found"]})

        token, token_hash = new_reset_token()
        user.issue_password_reset(token_hash, config.RESET_TOKEN_TTL_MINUTES)

        reset_url = f"{command.reset_url_base.rstrip('/')}/{token}"
        result = get_mailer().send(
            to=user.email,
            subject="Storefront Password Recovery",
            body=_reset_message(reset_url),
        )

        if result.get("status") != "sent":
            user.clear_password_reset()
            logger.error("Password reset email failed", user_id=str(user.id), error=result.get("error"))
            raise PasswordRecoveryFailed({"email": [result.get("error") or "Password reset email could not be sent"]})

        repo.add(user)
        logger.info("Password reset email sent", user_id=str(user.id))
        return f"Email sent to {user.email} successfully"

    @handle(ResetPassword)
    def reset_password(self, command):
        token_hash = hash_reset_token(command.token)
        user = find_user_by_reset_token(token_hash)
        if user is None or not user.reset_is_valid(token_hash):
            raise ValidationError({"token": ["Reset Password Token is invalid or has been expired"]})

        _require_match(command.password, command.confirm_password)

        user.change_password(hash_password(command.password))
        current_domain.repository_for(User).add(user)

        logger.info("Password reset completed", user_id=str(user.id))
        return session_for(user)

    @handle(UpdatePassword)
    def update_password(self, command):
        user = get_user(command.user_id)
        if not verify_password(command.old_password, user.password_hash):
            raise ValidationError({"old_password": ["Old password is incorrect"]})

        _require_match(command.new_password, command.confirm_password)

        user.change_password(hash_password(command.new_password))
        current_domain.repository_for(User).add(user)

        logger.info("Password updated", user_id=str(user.id))
        return session_for(user)
