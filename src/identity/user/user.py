"""User aggregate root with the Avatar value object."""

from datetime import datetime, timedelta
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String, ValueObject

from identity.domain import identity
from identity.shared.email import EmailAddress


class UserRole(Enum):
    USER = "user"
    VENDOR = "vendor"
    ADMIN = "admin"


@identity.value_object(part_of="User")
class Avatar:
    """Profile picture stored in the external image store."""

    public_id: String(required=True, max_length=255)
    url: String(required=True, max_length=500)


@identity.aggregate
class User:
    """A storefront account.

    Passwords are stored only as bcrypt hashes. A pending password reset is
    recorded as the SHA-256 hash of the emailed token plus its expiry; both
    are cleared together once the reset completes or the email fails.
    """

    name: String(required=True, min_length=4, max_length=30)
    email: String(required=True, max_length=254, unique=True)
    password_hash: String(required=True, max_length=255)
    avatar: ValueObject(Avatar)
    role: String(choices=UserRole, default=UserRole.USER.value)
    reset_password_token: String(max_length=64)
    reset_password_expire: DateTime()
    last_login_at: DateTime()
    created_at: DateTime(default=datetime.now)

    @invariant.post
    def reset_token_and_expiry_go_together(self):
        if bool(self.reset_password_token) != bool(self.reset_password_expire):
            raise ValidationError({"reset_password_token": ["Reset token and expiry must be set together"]})

    @classmethod
    def register(cls, name, email, password_hash, avatar=None, role=None):
        from identity.user.events import UserRegistered

        now = datetime.now()
        user = cls(
            name=name,
            email=EmailAddress.normalise(email),
            password_hash=password_hash,
            avatar=Avatar(**avatar) if avatar else None,
            role=role or UserRole.USER.value,
            created_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                name=user.name,
                email=user.email,
                role=user.role,
                registered_at=now,
            )
        )
        return user

    def record_login(self):
        from identity.user.events import UserLoggedIn

        self.last_login_at = datetime.now()
        self.raise_(UserLoggedIn(user_id=self.id, logged_in_at=self.last_login_at))

    def change_password(self, password_hash):
        from identity.user.events import PasswordChanged

        self.password_hash = password_hash
        self.clear_password_reset()
        self.raise_(PasswordChanged(user_id=self.id, changed_at=datetime.now()))

    def issue_password_reset(self, token_hash, ttl_minutes):
        from identity.user.events import PasswordResetRequested

        expires_at = datetime.now() + timedelta(minutes=ttl_minutes)
        with atomic_change(self):
            self.reset_password_expire = expires_at
            self.reset_password_token = token_hash
        self.raise_(PasswordResetRequested(user_id=self.id, email=self.email, expires_at=expires_at))

    def clear_password_reset(self):
        with atomic_change(self):
            self.reset_password_token = None
            self.reset_password_expire = None

    def reset_is_valid(self, token_hash, now=None) -> bool:
        if not self.reset_password_token or self.reset_password_token != token_hash:
            return False
        return self.reset_password_expire is not None and self.reset_password_expire > (now or datetime.now())

    def update_profile(self, name=None, email=None, avatar=None):
        from identity.user.events import UserProfileUpdated

        if name is not None:
            self.name = name
        if email is not None:
            self.email = EmailAddress.normalise(email)
        if avatar is not None:
            self.avatar = Avatar(**avatar)

        self.raise_(UserProfileUpdated(user_id=self.id, name=self.name, email=self.email))

    def admin_update(self, name=None, email=None, role=None):
        from identity.user.events import UserRoleChanged

        previous_role = self.role
        self.update_profile(name=name, email=email)
        if role is not None and role != previous_role:
            self.role = role
            self.raise_(UserRoleChanged(user_id=self.id, previous_role=previous_role, new_role=role))
