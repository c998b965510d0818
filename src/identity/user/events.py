"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from identity.domain import identity


@identity.event(part_of="User")
class UserRegistered:
    """A new account was created."""

    __version__ = 1

    user_id: Identifier(required=True)
    name: String(required=True)
    email: String(required=True)
    role: String(required=True)
    registered_at: DateTime(required=True)


@identity.event(part_of="User")
class UserLoggedIn:
    __version__ = 1

    user_id: Identifier(required=True)
    logged_in_at: DateTime(required=True)


@identity.event(part_of="User")
class PasswordResetRequested:
    """A reset token was issued and is waiting to be used."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    expires_at: DateTime(required=True)


@identity.event(part_of="User")
class PasswordChanged:
    __version__ = 1

    user_id: Identifier(required=True)
    changed_at: DateTime(required=True)


@identity.event(part_of="User")
class UserProfileUpdated:
    __version__ = 1

    user_id: Identifier(required=True)
    name: String(required=True)
    email: String(required=True)


@identity.event(part_of="User")
class UserRoleChanged:
    """An administrator moved the user to a different role."""

    __version__ = 1

    user_id: Identifier(required=True)
    previous_role: String(required=True)
    new_role: String(required=True)
