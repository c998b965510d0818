"""Session tokens handed back by registration, login and password changes."""

from identity.user.user import User
from shared.tokens import issue_token


def session_for(user: User) -> dict:
    return {
        "user_id": str(user.id),
        "token": issue_token(user.id, user.name, user.role),
    }
