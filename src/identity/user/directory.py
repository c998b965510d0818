"""Read-side lookups over user accounts."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from identity.user.user import User, UserRole

# Upper bound for unpaged administrative listings
_LISTING_LIMIT = 1000


def get_user(user_id) -> User:
    try:
        return current_domain.repository_for(User).get(user_id)
    except ObjectNotFoundError:
        raise ObjectNotFoundError({"user": [f"User does not exist with id: {user_id}"]}) from None


def find_user_by_email(email: str) -> User | None:
    results = current_domain.repository_for(User)._dao.query.filter(email=(email or "").strip().lower()).all()
    return results.items[0] if results.items else None


def find_user_by_reset_token(token_hash: str) -> User | None:
    results = current_domain.repository_for(User)._dao.query.filter(reset_password_token=token_hash).all()
    return results.items[0] if results.items else None


def list_users() -> list[User]:
    return current_domain.repository_for(User)._dao.query.order_by("created_at").limit(_LISTING_LIMIT).all().items


def list_vendors() -> list[User]:
    return (
        current_domain.repository_for(User)
        ._dao.query.filter(role=UserRole.VENDOR.value)
        .order_by("created_at")
        .limit(_LISTING_LIMIT)
        .all()
        .items
    )
