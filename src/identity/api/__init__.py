"""Identity domain API package."""

from identity.api.routes import admin_user_router, auth_router, me_router, vendor_router

__all__ = ["auth_router", "me_router", "admin_user_router", "vendor_router"]
