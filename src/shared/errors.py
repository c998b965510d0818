"""HTTP error responses shared by every router.

Protean's own handlers are registered first; the handlers below then pin the
status codes the storefront API promises for its error kinds.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from identity.user.errors import AuthenticationFailed, PasswordRecoveryFailed
from shared.media import ImageUploadFailed

logger = structlog.get_logger(__name__)


def _error(status_code: int, messages) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": messages})


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return _error(400, exc.messages)

    @app.exception_handler(ObjectNotFoundError)
    async def not_found_handler(request: Request, exc: ObjectNotFoundError):
        return _error(404, exc.messages)

    @app.exception_handler(AuthenticationFailed)
    async def authentication_failed_handler(request: Request, exc: AuthenticationFailed):
        return _error(401, exc.messages)

    @app.exception_handler(PasswordRecoveryFailed)
    async def password_recovery_failed_handler(request: Request, exc: PasswordRecoveryFailed):
        return _error(500, exc.messages)

    @app.exception_handler(ImageUploadFailed)
    async def image_upload_failed_handler(request: Request, exc: ImageUploadFailed):
        logger.error("Image upload failed", path=request.url.path, error=str(exc))
        return _error(502, {"image": [str(exc)]})
