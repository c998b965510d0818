"""FastAPI endpoints for the Identity domain."""

from datetime import timedelta

from fastapi import APIRouter, Depends, Request, Response
from protean.utils.globals import current_domain

from identity.api.schemas import (
    AdminUpdateUserRequest,
    AvatarResponse,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    RegisterUserRequest,
    ResetPasswordRequest,
    SessionResponse,
    StatusResponse,
    UpdatePasswordRequest,
    UpdateProfileRequest,
    UserResponse,
)
from identity.user.administration import AdminUpdateUser, DeleteUser
from identity.user.authentication import LoginUser
from identity.user.directory import get_user, list_users, list_vendors
from identity.user.password import ForgotPassword, ResetPassword, UpdatePassword
from identity.user.profile import UpdateProfile
from identity.user.registration import RegisterUser
from shared import config
from shared.auth import AuthenticatedUser, current_user, require_roles

auth_router = APIRouter(prefix="/auth", tags=["auth"])
me_router = APIRouter(prefix="/me", tags=["account"])
admin_user_router = APIRouter(prefix="/admin/users", tags=["users"])
vendor_router = APIRouter(prefix="/vendors", tags=["users"])

_admin_only = [Depends(require_roles("admin"))]


def _user_response(user) -> UserResponse:
    avatar = None
    if user.avatar is not None:
        avatar = AvatarResponse(public_id=user.avatar.public_id, url=user.avatar.url)
    return UserResponse(
        id=str(user.id),
        name=user.name,
        email=user.email,
        role=user.role,
        avatar=avatar,
        created_at=user.created_at,
        last_login_at=user.last_login_at,
    )


def _start_session(response: Response, session: dict) -> SessionResponse:
    """Set the session cookie and build the response body."""
    response.set_cookie(
        key="token",
        value=session["token"],
        max_age=int(timedelta(days=config.COOKIE_EXPIRE_DAYS).total_seconds()),
        httponly=True,
    )
    return SessionResponse(token=session["token"], user=_user_response(get_user(session["user_id"])))


# --- Authentication ---


@auth_router.post("/register", status_code=201, response_model=SessionResponse)
async def register(body: RegisterUserRequest, response: Response) -> SessionResponse:
    command = RegisterUser(name=body.name, email=body.email, password=body.password, avatar=body.avatar)
    session = current_domain.process(command, asynchronous=False)
    return _start_session(response, session)


@auth_router.post("/login", response_model=SessionResponse)
async def login(body: LoginRequest, response: Response) -> SessionResponse:
    session = current_domain.process(LoginUser(email=body.email, password=body.password), asynchronous=False)
    return _start_session(response, session)


@auth_router.post("/logout", response_model=MessageResponse)
async def logout(response: Response) -> MessageResponse:
    response.delete_cookie(key="token", httponly=True)
    return MessageResponse(message="Logged Out")


@auth_router.post("/password/forgot", response_model=MessageResponse)
async def forgot_password(body: ForgotPasswordRequest, request: Request) -> MessageResponse:
    reset_url_base = f"{str(request.base_url).rstrip('/')}/auth/password/reset"
    message = current_domain.process(
        ForgotPassword(email=body.email, reset_url_base=reset_url_base),
        asynchronous=False,
    )
    return MessageResponse(message=message)


@auth_router.put("/password/reset/{token}", response_model=SessionResponse)
async def reset_password(token: str, body: ResetPasswordRequest, response: Response) -> SessionResponse:
    command = ResetPassword(token=token, password=body.password, confirm_password=body.confirm_password)
    session = current_domain.process(command, asynchronous=False)
    return _start_session(response, session)


# --- Current user ---


@me_router.get("", response_model=UserResponse)
async def my_profile(user: AuthenticatedUser = Depends(current_user)) -> UserResponse:
    return _user_response(get_user(user.id))


@me_router.put("", response_model=UserResponse)
async def update_my_profile(
    body: UpdateProfileRequest, user: AuthenticatedUser = Depends(current_user)
) -> UserResponse:
    command = UpdateProfile(user_id=user.id, name=body.name, email=body.email, avatar=body.avatar)
    current_domain.process(command, asynchronous=False)
    return _user_response(get_user(user.id))


@me_router.put("/password", response_model=SessionResponse)
async def update_my_password(
    body: UpdatePasswordRequest, response: Response, user: AuthenticatedUser = Depends(current_user)
) -> SessionResponse:
    command = UpdatePassword(
        user_id=user.id,
        old_password=body.old_password,
        new_password=body.new_password,
        confirm_password=body.confirm_password,
    )
    session = current_domain.process(command, asynchronous=False)
    return _start_session(response, session)


# --- Administration ---


@admin_user_router.get("", response_model=list[UserResponse], dependencies=_admin_only)
async def all_users() -> list[UserResponse]:
    return [_user_response(u) for u in list_users()]


@admin_user_router.get("/{user_id}", response_model=UserResponse, dependencies=_admin_only)
async def user_detail(user_id: str) -> UserResponse:
    return _user_response(get_user(user_id))


@admin_user_router.put("/{user_id}", response_model=UserResponse, dependencies=_admin_only)
async def update_user(user_id: str, body: AdminUpdateUserRequest) -> UserResponse:
    command = AdminUpdateUser(user_id=user_id, name=body.name, email=body.email, role=body.role)
    current_domain.process(command, asynchronous=False)
    return _user_response(get_user(user_id))


@admin_user_router.delete("/{user_id}", response_model=StatusResponse, dependencies=_admin_only)
async def delete_user(user_id: str) -> StatusResponse:
    current_domain.process(DeleteUser(user_id=user_id), asynchronous=False)
    return StatusResponse()


@vendor_router.get("", response_model=list[UserResponse])
async def vendors() -> list[UserResponse]:
    return [_user_response(u) for u in list_vendors()]
