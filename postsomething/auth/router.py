"""Authentication API endpoints.

Provides routes for:
- User registration and email confirmation
- Login
- Profile of the current user
"""

from fastapi import APIRouter, HTTPException, Request, status

from postsomething.auth.dependencies import (
    AuthServiceDep,
    CurrentIdentity,
    EmailSenderDep,
)
from postsomething.auth.models import User
from postsomething.auth.schemas import (
    LoginRequest,
    MessageResponse,
    RegisteredUserResponse,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from postsomething.auth.security import create_access_token
from postsomething.auth.service import (
    IdentityOperationError,
    InvalidConfirmationTokenError,
    InvalidCredentialsError,
    PasswordsMismatchError,
    UserNotFoundError,
)
from postsomething.config.settings import get_settings
from postsomething.core.exceptions import to_http_exception
from postsomething.core.logging import get_logger
from postsomething.email.templates import render_account_confirmation


logger = get_logger(__name__)

router = APIRouter(tags=["auth"])


# ==============================================================================
# Public Endpoints (No Auth Required)
# ==============================================================================


@router.post(
    "/register",
    response_model=RegisteredUserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    responses={
        400: {"description": "Passwords do not match"},
        422: {"description": "User could not be created"},
    },
)
async def register(
    data: RegisterRequest,
    request: Request,
    auth_service: AuthServiceDep,
    email_sender: EmailSenderDep,
) -> RegisteredUserResponse:
    """Register a new user account.

    The account stays unconfirmed until the emailed confirmation link
    is followed; login is refused until then.
    """
    if data.password != data.confirmation_password:
        raise to_http_exception(PasswordsMismatchError())

    user = User(username=data.username, email=data.email, address=data.address)
    try:
        user = await auth_service.create_user(user, data.password)
    except IdentityOperationError as e:
        raise to_http_exception(e) from e

    settings = get_settings()
    token = await auth_service.generate_email_confirmation_token(user)
    path = request.app.url_path_for("confirm_account", user_id=user.id, token=token)
    link = f"{settings.public_base_url.rstrip('/')}{path}"

    html, text = render_account_confirmation(
        user.username, link, settings.auth_email_token_expire_hours
    )
    result = await email_sender.send_simple_email(
        to=user.email,
        subject="Confirm your account",
        body_html=html,
        body_text=text,
        to_name=user.username,
    )
    if not result.success:
        logger.warning(
            "confirmation_email_failed", user_id=user.id, error=result.error
        )

    logger.info("user_registered", user_id=user.id, email=user.email)
    return RegisteredUserResponse(email=user.email, username=user.username)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="User login",
    responses={401: {"description": "Wrong credentials"}},
)
async def login(
    data: LoginRequest,
    auth_service: AuthServiceDep,
) -> TokenResponse:
    """Authenticate user and return an access token.

    Unknown email, wrong password and unconfirmed account all produce the
    same 401 response.
    """
    user = await auth_service.get_user_by_email(data.email)
    if user is None:
        logger.info("login_failed", reason="unknown_email")
        raise to_http_exception(InvalidCredentialsError())

    if not await auth_service.check_password(user, data.password):
        logger.info("login_failed", reason="wrong_password", user_id=user.id)
        raise to_http_exception(InvalidCredentialsError())

    if not user.email_confirmed:
        logger.info("login_failed", reason="email_not_confirmed", user_id=user.id)
        raise to_http_exception(InvalidCredentialsError())

    settings = get_settings()
    access_token = create_access_token(user.id, user.email)
    logger.info("login_succeeded", user_id=user.id)

    return TokenResponse(
        access_token=access_token,
        expires_in=settings.auth_access_token_expire_minutes * 60,
    )


@router.get(
    "/confirm-account/{user_id}/{token}",
    name="confirm_account",
    response_model=MessageResponse,
    summary="Confirm account email",
    responses={
        400: {"description": "Invalid or expired token"},
        404: {"description": "User not found"},
        422: {"description": "Missing user id or token"},
    },
)
async def confirm_account(
    user_id: str,
    token: str,
    auth_service: AuthServiceDep,
) -> MessageResponse:
    """Confirm the email address of an account."""
    if not user_id.strip() or not token.strip():
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="User id and token are required",
        )

    user = await auth_service.get_user_by_id(user_id)
    if user is None:
        raise to_http_exception(UserNotFoundError())

    if not await auth_service.confirm_email(user, token):
        raise to_http_exception(InvalidConfirmationTokenError())

    return MessageResponse(message="Account confirmed")


# ==============================================================================
# Authenticated Endpoints
# ==============================================================================


@router.get(
    "/profile",
    response_model=UserResponse,
    summary="Get current user profile",
    responses={
        401: {"description": "Not authenticated"},
        404: {"description": "User not found"},
    },
)
async def get_profile(
    identity: CurrentIdentity,
    auth_service: AuthServiceDep,
) -> UserResponse:
    """Return the profile of the authenticated user."""
    user = await auth_service.get_user_by_email(identity.email)
    if user is None:
        raise to_http_exception(UserNotFoundError())

    return UserResponse.from_user(user)
