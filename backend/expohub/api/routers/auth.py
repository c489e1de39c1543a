# expohub/api/routers/auth.py
import logging

from fastapi import APIRouter, Depends, status
from tortoise.exceptions import IntegrityError

from expohub.api.deps import get_current_user
from expohub.core.errors import ApiError
from expohub.core.pubsub import channel
from expohub.core.security import create_access_token, hash_password, verify_password
from expohub.models.user import User
from expohub.schemas.auth import LoginIn, RecoverPasswordIn, RegisterIn, TokenOut
from expohub.schemas.user import user_event, user_to_dict
from expohub.services.mailer import send_password_recovery_email

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/auth", tags=["auth"])

RECOVERY_MESSAGE = "Password recovery email sent"

def _user_exists_error() -> ApiError:
    return ApiError(status.HTTP_400_BAD_REQUEST, "User with this email already exists", "USER_ALREADY_EXISTS")

def _invalid_credentials() -> ApiError:
    # Same code and message for unknown email and wrong password
    return ApiError(status.HTTP_401_UNAUTHORIZED, "Invalid email or password", "INVALID_CREDENTIALS")

@router.post("/register", response_model=TokenOut, status_code=status.HTTP_201_CREATED)
async def register(body: RegisterIn):
    """
    Register a new user account.

    Creates the account with a hashed password, issues an access token and
    broadcasts `user/registered`. Emails are unique case-insensitively.

    Returns:
        dict: {"auth_token": str}

    Error codes:
        - VALIDATION_ERROR (400): malformed email, empty name, short password
        - USER_ALREADY_EXISTS (400): email already registered
    """
    if await User.filter(email=body.email).exists():
        raise _user_exists_error()
    try:
        u = await User.create(
            email=body.email,
            name=body.name,
            password_hash=hash_password(body.password),
            role="user",
        )
    except IntegrityError:
        # Lost a race against a concurrent registration of the same email
        raise _user_exists_error()

    token = create_access_token(str(u.id), u.email)
    logger.info("[auth] registered user_id=%s", u.id)
    await channel.broadcast("user/registered", user_event(u))
    return {"auth_token": token}

@router.post("/login", response_model=TokenOut)
async def login(body: LoginIn):
    """
    Authenticate with email + password and issue an access token.

    Returns:
        dict: {"auth_token": str}

    Error codes:
        - MISSING_REQUIRED_FIELDS (400): email or password absent
        - INVALID_CREDENTIALS (401): unknown email or wrong password
    """
    if not body.email or not body.password:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Email and password are required", "MISSING_REQUIRED_FIELDS")

    user = await User.get_or_none(email=User.normalize_email(body.email))
    if not user or not verify_password(body.password, user.password_hash):
        raise _invalid_credentials()

    return {"auth_token": create_access_token(str(user.id), user.email)}

@router.post("/recover-password")
async def recover_password(body: RecoverPasswordIn):
    """
    Start password recovery.
    Answers the same way whether or not the email is registered.
    """
    if not body.email:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Email is required", "MISSING_REQUIRED_FIELDS")

    email = User.normalize_email(body.email)
    if await User.filter(email=email).exists():
        await send_password_recovery_email(email)
    return {"message": RECOVERY_MESSAGE}

@router.get("/verify")
async def verify(user: User = Depends(get_current_user)):
    """Return the profile behind the presented token (used to restore a session)."""
    return user_to_dict(user)
