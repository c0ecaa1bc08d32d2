"""
Authentication router.
Handles owner registration and login.
"""

from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.orm import Session
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from shared.infrastructure.db import get_db
from rest_api.models import User
from shared.security.auth import sign_access_token, current_user_context
from shared.config.logging import auth_logger as logger, mask_email
from shared.utils.schemas import LoginRequest, LoginResponse, RegisterRequest, UserInfo
from shared.utils.exceptions import DuplicateEntityError, NotFoundError
from shared.config.settings import settings
from shared.security.rate_limit import limiter, LOGIN_RATE_LIMIT
from shared.security.password import verify_password, hash_password
from rest_api.routers._common import get_user_id

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _token_response(user: User) -> LoginResponse:
    return LoginResponse(
        access_token=sign_access_token(user.id, user.email),
        token_type="Bearer",
        expires_in=settings.jwt_access_token_expire_minutes * 60,
        user=UserInfo.model_validate(user),
    )


@router.post("/register", response_model=LoginResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(LOGIN_RATE_LIMIT)
def register(request: Request, body: RegisterRequest, db: Session = Depends(get_db)) -> LoginResponse:
    """
    Create an owner account and sign it in.

    Emails are stored lowercased so login is case-insensitive.
    """
    email = body.email.lower()
    if db.scalar(select(User.id).where(User.email == email)) is not None:
        raise DuplicateEntityError("User", mask_email(email))

    user = User(email=email, password=hash_password(body.password), full_name=body.full_name)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateEntityError("User", mask_email(email))
    db.refresh(user)

    logger.info("REGISTER_SUCCESS", email=mask_email(email), user_id=user.id)
    return _token_response(user)


@router.post("/login", response_model=LoginResponse)
@limiter.limit(LOGIN_RATE_LIMIT)
def login(request: Request, body: LoginRequest, db: Session = Depends(get_db)) -> LoginResponse:
    """
    Authenticate an owner and return an access token.

    The token carries sub (user id) and email; every dashboard route
    scopes its queries by sub.
    """
    user = db.scalar(select(User).where(User.email == body.email.lower()))

    if not user:
        logger.warning("LOGIN_FAILED: User not found", email=mask_email(body.email))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    if not verify_password(body.password, user.password):
        logger.warning("LOGIN_FAILED: Invalid password", email=mask_email(body.email), user_id=user.id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    logger.info("LOGIN_SUCCESS", email=mask_email(user.email), user_id=user.id)
    return _token_response(user)


@router.get("/me", response_model=UserInfo)
def get_current_user(
    db: Session = Depends(get_db),
    ctx: dict = Depends(current_user_context),
) -> UserInfo:
    """Get current authenticated owner info."""
    user = db.get(User, get_user_id(ctx))
    if user is None:
        raise NotFoundError("User", ctx.get("sub"))
    return UserInfo.model_validate(user)
