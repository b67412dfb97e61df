"""Login, token refresh, logout and registration, plus the auth dependencies
(get_current_user, require_roles) every other router builds on."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Annotated, Any

import jwt
from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.api.v1.lookups import commit_or_422, unprocessable, validate_body
from app.core.database import get_db
from app.core.security import (
    as_utc,
    create_access_token,
    create_refresh_token,
    decode_access_token,
    hash_password,
    is_token_revoked,
    issued_at,
    validate_refresh_token,
    verify_password,
)
from app.models import User, UserRole
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RefreshAccessTokenRequest,
    RegisterRequest,
    TokenPairResponse,
)
from app.schemas.user import UserRead

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)

INVALID_CREDENTIALS = "Invalid username or password."
INVALID_REFRESH_TOKEN = "Invalid refresh token."


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _issue_token_pair(user: User) -> TokenPairResponse:
    return TokenPairResponse(
        access_token=create_access_token(user.id, user.username, user.role.value),
        refresh_token=create_refresh_token(user.id),
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer access token and return the caller.
    Raises 401 if the token is missing, invalid, expired, revoked by the user's
    validity threshold, or belongs to a banned or deleted account.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    user = db.query(User).filter(User.id == payload["sub"]).first()
    if user is None:
        raise _unauthorized("User not found")
    if user.is_banned or is_token_revoked(user.token_validity_threshold, issued_at(payload)):
        raise _unauthorized("Token has been revoked")
    return CurrentUser(id=user.id, username=user.username, role=user.role)


def require_roles(*roles: UserRole) -> Callable[..., CurrentUser]:
    """Dependency factory: authenticated caller whose role is one of `roles`, else 403."""
    allowed = frozenset(roles)

    def dependency(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if current_user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Your role does not permit this action.",
            )
        return current_user

    return dependency


@router.post("/login", response_model=TokenPairResponse)
def login(
    body: Annotated[dict[str, Any], Body()],
    db: Annotated[Session, Depends(get_db)],
) -> TokenPairResponse:
    """
    Authenticate with username and password; returns an access and a refresh token.
    Include the access token in the Authorization header as: Bearer <accessToken>
    """
    credentials = validate_body(LoginRequest, body)
    user = db.query(User).filter(User.username_is(credentials.username)).first()
    if user is None or not verify_password(credentials.password, user.password_hash):
        logger.info("Failed login for username=%s", credentials.username)
        raise unprocessable(INVALID_CREDENTIALS)
    now = datetime.now(UTC)
    threshold = user.token_validity_threshold
    if user.is_banned or (threshold is not None and as_utc(threshold) >= now):
        logger.warning("Login refused for banned or locked account user_id=%s", user.id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="This account is not allowed to sign in.",
        )
    return _issue_token_pair(user)


@router.post("/accessToken", response_model=TokenPairResponse)
def refresh_access_token(
    body: Annotated[dict[str, Any], Body()],
    db: Annotated[Session, Depends(get_db)],
) -> TokenPairResponse:
    """Exchange a refresh token for a new access/refresh pair."""
    request = validate_body(RefreshAccessTokenRequest, body)
    claims = validate_refresh_token(request.refresh_token)
    if claims is None:
        raise unprocessable(INVALID_REFRESH_TOKEN, field="refreshToken")
    user = db.query(User).filter(User.id == claims["sub"]).first()
    if (
        user is None
        or user.is_banned
        or is_token_revoked(user.token_validity_threshold, issued_at(claims))
    ):
        logger.info("Refresh rejected for sub=%s", claims["sub"])
        raise unprocessable(INVALID_REFRESH_TOKEN, field="refreshToken")
    return _issue_token_pair(user)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Revoke every token issued to the caller so far by advancing their validity threshold."""
    user = db.query(User).filter(User.id == current_user.id).first()
    if user is not None:
        now = datetime.now(UTC)
        threshold = user.token_validity_threshold
        if threshold is None or as_utc(threshold) < now:
            user.token_validity_threshold = now
            db.commit()
            logger.info("User logged out user_id=%s", user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(
    body: Annotated[dict[str, Any], Body()],
    request: Request,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Create a RegisteredUser or RestaurantManager account. Admins are created via the CLI."""
    data = validate_body(RegisterRequest, body)
    taken_message = f"Username '{data.username}' is already taken."
    if db.query(User).filter(User.username_is(data.username)).first() is not None:
        raise unprocessable(taken_message, field="username")
    user = User(
        username=data.username,
        email=data.email,
        password_hash=hash_password(data.password),
        first_name=data.first_name,
        last_name=data.last_name,
        role=data.role,
    )
    db.add(user)
    commit_or_422(db, taken_message)
    db.refresh(user)
    logger.info("Registered user_id=%s role=%s", user.id, user.role.value)
    response.headers["Location"] = str(request.url_for("get_user", user_id=user.id))
    return user
