"""User accounts: self-service profile, Admin listing, deletion, ban and unban."""

import logging
from datetime import UTC, datetime
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user, require_roles
from app.api.v1.lookups import (
    commit_or_422,
    forbidden,
    get_user_or_404,
    unprocessable,
    validate_body,
)
from app.core.database import get_db
from app.core.policy import can_access_user
from app.core.security import as_utc
from app.models import User, UserRole
from app.schemas.auth import CurrentUser
from app.schemas.user import AdminUserRead, UserRead, UserUpdate

logger = logging.getLogger(__name__)
router = APIRouter()

AdminUser = Annotated[CurrentUser, Depends(require_roles(UserRole.ADMIN))]


def _view_for(current_user: CurrentUser, user: User) -> UserRead:
    """Admins get the account-state view; everyone else the plain profile."""
    if current_user.role is UserRole.ADMIN:
        return AdminUserRead.model_validate(user)
    return UserRead.model_validate(user)


def _set_banned(admin: CurrentUser, user: User, banned: bool, db: Session) -> AdminUserRead:
    action = "ban" if banned else "unban"
    if user.id == admin.id:
        raise unprocessable(f"Cannot {action} the currently authenticated user.")
    user.is_banned = banned
    if banned:
        # Revoke outstanding tokens immediately, same mechanism as logout.
        now = datetime.now(UTC)
        if user.token_validity_threshold is None or as_utc(user.token_validity_threshold) < now:
            user.token_validity_threshold = now
    db.commit()
    db.refresh(user)
    logger.warning("Admin user_id=%s did %s on user_id=%s", admin.id, action, user.id)
    return AdminUserRead.model_validate(user)


@router.get("", response_model=list[AdminUserRead])
def list_users(
    _admin: AdminUser,
    db: Annotated[Session, Depends(get_db)],
) -> list[User]:
    """List all users (admin only)."""
    return db.query(User).order_by(User.username).all()


@router.get("/{user_id}", response_model=AdminUserRead | UserRead)
def get_user(
    user_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserRead:
    """Read a profile: your own, or anyone's as an Admin."""
    user = get_user_or_404(db, user_id)
    if not can_access_user(current_user, user.id):
        raise forbidden()
    return _view_for(current_user, user)


@router.put("/{user_id}", response_model=AdminUserRead | UserRead)
def update_user(
    user_id: str,
    body: Annotated[dict[str, Any], Body()],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserRead:
    """Update username, email and names. Role, password and ban state are not editable here."""
    user = get_user_or_404(db, user_id)
    if not can_access_user(current_user, user.id):
        raise forbidden()
    data = validate_body(UserUpdate, body)
    taken_message = f"Username '{data.username}' is already taken."
    clash = (
        db.query(User)
        .filter(User.username_is(data.username), User.id != user.id)
        .first()
    )
    if clash is not None:
        raise unprocessable(taken_message, field="username")
    user.username = data.username
    user.email = data.email
    user.first_name = data.first_name
    user.last_name = data.last_name
    commit_or_422(db, taken_message)
    db.refresh(user)
    return _view_for(current_user, user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    admin: AdminUser,
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Delete an account with its restaurants and reservations."""
    user = get_user_or_404(db, user_id)
    db.delete(user)
    db.commit()
    logger.warning("Admin user_id=%s deleted user_id=%s", admin.id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{user_id}/ban", response_model=AdminUserRead)
def ban_user(
    user_id: str,
    admin: AdminUser,
    db: Annotated[Session, Depends(get_db)],
) -> AdminUserRead:
    user = get_user_or_404(db, user_id)
    return _set_banned(admin, user, True, db)


@router.put("/{user_id}/unban", response_model=AdminUserRead)
def unban_user(
    user_id: str,
    admin: AdminUser,
    db: Annotated[Session, Depends(get_db)],
) -> AdminUserRead:
    user = get_user_or_404(db, user_id)
    return _set_banned(admin, user, False, db)
