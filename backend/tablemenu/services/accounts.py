from __future__ import annotations

import logging
from uuid import UUID

import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from tablemenu.core.errors import (
    DuplicateEntry,
    Forbidden,
    InvalidReference,
    NotFound,
    Unauthorized,
    ValidationError,
    require_fields,
)
from tablemenu.core.security import hash_password, verify_password
from tablemenu.models import AdminMenuItem, Role, User
from tablemenu.schemas.admin_menu import AdminMenuItemOut
from tablemenu.schemas.users import UserCreateIn, UserUpdateIn
from tablemenu.services.audit import audit

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def authenticate(db: Session, username: str, password: str) -> User:
    require_fields("Username and password are required", username=username, password=password)
    user = db.execute(
        sa.select(User).options(selectinload(User.role)).where(User.username == username.strip())
    ).scalar_one_or_none()
    if user is None or not verify_password(password, user.password_hash):
        logger.info("login rejected username=%r", username)
        raise Unauthorized("Invalid username or password", code="INVALID_CREDENTIALS")
    if not user.is_active:
        logger.info("login rejected for disabled account username=%r", username)
        raise Forbidden("Account is disabled", code="ACCOUNT_DISABLED")
    return user


def get_user(db: Session, user_id: UUID) -> User:
    user = db.execute(
        sa.select(User).options(selectinload(User.role)).where(User.id == user_id)
    ).scalar_one_or_none()
    if user is None:
        raise NotFound("User not found")
    return user


def list_users(db: Session) -> list[User]:
    stmt = sa.select(User).options(selectinload(User.role)).order_by(User.username)
    return list(db.execute(stmt).scalars())


def list_roles(db: Session) -> list[Role]:
    return list(db.execute(sa.select(Role).order_by(Role.name)).scalars())


def _check_password(password: str | None) -> None:
    if password is not None and len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError.for_field(
            "password", f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )


def _check_role(db: Session, role_id: UUID) -> None:
    if db.get(Role, role_id) is None:
        raise InvalidReference.for_field("role_id", "Role does not exist", summary="Invalid role reference")


def _check_username_free(db: Session, username: str, exclude_id: UUID | None = None) -> None:
    stmt = sa.select(User.id).where(User.username == username)
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)
    if db.execute(stmt.limit(1)).first() is not None:
        raise DuplicateEntry.for_field(
            "username", "Username must be unique", summary="User with this username already exists"
        )


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateEntry.for_field(
            "username", "Username must be unique", summary="User with this username already exists"
        ) from exc


def create_user(db: Session, payload: UserCreateIn, actor_user_id: UUID | None = None) -> User:
    require_fields(
        "Username, password, and role_id are required",
        username=payload.username,
        password=payload.password,
        role_id=payload.role_id,
    )
    _check_password(payload.password)
    username = payload.username.strip()
    _check_username_free(db, username)
    _check_role(db, payload.role_id)

    user = User(
        username=username,
        password_hash=hash_password(payload.password),
        role_id=payload.role_id,
        is_active=payload.is_active,
    )
    db.add(user)
    db.flush()
    audit(db, actor_user_id, "user", user.id, "created", {"username": username})
    _commit(db)
    return get_user(db, user.id)


def update_user(db: Session, user_id: UUID, payload: UserUpdateIn, actor_user_id: UUID | None = None) -> User:
    user = get_user(db, user_id)
    require_fields("Username and role_id are required", username=payload.username, role_id=payload.role_id)
    if payload.password:
        _check_password(payload.password)
    username = payload.username.strip()
    _check_username_free(db, username, exclude_id=user.id)
    _check_role(db, payload.role_id)

    user.username = username
    user.role_id = payload.role_id
    if payload.is_active is not None:
        user.is_active = payload.is_active
    if payload.password:
        user.password_hash = hash_password(payload.password)
    audit(
        db,
        actor_user_id,
        "user",
        user.id,
        "updated",
        {"username": username, "password_changed": bool(payload.password)},
    )
    _commit(db)
    return get_user(db, user.id)


def delete_user(db: Session, user_id: UUID, actor_user_id: UUID | None = None) -> None:
    if actor_user_id is not None and user_id == actor_user_id:
        raise ValidationError("Cannot delete your own account")
    user = get_user(db, user_id)
    db.delete(user)
    audit(db, actor_user_id, "user", user_id, "deleted", {"username": user.username})
    db.commit()


def list_admin_menu(db: Session, role_name: str | None = None) -> list[AdminMenuItemOut]:
    """Active admin navigation entries; ``role_name`` keeps only the ones it may see."""
    rows = db.execute(
        sa.select(AdminMenuItem)
        .options(selectinload(AdminMenuItem.roles))
        .where(AdminMenuItem.is_active.is_(True))
        .order_by(AdminMenuItem.order, AdminMenuItem.title)
    ).scalars().all()

    out: list[AdminMenuItemOut] = []
    for row in rows:
        allowed = sorted(role.name for role in row.roles)
        if role_name is not None and role_name not in allowed:
            continue
        out.append(
            AdminMenuItemOut(
                id=row.id,
                href=row.href,
                icon_name=row.icon_name,
                title=row.title,
                description=row.description,
                icon_color=row.icon_color,
                order=row.order,
                allowed_roles=allowed,
            )
        )
    return out
