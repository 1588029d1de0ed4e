from dataclasses import dataclass
from uuid import UUID

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from tablemenu.core.config import settings
from tablemenu.core.errors import Forbidden, Unauthorized
from tablemenu.core.security import decode_token
from tablemenu.db.session import get_db
from tablemenu.models.user import User

bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthSession:
    """The authenticated caller of a request."""

    user_id: UUID
    username: str
    role_id: UUID
    role_name: str


def _session_from_token(raw_token: str, db: Session) -> AuthSession:
    try:
        payload = decode_token(raw_token)
    except JWTError:
        raise Unauthorized("Invalid or expired token", details=[{"message": "Invalid or expired token"}])
    if payload.get("type") != "access":
        raise Unauthorized("Invalid token type")
    try:
        user_id = UUID(str(payload.get("sub")))
    except ValueError:
        raise Unauthorized("Invalid or expired token")

    user = db.get(User, user_id)
    if not user:
        raise Unauthorized("User not found")
    if not user.is_active:
        raise Forbidden("Account is disabled", code="ACCOUNT_DISABLED")
    return AuthSession(
        user_id=user.id,
        username=user.username,
        role_id=user.role_id,
        role_name=user.role.name,
    )


def get_auth_session(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    token: str | None = Query(default=None, include_in_schema=False),
    db: Session = Depends(get_db),
) -> AuthSession:
    # Streaming clients cannot set headers, so ?token= is accepted as well.
    raw_token = creds.credentials if creds else token
    if not raw_token:
        raise Unauthorized("Authentication required", details=[{"message": "No token provided"}])
    return _session_from_token(raw_token, db)


def require_roles(*role_names: str):
    def dependency(session: AuthSession = Depends(get_auth_session)) -> AuthSession:
        if role_names and session.role_name not in role_names:
            raise Forbidden(
                "Insufficient permissions",
                details=[{"message": "You don't have permission to access this resource"}],
            )
        return session

    return dependency


require_admin = require_roles(settings.ADMIN_ROLE_NAME)
