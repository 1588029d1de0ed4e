from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tablemenu.api.deps import AuthSession, require_admin
from tablemenu.db.session import get_db
from tablemenu.schemas.auth import RoleOut
from tablemenu.schemas.common import Envelope, envelope
from tablemenu.schemas.users import UserCreateIn, UserOut, UserUpdateIn
from tablemenu.services import accounts

router = APIRouter()
roles_router = APIRouter()


@router.get("", response_model=Envelope[list[UserOut]])
def list_users(db: Session = Depends(get_db), _: AuthSession = Depends(require_admin)):
    return envelope([UserOut.model_validate(u) for u in accounts.list_users(db)])


@router.post("", response_model=Envelope[UserOut], status_code=201)
def create_user(
    payload: UserCreateIn,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_admin),
):
    user = accounts.create_user(db, payload, actor_user_id=session.user_id)
    return envelope(UserOut.model_validate(user))


@router.put("/{user_id}", response_model=Envelope[UserOut])
def update_user(
    user_id: UUID,
    payload: UserUpdateIn,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_admin),
):
    user = accounts.update_user(db, user_id, payload, actor_user_id=session.user_id)
    return envelope(UserOut.model_validate(user))


@router.delete("/{user_id}", response_model=Envelope[None])
def delete_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_admin),
):
    accounts.delete_user(db, user_id, actor_user_id=session.user_id)
    return envelope(None)


@roles_router.get("", response_model=Envelope[list[RoleOut]])
def list_roles(db: Session = Depends(get_db), _: AuthSession = Depends(require_admin)):
    return envelope([RoleOut.model_validate(r) for r in accounts.list_roles(db)])
