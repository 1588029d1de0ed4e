from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from tablemenu.api.deps import AuthSession, get_auth_session
from tablemenu.db.session import get_db
from tablemenu.schemas.admin_menu import AdminMenuItemOut
from tablemenu.schemas.common import Envelope, envelope
from tablemenu.services import accounts

router = APIRouter()


@router.get("", response_model=Envelope[list[AdminMenuItemOut]])
def admin_navigation(
    only_allowed: bool = Query(default=False),
    db: Session = Depends(get_db),
    session: AuthSession = Depends(get_auth_session),
):
    role_name = session.role_name if only_allowed else None
    return envelope(accounts.list_admin_menu(db, role_name=role_name))
