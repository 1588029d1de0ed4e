from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tablemenu.api.deps import AuthSession, get_auth_session
from tablemenu.core.security import create_access_token
from tablemenu.db.session import get_db
from tablemenu.schemas.auth import LoginIn, LoginOut, MeOut, SessionUserOut
from tablemenu.schemas.common import Envelope, envelope
from tablemenu.services import accounts

router = APIRouter()


@router.post("/login", response_model=Envelope[LoginOut])
def login(payload: LoginIn, db: Session = Depends(get_db)):
    user = accounts.authenticate(db, payload.username, payload.password)
    token = create_access_token(str(user.id), user.username, str(user.role_id))
    return envelope(LoginOut(token=token, user=SessionUserOut.model_validate(user)))


@router.get("/me", response_model=Envelope[MeOut])
def me(session: AuthSession = Depends(get_auth_session), db: Session = Depends(get_db)):
    user = accounts.get_user(db, session.user_id)
    return envelope(MeOut.model_validate(user))
