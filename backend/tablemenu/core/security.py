from datetime import datetime, timedelta, timezone

import bcrypt
from jose import jwt

from tablemenu.core.config import settings

ALGO = "HS256"

def now_utc() -> datetime:
    return datetime.now(timezone.utc)

def create_access_token(sub: str, username: str, role_id: str) -> str:
    exp = now_utc() + timedelta(minutes=settings.JWT_ACCESS_MINUTES)
    payload = {
        "sub": sub,
        "username": username,
        "role_id": role_id,
        "type": "access",
        "exp": exp,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=ALGO)

def decode_token(token: str) -> dict:
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[ALGO])

def hash_password(password: str) -> str:
    raw = password.encode("utf-8")
    return bcrypt.hashpw(raw, bcrypt.gensalt()).decode("utf-8")

def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False
