import hmac
from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from app.core.config import Settings
from app.core.errors import InvalidToken

ADMIN_ROLE = "admin"


class AdminIdentity(BaseModel):
    username: str
    role: str


def _matches(supplied: str | None, expected: str | None) -> bool:
    if not expected or supplied is None:
        return False
    return hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


def authenticate_admin(username: str | None, password: str | None, settings: Settings) -> bool:
    # both comparisons always run so a wrong username and a wrong password look the same
    username_ok = _matches(username, settings.admin_username)
    password_ok = _matches(password, settings.admin_password)
    return username_ok and password_ok


def create_access_token(username: str, settings: Settings, now: datetime | None = None) -> str:
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "username": username,
        "role": ADMIN_ROLE,
        "iat": issued_at,
        "exp": issued_at + timedelta(hours=settings.token_ttl_hours),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> AdminIdentity:
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.PyJWTError as e:
        raise InvalidToken(str(e)) from e

    if payload.get("role") != ADMIN_ROLE or not payload.get("username"):
        raise InvalidToken("token does not carry an admin identity")

    return AdminIdentity(username=payload["username"], role=payload["role"])
