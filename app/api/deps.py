import logging

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import Settings
from app.core.errors import InvalidToken
from app.core.security import AdminIdentity, decode_access_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def require_admin(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> AdminIdentity:
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=401, detail="No token provided")

    try:
        admin = decode_access_token(credentials.credentials, settings)
    except InvalidToken as e:
        logger.info("Rejected admin token: %s", e)
        raise HTTPException(status_code=400, detail="Invalid token")

    request.state.admin = admin
    return admin
