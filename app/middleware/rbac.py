# app/middleware/rbac.py
import jwt
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from app.core.error_messages import ErrorResponses
from app.database import get_db
from app.models.admin import find_admin_by_id
from app.utils.auth_utils import decode_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


async def get_current_admin(token: str = Depends(oauth2_scheme), db=Depends(get_db)) -> dict:
    """Resolve the bearer token to a stored admin, without the password hash."""
    if not token:
        raise ErrorResponses.INVALID_TOKEN
    try:
        payload = decode_token(token)
    except jwt.PyJWTError:
        raise ErrorResponses.INVALID_TOKEN
    if payload.get("role") != "admin":
        raise ErrorResponses.INVALID_TOKEN

    admin = await find_admin_by_id(db, payload.get("sub", ""))
    if not admin:
        raise ErrorResponses.INVALID_TOKEN
    admin.pop("password", None)
    return admin
