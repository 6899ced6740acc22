# app/routes/auth.py
from fastapi import APIRouter, Depends, status

from app.core.config import settings
from app.core.error_messages import ErrorResponses
from app.database import get_db
from app.middleware.rbac import get_current_admin
from app.models.admin import admin_exists, create_admin, find_admin_by_email
from app.schemas.admin import AdminOut, LoginSchema, RegisterSchema, TokenResponse
from app.utils.auth_utils import create_admin_token
from app.utils.hash_utils import hash_password, verify_password

auth_router = APIRouter(tags=["Auth"])


@auth_router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(data: RegisterSchema, db=Depends(get_db)):
    if not settings.ALLOW_ADMIN_REGISTRATION:
        raise ErrorResponses.REGISTRATION_CLOSED
    if await admin_exists(db, data.email, data.username):
        raise ErrorResponses.ADMIN_EXISTS

    admin = await create_admin(db, data.username, data.email, hash_password(data.password))
    return {**admin, "token": create_admin_token(admin)}


@auth_router.post("/login", response_model=TokenResponse)
async def login(data: LoginSchema, db=Depends(get_db)):
    admin = await find_admin_by_email(db, data.email)
    if not admin or not verify_password(data.password, admin["password"]):
        raise ErrorResponses.INVALID_CREDENTIALS
    return {**admin, "token": create_admin_token(admin)}


@auth_router.get("/me", response_model=AdminOut)
async def me(admin: dict = Depends(get_current_admin)):
    return admin
