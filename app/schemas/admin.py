# app/schemas/admin.py
from pydantic import BaseModel, EmailStr, Field


class RegisterSchema(BaseModel):
    username: str = Field(..., min_length=3)
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginSchema(BaseModel):
    email: EmailStr
    password: str


class AdminOut(BaseModel):
    id: str
    username: str
    email: EmailStr


class TokenResponse(AdminOut):
    token: str
