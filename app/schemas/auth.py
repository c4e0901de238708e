"""
Pydantic schemas for the admin session endpoints
"""
from pydantic import BaseModel
from typing import Optional

from app.schemas.common import CamelModel


class AdminLogin(BaseModel):
    username: str = ""
    password: str = ""


class AdminInfo(BaseModel):
    username: str


class AdminLoginResponse(BaseModel):
    message: str
    admin: AdminInfo


class AdminAuthStatus(CamelModel):
    is_authenticated: bool
    username: Optional[str] = None
