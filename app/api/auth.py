"""
Session endpoints: the reader's profile and the admin login
"""
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session
from typing import Optional
import logging

from app.api.deps import AdminContext, get_current_user, get_optional_admin
from app.config import settings
from app.database import get_db
from app.models import User
from app.schemas.auth import AdminLogin, AdminLoginResponse, AdminAuthStatus
from app.schemas.common import MessageResponse
from app.schemas.user import UserResponse
from app.services import auth_service
from app.services.progression_service import progression_service

router = APIRouter(prefix="/api", tags=["auth"])
logger = logging.getLogger(__name__)


@router.get("/auth/user", response_model=UserResponse)
def get_auth_user(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Return the signed-in reader

    Fetching the profile counts as a login for the daily streak.
    """
    return progression_service.touch_login_streak(db, user.id)


@router.post("/admin/login", response_model=AdminLoginResponse)
def admin_login(
    credentials: AdminLogin,
    response: Response,
    db: Session = Depends(get_db)
):
    """Verify admin credentials and open an admin session cookie"""

    if not credentials.username or not credentials.password:
        raise HTTPException(status_code=400, detail="Username and password required")

    admin = auth_service.authenticate_admin(db, credentials.username, credentials.password)
    if not admin:
        logger.warning(f"Failed admin login for '{credentials.username}'")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    response.set_cookie(
        key=settings.ADMIN_SESSION_COOKIE,
        value=auth_service.create_admin_session(admin),
        max_age=settings.ADMIN_SESSION_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=settings.ADMIN_COOKIE_SECURE,
    )

    logger.info(f"Admin logged in: {admin.username}")
    return {"message": "Login successful", "admin": {"username": admin.username}}


@router.post("/admin/logout", response_model=MessageResponse)
def admin_logout(response: Response):
    response.delete_cookie(settings.ADMIN_SESSION_COOKIE)
    return {"message": "Logout successful"}


@router.get("/admin/auth", response_model=AdminAuthStatus)
def admin_auth_status(admin: Optional[AdminContext] = Depends(get_optional_admin)):
    """Report whether the caller holds a valid admin session"""
    return AdminAuthStatus(
        is_authenticated=admin is not None,
        username=admin.username if admin else None
    )
