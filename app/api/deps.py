"""
Request-scoped identity dependencies

Handlers receive the caller explicitly: a User row for readers, an
AdminContext for editors.
"""
from dataclasses import dataclass
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from typing import Optional

from app.config import settings
from app.database import get_db
from app.models import User
from app.services import auth_service

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AdminContext:
    admin_id: int
    username: str


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the reader from the bearer token, 401 otherwise"""
    claims = auth_service.decode_user_token(credentials.credentials) if credentials else None

    if not claims:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return auth_service.get_or_create_user(db, claims)


def get_optional_admin(request: Request, db: Session = Depends(get_db)) -> Optional[AdminContext]:
    token = request.cookies.get(settings.ADMIN_SESSION_COOKIE)
    if not token:
        return None

    admin = auth_service.get_admin_from_session(db, token)
    if not admin:
        return None

    return AdminContext(admin_id=admin.id, username=admin.username)


def get_current_admin(
    admin: Optional[AdminContext] = Depends(get_optional_admin),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> AdminContext:
    """
    Require an admin session

    A signed-in reader without an admin session gets 403; an anonymous
    caller gets 401.
    """
    if admin:
        return admin

    if credentials and auth_service.decode_user_token(credentials.credentials):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")

    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Admin authentication required")
