"""
Authentication for the two independent domains

- Readers: bearer JWT issued by the identity provider, scope "user"
- Admins: username/password login, session JWT in a cookie, scope "admin"

Tokens of one scope are never accepted by the other.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from app.config import settings
from app.models import User, AdminUser
from app.utils.upsert import insert_for

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

USER_SCOPE = "user"
ADMIN_SCOPE = "admin"

PROFILE_CLAIMS = ("email", "first_name", "last_name", "profile_image_url")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def _encode(claims: Dict[str, Any], scope: str, expires_delta: timedelta) -> str:
    to_encode = claims.copy()
    to_encode.update({
        "scope": scope,
        "exp": datetime.now(timezone.utc) + expires_delta,
    })
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def _decode(token: str, scope: str) -> Optional[Dict[str, Any]]:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None

    if payload.get("scope") != scope or not payload.get("sub"):
        return None
    return payload


def create_access_token(user_id: str, expires_delta: Optional[timedelta] = None, **profile) -> str:
    """Issue a reader token (normally done by the identity provider)"""
    claims = {"sub": user_id}
    claims.update({k: v for k, v in profile.items() if k in PROFILE_CLAIMS and v is not None})
    return _encode(
        claims,
        USER_SCOPE,
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )


def decode_user_token(token: str) -> Optional[Dict[str, Any]]:
    return _decode(token, USER_SCOPE)


def get_or_create_user(db: Session, claims: Dict[str, Any]) -> User:
    """Resolve the reader from token claims, creating the row on first sight"""
    user_id = claims["sub"]

    user = db.query(User).filter(User.id == user_id).first()
    if user:
        return user

    profile = {k: claims.get(k) for k in PROFILE_CLAIMS}
    stmt = insert_for(db, User).values(id=user_id, **profile).on_conflict_do_nothing(
        index_elements=["id"]
    )
    db.execute(stmt)
    db.commit()
    logger.info(f"User created from identity claims: {user_id}")

    return db.query(User).filter(User.id == user_id).first()


def authenticate_admin(db: Session, username: str, password: str) -> Optional[AdminUser]:
    """Authenticate admin by username and password"""
    admin = db.query(AdminUser).filter(AdminUser.username == username).first()

    if not admin:
        return None
    if not verify_password(password, admin.password_hash):
        return None
    return admin


def create_admin_user(db: Session, username: str, password: str) -> AdminUser:
    """Create a new admin with a bcrypt-hashed password"""
    if db.query(AdminUser).filter(AdminUser.username == username).first():
        raise ValueError("Username already exists")

    admin = AdminUser(username=username, password_hash=get_password_hash(password))
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info(f"Admin user created: {admin.username}")
    return admin


def create_admin_session(admin: AdminUser) -> str:
    return _encode(
        {"sub": str(admin.id), "username": admin.username},
        ADMIN_SCOPE,
        timedelta(minutes=settings.ADMIN_SESSION_EXPIRE_MINUTES)
    )


def get_admin_from_session(db: Session, token: str) -> Optional[AdminUser]:
    """Resolve the admin behind a session token, if it is still valid"""
    payload = _decode(token, ADMIN_SCOPE)
    if not payload:
        return None

    try:
        admin_id = int(payload["sub"])
    except ValueError:
        return None

    return db.query(AdminUser).filter(AdminUser.id == admin_id).first()
