"""
User and AdminUser models
"""
from sqlalchemy import Column, String, Integer, TIMESTAMP
from app.database import Base
from app.utils.clock import utcnow


class User(Base):
    """
    Users table - reader profile and progression counters

    The id comes from the external identity provider.
    """
    __tablename__ = "users"

    id = Column(String, primary_key=True)
    email = Column(String, unique=True, nullable=True)
    first_name = Column(String)
    last_name = Column(String)
    profile_image_url = Column(String)
    level = Column(Integer, nullable=False, default=1)
    xp = Column(Integer, nullable=False, default=0, index=True)
    coins = Column(Integer, nullable=False, default=0)
    streak = Column(Integer, nullable=False, default=0)
    last_login_date = Column(TIMESTAMP)
    created_at = Column(TIMESTAMP, default=utcnow)
    updated_at = Column(TIMESTAMP, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<User(id={self.id}, xp={self.xp}, level={self.level})>"


class AdminUser(Base):
    """Admin users table - editors of the content, separate from readers"""
    __tablename__ = "admin_users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)  # bcrypt
    created_at = Column(TIMESTAMP, default=utcnow)

    def __repr__(self):
        return f"<AdminUser(id={self.id}, username={self.username})>"
