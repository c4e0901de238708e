"""
Badge catalog and awarded badges
"""
from sqlalchemy import Column, String, Integer, Text, TIMESTAMP, ForeignKey, UniqueConstraint
from app.database import Base
from app.models.types import JSONType
from app.utils.clock import utcnow


class Badge(Base):
    __tablename__ = "badges"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    icon = Column(String(50), nullable=False)
    type = Column(String(50), nullable=False)  # achievement, streak, chapter, quiz
    requirement = Column(JSONType)  # {"streak_days": 7}
    xp_reward = Column(Integer, default=0)
    created_at = Column(TIMESTAMP, default=utcnow)

    def __repr__(self):
        return f"<Badge(id={self.id}, name={self.name})>"


class UserBadge(Base):
    """At most one row per (user, badge)"""
    __tablename__ = "user_badges"
    __table_args__ = (
        UniqueConstraint("user_id", "badge_id", name="uix_user_badge"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    badge_id = Column(Integer, ForeignKey("badges.id"), nullable=False)
    earned_at = Column(TIMESTAMP, default=utcnow)

    def __repr__(self):
        return f"<UserBadge(user_id={self.user_id}, badge_id={self.badge_id})>"
