"""
Daily and weekly challenges with per-user progress
"""
from sqlalchemy import Column, String, Integer, Boolean, Text, TIMESTAMP, ForeignKey, UniqueConstraint
from app.database import Base
from app.models.types import JSONType
from app.utils.clock import utcnow


class DailyChallenge(Base):
    """
    Daily challenges table - active on the calendar day containing `date`
    """
    __tablename__ = "daily_challenges"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    type = Column(String(50), nullable=False)  # quiz, reading, streak
    requirement = Column(JSONType)
    xp_reward = Column(Integer, default=100)
    coin_reward = Column(Integer, default=0)
    date = Column(TIMESTAMP, nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(TIMESTAMP, default=utcnow)

    def __repr__(self):
        return f"<DailyChallenge(id={self.id}, date={self.date})>"


class UserDailyChallenge(Base):
    __tablename__ = "user_daily_challenges"
    __table_args__ = (
        UniqueConstraint("user_id", "challenge_id", name="uix_user_daily_challenge"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    challenge_id = Column(Integer, ForeignKey("daily_challenges.id"), nullable=False)
    progress = Column(Integer, nullable=False, default=0)
    is_completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(TIMESTAMP)
    created_at = Column(TIMESTAMP, default=utcnow)


class WeeklyChallenge(Base):
    """
    Weekly challenges table - active while start_date <= now <= end_date
    """
    __tablename__ = "weekly_challenges"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    type = Column(String(50), nullable=False)
    requirement = Column(JSONType)
    xp_reward = Column(Integer, default=500)
    coin_reward = Column(Integer, default=100)
    badge_reward = Column(Integer, ForeignKey("badges.id"))
    start_date = Column(TIMESTAMP, nullable=False)
    end_date = Column(TIMESTAMP, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(TIMESTAMP, default=utcnow)

    def __repr__(self):
        return f"<WeeklyChallenge(id={self.id}, start={self.start_date}, end={self.end_date})>"


class UserWeeklyChallenge(Base):
    __tablename__ = "user_weekly_challenges"
    __table_args__ = (
        UniqueConstraint("user_id", "challenge_id", name="uix_user_weekly_challenge"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    challenge_id = Column(Integer, ForeignKey("weekly_challenges.id"), nullable=False)
    progress = Column(Integer, nullable=False, default=0)
    is_completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(TIMESTAMP)
    created_at = Column(TIMESTAMP, default=utcnow)
