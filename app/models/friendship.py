"""
Friendship model - directed (user, friend) edge
"""
from sqlalchemy import Column, String, Integer, TIMESTAMP, ForeignKey, UniqueConstraint
from app.database import Base
from app.utils.clock import utcnow

FRIENDSHIP_STATUSES = ("pending", "accepted", "blocked")


class Friendship(Base):
    __tablename__ = "friendships"
    __table_args__ = (
        UniqueConstraint("user_id", "friend_id", name="uix_user_friend"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    friend_id = Column(String, ForeignKey("users.id"), nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(TIMESTAMP, default=utcnow)

    def __repr__(self):
        return f"<Friendship({self.user_id} -> {self.friend_id}, {self.status})>"
