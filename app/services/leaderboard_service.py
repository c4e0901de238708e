"""
Leaderboards and friendships
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.config import settings
from app.models import User, Friendship
from app.utils.upsert import insert_for

logger = logging.getLogger(__name__)


class LeaderboardService:
    """
    Rank readers by XP

    Ties on XP are broken by user id so the order is stable.
    """

    def clamp_limit(self, limit: Optional[int]) -> int:
        if not limit or limit < 1:
            return settings.DEFAULT_LEADERBOARD_LIMIT
        return min(limit, settings.MAX_LEADERBOARD_LIMIT)

    def get_leaderboard(self, db: Session, limit: Optional[int] = None) -> List[User]:
        """All users by XP descending, truncated to limit"""
        return (
            db.query(User)
            .order_by(User.xp.desc(), User.id.asc())
            .limit(self.clamp_limit(limit))
            .all()
        )

    def get_user_friends(self, db: Session, user_id: str) -> List[User]:
        """Users reachable from user_id over an accepted edge"""
        return (
            db.query(User)
            .join(Friendship, Friendship.friend_id == User.id)
            .filter(
                Friendship.user_id == user_id,
                Friendship.status == "accepted"
            )
            .order_by(User.xp.desc(), User.id.asc())
            .all()
        )

    def get_friends_leaderboard(
        self,
        db: Session,
        user_id: str,
        limit: Optional[int] = None
    ) -> List[User]:
        """
        Accepted friends plus the requester, by XP descending

        The requester is always part of the ranking, even with no friends.
        """
        entries = {friend.id: friend for friend in self.get_user_friends(db, user_id)}

        me = db.query(User).filter(User.id == user_id).first()
        if me:
            entries[me.id] = me

        ranked = sorted(entries.values(), key=lambda u: (-(u.xp or 0), u.id))
        return ranked[:self.clamp_limit(limit)]

    def add_friend(self, db: Session, user_id: str, friend_id: str) -> Friendship:
        """
        Create an accepted friendship edge

        Friend requests are accepted right away; adding an existing friend
        leaves the edge untouched.
        """
        if user_id == friend_id:
            raise ValueError("Cannot add yourself as a friend")

        stmt = insert_for(db, Friendship).values(
            user_id=user_id,
            friend_id=friend_id,
            status="accepted",
        ).on_conflict_do_nothing(index_elements=["user_id", "friend_id"])

        result = db.execute(stmt)
        db.commit()

        if result.rowcount:
            logger.info(f"Friendship created: {user_id} -> {friend_id}")

        return db.query(Friendship).filter(
            Friendship.user_id == user_id,
            Friendship.friend_id == friend_id
        ).first()


# Global instance
leaderboard_service = LeaderboardService()
