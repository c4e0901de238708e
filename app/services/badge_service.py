"""
Badge catalog and awards
"""
import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.models import Badge, UserBadge
from app.utils.upsert import insert_for

logger = logging.getLogger(__name__)


class BadgeService:
    """
    Badges are awarded at most once per user

    The requirement JSON on a badge is descriptive; nothing evaluates it
    against user state, awards are made explicitly.
    """

    def list_badges(self, db: Session) -> List[Badge]:
        return db.query(Badge).order_by(Badge.id).all()

    def get_badge(self, db: Session, badge_id: int) -> Optional[Badge]:
        return db.query(Badge).filter(Badge.id == badge_id).first()

    def create_badge(self, db: Session, data: Dict) -> Badge:
        badge = Badge(**data)
        db.add(badge)
        db.commit()
        db.refresh(badge)
        logger.info(f"Badge created: {badge.id} ({badge.name})")
        return badge

    def list_user_badges(self, db: Session, user_id: str) -> List[UserBadge]:
        return (
            db.query(UserBadge)
            .filter(UserBadge.user_id == user_id)
            .order_by(UserBadge.earned_at.desc(), UserBadge.id.desc())
            .all()
        )

    def award_badge(self, db: Session, user_id: str, badge_id: int) -> Tuple[UserBadge, bool]:
        """
        Award a badge, ignoring duplicates

        Returns:
            Tuple of (user_badge, created) where created is False when the
            user already held the badge
        """
        stmt = insert_for(db, UserBadge).values(
            user_id=user_id,
            badge_id=badge_id,
        ).on_conflict_do_nothing(index_elements=["user_id", "badge_id"])

        result = db.execute(stmt)
        db.commit()

        created = bool(result.rowcount)
        if created:
            logger.info(f"Badge awarded: user={user_id}, badge={badge_id}")
        else:
            logger.debug(f"Badge already held: user={user_id}, badge={badge_id}")

        user_badge = db.query(UserBadge).filter(
            UserBadge.user_id == user_id,
            UserBadge.badge_id == badge_id
        ).first()

        return user_badge, created


# Global instance
badge_service = BadgeService()
