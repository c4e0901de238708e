"""
Progression engine: XP, levels and login streaks
"""
import logging
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from app.config import settings
from app.models import User
from app.utils.clock import utcnow, get_zone, calendar_days_between

logger = logging.getLogger(__name__)


class ProgressionService:
    """
    Rules for the reader's progression counters

    - Level: one level every XP_PER_LEVEL points, starting at level 1
    - Streak: consecutive calendar days with at least one login, counted
      in the configured timezone
    """

    def level_for_xp(self, xp: int) -> int:
        """Level derived from total XP: floor(xp / XP_PER_LEVEL) + 1"""
        return xp // settings.XP_PER_LEVEL + 1

    def xp_to_next_level(self, xp: int) -> int:
        """XP still missing before the next level is reached"""
        return self.level_for_xp(xp) * settings.XP_PER_LEVEL - xp

    def next_streak(
        self,
        streak: int,
        last_login: Optional[datetime],
        now: datetime,
        tz: ZoneInfo
    ) -> int:
        """
        Compute the streak after a login at `now`

        - First login ever: 1
        - Same calendar day: unchanged
        - Next calendar day: +1
        - Any longer gap: back to 1
        """
        if last_login is None:
            return 1

        days = calendar_days_between(last_login, now, tz)

        if days == 0:
            return streak
        if days == 1:
            return streak + 1
        if days > 1:
            return 1

        # last_login in the future (clock skew): keep what we have
        return streak

    def award_xp(self, db: Session, user_id: str, amount: int, commit: bool = True) -> Optional[User]:
        """
        Add XP to a user and recompute the level in the same commit

        With commit=False the change is only flushed, so the caller can
        commit it together with its own writes.

        Returns None when the user does not exist.
        """
        user = db.query(User).filter(User.id == user_id).with_for_update().first()
        if not user:
            return None

        old_level = user.level
        user.xp = (user.xp or 0) + amount
        user.level = self.level_for_xp(user.xp)

        if commit:
            db.commit()
            db.refresh(user)
        else:
            db.flush()

        logger.info(f"XP awarded: user={user_id}, amount={amount}, xp={user.xp}, level={user.level}")
        if user.level > old_level:
            logger.info(f"Level up: user={user_id}, {old_level} -> {user.level}")

        return user

    def touch_login_streak(
        self,
        db: Session,
        user_id: str,
        now: Optional[datetime] = None
    ) -> Optional[User]:
        """
        Update the login streak and always rewrite last_login_date

        Returns None when the user does not exist.
        """
        now = now or utcnow()

        user = db.query(User).filter(User.id == user_id).with_for_update().first()
        if not user:
            return None

        user.streak = self.next_streak(user.streak or 0, user.last_login_date, now, get_zone())
        user.last_login_date = now

        db.commit()
        db.refresh(user)

        logger.debug(f"Streak touched: user={user_id}, streak={user.streak}")
        return user


# Global instance
progression_service = ProgressionService()
