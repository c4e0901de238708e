"""
Daily and weekly challenge selection and progress tracking
"""
import logging
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import case, func, null
from sqlalchemy.orm import Session

from app.models import DailyChallenge, UserDailyChallenge, WeeklyChallenge, UserWeeklyChallenge
from app.utils.clock import utcnow, get_zone, day_window
from app.utils.upsert import insert_for

logger = logging.getLogger(__name__)

COMPLETION_THRESHOLD = 100


class ChallengeService:
    """
    Service for time-boxed challenges

    - A daily challenge belongs to the calendar day containing its date
    - A weekly challenge runs from start_date to end_date inclusive
    - When several active rows match a window the newest one wins
    - Completion does not credit the challenge's XP or coin reward
    """

    def get_todays_daily_challenge(
        self,
        db: Session,
        now: Optional[datetime] = None
    ) -> Optional[DailyChallenge]:
        start, end = day_window(now or utcnow(), get_zone())

        return (
            db.query(DailyChallenge)
            .filter(
                DailyChallenge.date >= start,
                DailyChallenge.date < end,
                DailyChallenge.is_active.is_(True)
            )
            .order_by(DailyChallenge.id.desc())
            .first()
        )

    def get_current_weekly_challenge(
        self,
        db: Session,
        now: Optional[datetime] = None
    ) -> Optional[WeeklyChallenge]:
        now = now or utcnow()

        return (
            db.query(WeeklyChallenge)
            .filter(
                WeeklyChallenge.start_date <= now,
                WeeklyChallenge.end_date >= now,
                WeeklyChallenge.is_active.is_(True)
            )
            .order_by(WeeklyChallenge.id.desc())
            .first()
        )

    def get_daily_challenge(self, db: Session, challenge_id: int) -> Optional[DailyChallenge]:
        return db.query(DailyChallenge).filter(DailyChallenge.id == challenge_id).first()

    def get_weekly_challenge(self, db: Session, challenge_id: int) -> Optional[WeeklyChallenge]:
        return db.query(WeeklyChallenge).filter(WeeklyChallenge.id == challenge_id).first()

    def get_user_daily_progress(
        self, db: Session, user_id: str, challenge_id: int
    ) -> Optional[UserDailyChallenge]:
        return db.query(UserDailyChallenge).filter(
            UserDailyChallenge.user_id == user_id,
            UserDailyChallenge.challenge_id == challenge_id
        ).first()

    def get_user_weekly_progress(
        self, db: Session, user_id: str, challenge_id: int
    ) -> Optional[UserWeeklyChallenge]:
        return db.query(UserWeeklyChallenge).filter(
            UserWeeklyChallenge.user_id == user_id,
            UserWeeklyChallenge.challenge_id == challenge_id
        ).first()

    def update_daily_challenge_progress(
        self,
        db: Session,
        user_id: str,
        challenge_id: int,
        progress: int,
        now: Optional[datetime] = None
    ) -> UserDailyChallenge:
        self._upsert_progress(db, UserDailyChallenge, user_id, challenge_id, progress, now)
        return self.get_user_daily_progress(db, user_id, challenge_id)

    def update_weekly_challenge_progress(
        self,
        db: Session,
        user_id: str,
        challenge_id: int,
        progress: int,
        now: Optional[datetime] = None
    ) -> UserWeeklyChallenge:
        self._upsert_progress(db, UserWeeklyChallenge, user_id, challenge_id, progress, now)
        return self.get_user_weekly_progress(db, user_id, challenge_id)

    def _upsert_progress(
        self,
        db: Session,
        model,
        user_id: str,
        challenge_id: int,
        progress: int,
        now: Optional[datetime]
    ) -> None:
        """
        Insert or update a per-user progress row in one statement

        completed_at is stamped when the row first reaches completion, kept
        while it stays completed and cleared when progress drops again.
        """
        now = now or utcnow()
        is_completed = progress >= COMPLETION_THRESHOLD
        table = model.__table__

        stmt = insert_for(db, model).values(
            user_id=user_id,
            challenge_id=challenge_id,
            progress=progress,
            is_completed=is_completed,
            completed_at=now if is_completed else None,
            created_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "challenge_id"],
            set_={
                "progress": stmt.excluded.progress,
                "is_completed": stmt.excluded.is_completed,
                "completed_at": case(
                    (stmt.excluded.is_completed, func.coalesce(table.c.completed_at, stmt.excluded.completed_at)),
                    else_=null()
                ),
            }
        )

        db.execute(stmt)
        db.commit()
        # Rows loaded earlier in this session are stale after a core update
        db.expire_all()

        logger.info(
            f"{model.__tablename__} upserted: user={user_id}, challenge={challenge_id}, "
            f"progress={progress}, completed={is_completed}"
        )

    def list_challenges(self, db: Session) -> Dict[str, List]:
        return {
            "daily": db.query(DailyChallenge).order_by(DailyChallenge.date.desc(), DailyChallenge.id.desc()).all(),
            "weekly": db.query(WeeklyChallenge).order_by(WeeklyChallenge.start_date.desc(), WeeklyChallenge.id.desc()).all(),
        }

    def create_daily_challenge(self, db: Session, data: Dict) -> DailyChallenge:
        challenge = DailyChallenge(**data)
        db.add(challenge)
        db.commit()
        db.refresh(challenge)
        logger.info(f"Daily challenge created: {challenge.id} for {challenge.date}")
        return challenge

    def create_weekly_challenge(self, db: Session, data: Dict) -> WeeklyChallenge:
        challenge = WeeklyChallenge(**data)
        db.add(challenge)
        db.commit()
        db.refresh(challenge)
        logger.info(f"Weekly challenge created: {challenge.id} ({challenge.start_date} - {challenge.end_date})")
        return challenge


# Global instance
challenge_service = ChallengeService()
