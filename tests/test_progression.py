from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from app.models import User
from app.services.progression_service import progression_service
from app.utils.clock import as_naive_utc

UTC = ZoneInfo("UTC")


@pytest.mark.parametrize("xp,level", [
    (0, 1),
    (999, 1),
    (1000, 2),
    (1050, 2),
    (2999, 3),
    (10000, 11),
])
def test_level_for_xp(xp, level):
    assert progression_service.level_for_xp(xp) == level


def test_xp_to_next_level():
    assert progression_service.xp_to_next_level(0) == 1000
    assert progression_service.xp_to_next_level(1050) == 950


class TestNextStreak:
    now = datetime(2024, 5, 10, 9, 0)

    def test_first_login_starts_at_one(self):
        assert progression_service.next_streak(0, None, self.now, UTC) == 1

    def test_same_day_keeps_streak(self):
        earlier = self.now.replace(hour=0, minute=5)
        assert progression_service.next_streak(4, earlier, self.now, UTC) == 4

    def test_next_day_increments(self):
        yesterday_late = datetime(2024, 5, 9, 23, 59)
        assert progression_service.next_streak(4, yesterday_late, self.now, UTC) == 5

    def test_gap_resets_to_one(self):
        assert progression_service.next_streak(9, self.now - timedelta(days=2), self.now, UTC) == 1
        assert progression_service.next_streak(9, self.now - timedelta(days=30), self.now, UTC) == 1

    def test_calendar_day_follows_configured_zone(self):
        rome = ZoneInfo("Europe/Rome")
        # 22:30 UTC on the 9th is already the 10th in Rome
        last = datetime(2024, 5, 9, 22, 30)
        assert progression_service.next_streak(3, last, self.now, rome) == 3
        assert progression_service.next_streak(3, last, self.now, UTC) == 4


def test_award_xp_keeps_level_invariant(db, make_user):
    make_user("reader", xp=950)

    user = progression_service.award_xp(db, "reader", 100)

    assert user.xp == 1050
    assert user.level == 2

    for amount in (1, 499, 1500, 0):
        user = progression_service.award_xp(db, "reader", amount)
        assert user.level == user.xp // 1000 + 1


def test_award_xp_unknown_user(db):
    assert progression_service.award_xp(db, "ghost", 10) is None


def test_touch_login_streak_sequence(db, make_user):
    make_user("reader")
    day1 = datetime(2024, 5, 10, 8, 0)

    user = progression_service.touch_login_streak(db, "reader", now=day1)
    assert user.streak == 1
    assert user.last_login_date == day1

    later_same_day = day1 + timedelta(hours=10)
    user = progression_service.touch_login_streak(db, "reader", now=later_same_day)
    assert user.streak == 1
    assert user.last_login_date == later_same_day

    user = progression_service.touch_login_streak(db, "reader", now=day1 + timedelta(days=1))
    assert user.streak == 2

    user = progression_service.touch_login_streak(db, "reader", now=day1 + timedelta(days=4))
    assert user.streak == 1


def test_touch_login_streak_unknown_user(db):
    assert progression_service.touch_login_streak(db, "ghost") is None


def test_auth_user_endpoint_creates_user_and_starts_streak(client, auth_headers, db):
    response = client.get("/api/auth/user", headers=auth_headers("new-reader", email="r@example.com"))

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == "new-reader"
    assert body["email"] == "r@example.com"
    assert body["level"] == 1
    assert body["xp"] == 0
    assert body["streak"] == 1
    assert body["lastLoginDate"] is not None

    assert db.query(User).filter(User.id == "new-reader").count() == 1


def test_auth_user_requires_token(client):
    response = client.get("/api/auth/user")
    assert response.status_code == 401
    assert response.json()["error"] == "http_error"


def test_admin_session_is_not_a_user_token(admin_client):
    cookie = admin_client.cookies.get("admin_session")
    response = admin_client.get("/api/auth/user", headers={"Authorization": f"Bearer {cookie}"})
    assert response.status_code == 401


def test_as_naive_utc():
    rome = ZoneInfo("Europe/Rome")

    assert as_naive_utc(datetime(2024, 7, 1, 2, 0, tzinfo=rome)) == datetime(2024, 7, 1, 0, 0)
    assert as_naive_utc(datetime(2024, 7, 1, 2, 0)) == datetime(2024, 7, 1, 2, 0)
