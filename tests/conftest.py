import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CACHE_ENABLED"] = "false"
os.environ["RATE_LIMIT_PER_MINUTE"] = "100000"
os.environ["RATE_LIMIT_PER_HOUR"] = "1000000"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["TIMEZONE"] = "UTC"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import User, Chapter, Quiz, QuizQuestion
from app.services import auth_service
from app.utils.rate_limiter import rate_limiter

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def reset_state():
    Base.metadata.create_all(bind=engine)
    rate_limiter.reset()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user(db):
    def _make(user_id, xp=0, **fields):
        user = User(id=user_id, xp=xp, level=xp // 1000 + 1, **fields)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture
def auth_headers():
    def _headers(user_id, **profile):
        token = auth_service.create_access_token(user_id, **profile)
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def admin_client(db):
    auth_service.create_admin_user(db, "editor", "s3cret-pass")
    admin = TestClient(app)
    response = admin.post("/api/admin/login", json={"username": "editor", "password": "s3cret-pass"})
    assert response.status_code == 200
    return admin


@pytest.fixture
def chapter(db):
    chapter = Chapter(number=1, title="Don Abbondio e i bravi", content="<p>Quel ramo del lago di Como</p>")
    db.add(chapter)
    db.commit()
    db.refresh(chapter)
    return chapter


@pytest.fixture
def quiz(db, chapter):
    """Four questions with answers A, B, C, D and a 100 XP reward"""
    quiz = Quiz(chapter_id=chapter.id, title="Capitolo 1", xp_reward=100)
    db.add(quiz)
    db.flush()
    for position, answer in enumerate(["A", "B", "C", "D"], start=1):
        db.add(QuizQuestion(
            quiz_id=quiz.id,
            question=f"Domanda {position}",
            type="multiple_choice",
            options=["A", "B", "C", "D", "X"],
            correct_answer=answer,
            order=position,
        ))
    db.commit()
    db.refresh(quiz)
    return quiz
