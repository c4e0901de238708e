from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models import QuizAttempt, User
from app.services.progression_service import progression_service
from app.services.quiz_service import quiz_service, round_half_up


def answer_sheet(client, headers, quiz_id, picks):
    questions = client.get(f"/api/quizzes/{quiz_id}/questions", headers=headers).json()
    return {str(q["id"]): pick for q, pick in zip(questions, picks)}


@pytest.mark.parametrize("value,expected", [
    (Decimal("0.5"), 1),
    (Decimal("1.5"), 2),
    (Decimal("2.5"), 3),
    (Decimal("2.49"), 2),
])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_xp_for_quiz():
    assert quiz_service.xp_for_quiz(100, 3, 4) == 75
    assert quiz_service.xp_for_quiz(50, 1, 3) == 17
    assert quiz_service.xp_for_quiz(50, 0, 3) == 0
    assert quiz_service.xp_for_quiz(50, 0, 0) == 0


def test_score_percentage():
    assert quiz_service.score_percentage(2, 3) == 67
    assert quiz_service.score_percentage(0, 0) == 0


def test_score_answers_is_exact_match(db, quiz):
    questions = quiz_service.get_questions(db, quiz.id)
    answers = {
        str(questions[0].id): "A",
        str(questions[1].id): "b",
        str(questions[2].id): " C",
    }
    assert quiz_service.score_answers(questions, answers) == (1, 4)


def test_questions_hide_answer_key(client, auth_headers, quiz):
    response = client.get(f"/api/quizzes/{quiz.id}/questions", headers=auth_headers("reader"))

    assert response.status_code == 200
    questions = response.json()
    assert [q["question"] for q in questions] == ["Domanda 1", "Domanda 2", "Domanda 3", "Domanda 4"]
    for question in questions:
        assert "correctAnswer" not in question
        assert "explanation" not in question
        assert question["options"] == ["A", "B", "C", "D", "X"]


def test_get_quiz(client, auth_headers, quiz):
    response = client.get(f"/api/quizzes/{quiz.id}", headers=auth_headers("reader"))

    assert response.status_code == 200
    assert response.json()["xpReward"] == 100


def test_unknown_quiz_returns_404(client, auth_headers):
    headers = auth_headers("reader")

    assert client.get("/api/quizzes/999", headers=headers).status_code == 404
    assert client.get("/api/quizzes/999/questions", headers=headers).status_code == 404

    response = client.post("/api/quizzes/999/attempt", json={"answers": {}}, headers=headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Quiz not found"


def test_server_scored_attempt(client, auth_headers, make_user, db, quiz):
    user = make_user("reader")
    headers = auth_headers("reader")
    answers = answer_sheet(client, headers, quiz.id, ["A", "B", "X", "D"])

    response = client.post(f"/api/quizzes/{quiz.id}/attempt", json={"answers": answers}, headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["score"] == 75
    assert body["totalQuestions"] == 4
    assert body["correctAnswers"] == 3
    assert body["xpEarned"] == 75

    db.refresh(user)
    assert user.xp == 75


def test_answers_take_precedence_over_client_fields(client, auth_headers, make_user, quiz):
    make_user("reader")
    headers = auth_headers("reader")
    answers = answer_sheet(client, headers, quiz.id, ["X", "X", "X", "X"])

    response = client.post(
        f"/api/quizzes/{quiz.id}/attempt",
        json={"answers": answers, "score": 100, "totalQuestions": 4, "correctAnswers": 4, "xpEarned": 500},
        headers=headers,
    )

    body = response.json()
    assert body["score"] == 0
    assert body["xpEarned"] == 0


def test_client_scored_attempt(client, auth_headers, make_user, db, quiz):
    user = make_user("reader")

    response = client.post(
        f"/api/quizzes/{quiz.id}/attempt",
        json={"score": 50, "totalQuestions": 4, "correctAnswers": 2, "xpEarned": 40},
        headers=auth_headers("reader"),
    )

    assert response.status_code == 200
    assert response.json()["xpEarned"] == 40
    db.refresh(user)
    assert user.xp == 40


def test_client_scored_attempt_derives_missing_score(client, auth_headers, quiz):
    response = client.post(
        f"/api/quizzes/{quiz.id}/attempt",
        json={"totalQuestions": 3, "correctAnswers": 2},
        headers=auth_headers("reader"),
    )

    body = response.json()
    assert body["score"] == 67
    assert body["xpEarned"] == 0


@pytest.mark.parametrize("payload", [
    {},
    {"totalQuestions": 2, "correctAnswers": 3},
    {"score": 120, "totalQuestions": 4},
])
def test_invalid_attempt_payload(client, auth_headers, quiz, payload):
    response = client.post(f"/api/quizzes/{quiz.id}/attempt", json=payload, headers=auth_headers("reader"))

    assert response.status_code == 422
    assert response.json()["error"] == "validation_error"


def test_repeat_attempts_are_all_credited(client, auth_headers, make_user, db, quiz):
    user = make_user("reader", xp=950)
    headers = auth_headers("reader")
    answers = answer_sheet(client, headers, quiz.id, ["A", "B", "C", "D"])

    for _ in range(3):
        response = client.post(f"/api/quizzes/{quiz.id}/attempt", json={"answers": answers}, headers=headers)
        assert response.json()["xpEarned"] == 100

    db.refresh(user)
    assert user.xp == 1250
    assert user.level == 2
    assert db.query(QuizAttempt).filter(QuizAttempt.user_id == "reader").count() == 3

    history = client.get("/api/user/attempts", headers=headers).json()
    assert len(history) == 3
    assert all(entry["quizId"] == quiz.id for entry in history)


def test_attempt_creates_unknown_reader(client, auth_headers, db, quiz):
    client.post(
        f"/api/quizzes/{quiz.id}/attempt",
        json={"totalQuestions": 4, "correctAnswers": 4, "xpEarned": 10},
        headers=auth_headers("newcomer"),
    )

    user = db.query(User).filter(User.id == "newcomer").one()
    assert user.xp == 10


def test_failed_xp_credit_rolls_back_attempt(auth_headers, make_user, db, quiz, monkeypatch):
    user = make_user("reader", xp=300)

    def broken_award(*args, **kwargs):
        raise RuntimeError("xp store unavailable")

    monkeypatch.setattr(progression_service, "award_xp", broken_award)
    client = TestClient(app, raise_server_exceptions=False)

    response = client.post(
        f"/api/quizzes/{quiz.id}/attempt",
        json={"totalQuestions": 4, "correctAnswers": 4, "xpEarned": 100},
        headers=auth_headers("reader"),
    )

    assert response.status_code == 500
    assert response.json()["error"] == "internal_server_error"
    assert db.query(QuizAttempt).count() == 0
    db.refresh(user)
    assert user.xp == 300


def test_record_attempt_commits_attempt_and_xp_together(db, make_user, quiz):
    user = make_user("reader", xp=990)

    attempt = quiz_service.record_attempt(
        db, user_id="reader", quiz_id=quiz.id, score=100, total_questions=4, correct_answers=4, xp_earned=100
    )

    assert attempt.id is not None
    db.refresh(user)
    assert user.xp == 1090
    assert user.level == 2
