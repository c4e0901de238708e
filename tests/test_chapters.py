from datetime import datetime

from app.models import Chapter, ChapterProgress, GlossaryTerm
from app.services.content_service import content_service


def test_list_chapters_ordered_by_number(client, auth_headers, db):
    db.add_all([
        Chapter(number=3, title="Tre", content="c3"),
        Chapter(number=1, title="Uno", content="c1"),
        Chapter(number=2, title="Due", content="c2", is_locked=True),
    ])
    db.commit()

    response = client.get("/api/chapters", headers=auth_headers("reader"))

    assert response.status_code == 200
    chapters = response.json()
    assert [c["number"] for c in chapters] == [1, 2, 3]
    assert chapters[1]["isLocked"] is True
    assert chapters[0]["readingTime"] == 10


def test_get_chapter(client, auth_headers, chapter):
    headers = auth_headers("reader")

    response = client.get(f"/api/chapters/{chapter.id}", headers=headers)
    assert response.status_code == 200
    assert response.json()["title"] == "Don Abbondio e i bravi"

    missing = client.get("/api/chapters/999", headers=headers)
    assert missing.status_code == 404
    assert missing.json() == {"error": "http_error", "message": "Chapter not found", "status_code": 404}


def test_chapters_require_auth(client, chapter):
    response = client.get("/api/chapters")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_rejects_foreign_token(client, chapter):
    response = client.get("/api/chapters", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401


def test_progress_upsert_creates_then_updates(client, auth_headers, db, chapter):
    headers = auth_headers("reader")
    url = f"/api/chapters/{chapter.id}/progress"

    first = client.post(url, json={"progressPercentage": 30}, headers=headers)
    assert first.status_code == 200
    assert first.json()["progressPercentage"] == 30
    assert first.json()["isCompleted"] is False

    second = client.post(url, json={"progressPercentage": 100, "isCompleted": True}, headers=headers)
    body = second.json()
    assert body["id"] == first.json()["id"]
    assert body["progressPercentage"] == 100
    assert body["isCompleted"] is True
    assert body["completedAt"] is not None

    assert db.query(ChapterProgress).count() == 1

    progress = client.get("/api/user/progress", headers=headers).json()
    assert [(p["chapterId"], p["progressPercentage"]) for p in progress] == [(chapter.id, 100)]


def test_progress_update_keeps_unsent_fields(db, make_user, chapter):
    make_user("reader")
    finished = datetime(2024, 3, 1, 12, 0)

    content_service.update_chapter_progress(
        db, "reader", chapter.id, 100, is_completed=True, completed_at=finished
    )
    row = content_service.update_chapter_progress(db, "reader", chapter.id, 80)

    assert row.progress_percentage == 80
    assert row.is_completed is True
    assert row.completed_at == finished


def test_progress_unknown_chapter(client, auth_headers):
    response = client.post("/api/chapters/999/progress", json={"progressPercentage": 10}, headers=auth_headers("reader"))

    assert response.status_code == 404


def test_progress_out_of_range(client, auth_headers, chapter):
    response = client.post(
        f"/api/chapters/{chapter.id}/progress", json={"progressPercentage": 101}, headers=auth_headers("reader")
    )

    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "validation_error"
    assert body["fields"][0]["field"] == "progressPercentage"


def test_chapter_quizzes(client, auth_headers, quiz):
    headers = auth_headers("reader")

    quizzes = client.get(f"/api/chapters/{quiz.chapter_id}/quizzes", headers=headers).json()
    assert [q["id"] for q in quizzes] == [quiz.id]

    assert client.get("/api/chapters/999/quizzes", headers=headers).status_code == 404


def test_user_stats(client, auth_headers, make_user, db, quiz):
    make_user("reader", xp=1200)
    headers = auth_headers("reader")
    client.post(f"/api/chapters/{quiz.chapter_id}/progress", json={"progressPercentage": 100, "isCompleted": True}, headers=headers)
    client.post(
        f"/api/quizzes/{quiz.id}/attempt",
        json={"score": 100, "totalQuestions": 4, "correctAnswers": 4, "xpEarned": 100},
        headers=headers,
    )
    client.post(
        f"/api/quizzes/{quiz.id}/attempt",
        json={"score": 50, "totalQuestions": 4, "correctAnswers": 2, "xpEarned": 50},
        headers=headers,
    )

    stats = client.get("/api/user/stats", headers=headers).json()

    assert stats["xp"] == 1350
    assert stats["level"] == 2
    assert stats["xpToNextLevel"] == 650
    assert stats["totalChapters"] == 1
    assert stats["completedChapters"] == 1
    assert stats["quizAttempts"] == 2
    assert stats["averageQuizScore"] == 75.0
    assert stats["perfectQuizzes"] == 1
    assert stats["quizXpEarned"] == 150
    assert stats["badges"] == 0


def test_glossary_is_public(client, db):
    db.add_all([
        GlossaryTerm(term="Bravi", definition="Sgherri al servizio dei signorotti", category="personaggi"),
        GlossaryTerm(term="Azzeccagarbugli", definition="Avvocato di Lecco", category="personaggi"),
        GlossaryTerm(term="Lecco", definition="Citta sul lago", category="luoghi"),
    ])
    db.commit()

    terms = client.get("/api/glossary").json()
    assert [t["term"] for t in terms] == ["Azzeccagarbugli", "Bravi", "Lecco"]

    people = client.get("/api/glossary?category=personaggi").json()
    assert {t["term"] for t in people} == {"Azzeccagarbugli", "Bravi"}

    assert client.get(f"/api/glossary/{terms[0]['id']}").json()["definition"] == "Avvocato di Lecco"
    assert client.get("/api/glossary/999").status_code == 404


def test_completed_at_with_offset_is_stored_as_utc(client, auth_headers, db, chapter):
    response = client.post(
        f"/api/chapters/{chapter.id}/progress",
        json={"progressPercentage": 100, "isCompleted": True, "completedAt": "2024-03-01T01:30:00+02:00"},
        headers=auth_headers("reader"),
    )

    assert response.status_code == 200
    assert response.json()["completedAt"] == "2024-02-29T23:30:00"

    row = db.query(ChapterProgress).one()
    assert row.completed_at == datetime(2024, 2, 29, 23, 30)
