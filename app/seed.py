"""
Database seeding script
Creates tables, sample content from "I Promessi Sposi" and an admin user

Usage:
    python -m app.seed --admin-user editor --admin-password secret
"""
import argparse
import logging

from sqlalchemy.orm import Session

from app.database import SessionLocal, init_db
from app.models import Chapter, Quiz, QuizQuestion, Badge, DailyChallenge, AdminUser
from app.services import auth_service
from app.utils.clock import utcnow, get_zone, day_window

logger = logging.getLogger(__name__)

SAMPLE_CHAPTERS = [
    {
        "number": 1,
        "title": "Don Abbondio e i bravi",
        "content": (
            "<p>Quel ramo del lago di Como, che volge a mezzogiorno, tra due catene non "
            "interrotte di monti, tutto a seni e a golfi...</p>"
        ),
        "summary": "Il romanzo inizia con la descrizione del lago di Como e l'incontro di don Abbondio con i bravi.",
        "reading_time": 15,
        "is_locked": False,
    },
    {
        "number": 2,
        "title": "Renzo e Lucia",
        "content": (
            "<p>Il sole non era ancora tutto apparso sull'orizzonte, quando Renzo usci "
            "dalla sua casetta...</p>"
        ),
        "summary": "Renzo e Lucia si preparano per il matrimonio, ma un ostacolo inatteso li attende.",
        "reading_time": 12,
        "is_locked": False,
    },
    {
        "number": 3,
        "title": "Il matrimonio impedito",
        "content": (
            "<p>Don Abbondio, che gia da qualche tempo andava ogni giorno piu facilmente "
            "in collera...</p>"
        ),
        "summary": "Don Abbondio rifiuta di celebrare il matrimonio.",
        "reading_time": 14,
        "is_locked": True,
    },
]

SAMPLE_QUIZ = {
    "title": "Quiz - Capitolo 1",
    "description": "Verifica la comprensione del primo capitolo",
    "xp_reward": 100,
    "questions": [
        {
            "question": "Su quale lago si apre il romanzo?",
            "type": "multiple_choice",
            "options": ["Lago di Garda", "Lago di Como", "Lago Maggiore", "Lago d'Iseo"],
            "correct_answer": "Lago di Como",
            "explanation": "Il celebre incipit descrive il ramo del lago di Como.",
            "order": 1,
        },
        {
            "question": "Don Abbondio e un curato.",
            "type": "true_false",
            "options": ["true", "false"],
            "correct_answer": "true",
            "order": 2,
        },
    ],
}

SAMPLE_BADGES = [
    {"name": "Primo Passo", "description": "Hai completato il primo capitolo",
     "icon": "fas fa-star", "type": "chapter", "requirement": {"chapter": 1}, "xp_reward": 50},
    {"name": "Lettore Assiduo", "description": "Hai letto 3 capitoli consecutivi",
     "icon": "fas fa-book-open", "type": "achievement", "requirement": {"consecutive_chapters": 3}, "xp_reward": 100},
    {"name": "Quiz Master", "description": "Hai superato 5 quiz con punteggio perfetto",
     "icon": "fas fa-trophy", "type": "quiz", "requirement": {"perfect_quizzes": 5}, "xp_reward": 200},
    {"name": "Streak di Fuoco", "description": "Hai mantenuto una streak di 7 giorni",
     "icon": "fas fa-fire", "type": "streak", "requirement": {"streak_days": 7}, "xp_reward": 150},
]


def seed_content(db: Session) -> None:
    """Insert sample content; rows that already exist are skipped"""

    for data in SAMPLE_CHAPTERS:
        if not db.query(Chapter).filter(Chapter.number == data["number"]).first():
            db.add(Chapter(**data))
    db.commit()
    logger.info(f"Chapters: {db.query(Chapter).count()}")

    first = db.query(Chapter).filter(Chapter.number == 1).first()
    if not db.query(Quiz).filter(Quiz.chapter_id == first.id).first():
        quiz_data = dict(SAMPLE_QUIZ)
        questions = quiz_data.pop("questions")
        quiz = Quiz(chapter_id=first.id, **quiz_data)
        db.add(quiz)
        db.flush()
        for q in questions:
            db.add(QuizQuestion(quiz_id=quiz.id, **q))
        db.commit()
        logger.info(f"Quiz created for chapter 1 with {len(questions)} questions")

    for data in SAMPLE_BADGES:
        if not db.query(Badge).filter(Badge.name == data["name"]).first():
            db.add(Badge(**data))
    db.commit()

    start, end = day_window(utcnow(), get_zone())
    exists = db.query(DailyChallenge).filter(
        DailyChallenge.date >= start, DailyChallenge.date < end
    ).first()
    if not exists:
        db.add(DailyChallenge(
            title="Lettore del Giorno",
            description="Leggi 3 capitoli oggi per completare la sfida giornaliera",
            type="reading",
            requirement={"chapters_to_read": 3, "target": 3},
            xp_reward=150,
            coin_reward=50,
            date=start,
            is_active=True,
        ))
        db.commit()
        logger.info("Daily challenge created for today")


def seed_admin(db: Session, username: str, password: str) -> None:
    if db.query(AdminUser).filter(AdminUser.username == username).first():
        logger.info(f"Admin user '{username}' already exists")
        return
    auth_service.create_admin_user(db, username, password)


def main():
    parser = argparse.ArgumentParser(description="Seed the reading companion database")
    parser.add_argument("--admin-user", help="Admin username to create")
    parser.add_argument("--admin-password", help="Admin password to create")
    parser.add_argument("--skip-content", action="store_true", help="Only create the admin user")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    init_db()

    db = SessionLocal()
    try:
        if not args.skip_content:
            seed_content(db)
        if args.admin_user and args.admin_password:
            seed_admin(db, args.admin_user, args.admin_password)
        elif args.admin_user or args.admin_password:
            parser.error("--admin-user and --admin-password must be given together")
    finally:
        db.close()

    logger.info("Seeding complete")


if __name__ == "__main__":
    main()
