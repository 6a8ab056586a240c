"""Seed the database with demo users and a sample question catalog."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from foxclub.database import SessionLocal, engine, Base
import foxclub.models  # noqa: F401

from foxclub.models.form import FormAnswer, UserForm
from foxclub.models.question import Question, QuestionFamily, QuestionType
from foxclub.models.user import User, UserRole, UserType
from foxclub.services.auth_service import hash_password

FAMILIES = [
    ("Sorties", QuestionType.TYPE_1, ["Restaurant", "Cinema", "Concert"]),
    ("Ateliers", QuestionType.TYPE_1, ["Cuisine", "Poterie", "Photographie"]),
    ("Jeux", QuestionType.TYPE_1, ["Jeux de societe", "Escape game", "Quiz"]),
    ("Voyages", QuestionType.TYPE_2, ["Week-end a la mer", "Randonnee", "City trip"]),
    ("Sport", QuestionType.TYPE_2, ["Natation", "Escalade", "Yoga"]),
]


def _user(pseudo, email, first_name, last_name, password, role, types, approved):
    user = User(
        pseudo=pseudo,
        email=email,
        first_name=first_name,
        last_name=last_name,
        password_hash=hash_password(password),
        role=role,
        approved=approved,
    )
    user.types = types
    return user


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(User).count() > 0:
            print("Database already seeded. Skipping.")
            return

        admin = _user("admin", "admin@foxclub.com", "Admin", "Fox", "admin123", UserRole.ADMIN, [], True)
        demo = _user("demo_user", "user@foxclub.com", "Demo", "User", "user123", UserRole.USER, [UserType.ETUDIANT], True)
        pending = _user(
            "pending_user", "pending@foxclub.com", "Pending", "User", "pending123", UserRole.USER, [UserType.SOUMIS], False
        )
        db.add_all([admin, demo, pending])
        db.flush()

        first_question = None
        for family_order, (label, family_type, texts) in enumerate(FAMILIES, start=1):
            family = QuestionFamily(label=label, type=family_type, order=family_order)
            db.add(family)
            db.flush()
            for question_order, text in enumerate(texts, start=1):
                question = Question(question_family_id=family.family_id, text=text, order=question_order)
                db.add(question)
                db.flush()
                if first_question is None:
                    first_question = question
            print(f"  family '{label}' ({family_type.value}) with {len(texts)} questions")

        form = UserForm(user_id=demo.user_id, submitted=False)
        db.add(form)
        db.flush()
        db.add(FormAnswer(
            form_id=form.form_id,
            question_id=first_question.question_id,
            score=2,
            top=True,
            talk=True,
            notes="Exemple de note",
        ))

        db.commit()
        print("Seed completed: admin/admin123, demo_user/user123, pending_user/pending123")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed()
