import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from foxclub.config import settings
from foxclub.database import Base, enable_sqlite_foreign_keys, get_db
from foxclub.main import app
from foxclub.models.question import Question, QuestionFamily, QuestionType
from foxclub.models.user import User, UserRole, UserType
from foxclub.services.auth_service import hash_password

TEST_DB_URL = "sqlite:///./test_foxclub.db"

# 테스트에서는 bcrypt 최소 라운드로 해시 비용을 줄인다.
settings.BCRYPT_ROUNDS = 4

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
enable_sqlite_foreign_keys(engine)
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db

PASSWORDS = {
    "admin": "admin123",
    "member": "member123",
    "pending": "pending123",
    "moderator": "moderator123",
}


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


def make_user(pseudo: str, password: str, role=UserRole.USER, approved=True, types=None, email=None) -> User:
    user = User(
        pseudo=pseudo,
        email=email or f"{pseudo}@foxclub.test",
        first_name=pseudo.capitalize(),
        last_name="Fox",
        password_hash=hash_password(password),
        role=role,
        approved=approved,
    )
    user.types = types or []
    return user


@pytest.fixture
def seed_users(db):
    users = {
        "admin": make_user("admin", PASSWORDS["admin"], role=UserRole.ADMIN),
        "member": make_user("member", PASSWORDS["member"], types=[UserType.ETUDIANT]),
        "pending": make_user("pending", PASSWORDS["pending"], approved=False, types=[UserType.SOUMIS]),
        "moderator": make_user("moderator", PASSWORDS["moderator"], role=UserRole.MODERATOR),
    }
    for u in users.values():
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


@pytest.fixture
def seed_catalog(db):
    sorties = QuestionFamily(label="Sorties", type=QuestionType.TYPE_1, order=1)
    voyages = QuestionFamily(label="Voyages", type=QuestionType.TYPE_2, order=2)
    db.add_all([sorties, voyages])
    db.flush()
    questions = {
        "restaurant": Question(question_family_id=sorties.family_id, text="Restaurant", order=1),
        "cinema": Question(question_family_id=sorties.family_id, text="Cinema", order=2),
        "rando": Question(question_family_id=voyages.family_id, text="Randonnee", order=1),
    }
    db.add_all(questions.values())
    db.commit()
    db.refresh(sorties)
    db.refresh(voyages)
    for q in questions.values():
        db.refresh(q)
    return {"type1": sorties, "type2": voyages, "questions": questions}


def get_token(client, identifier: str, password: str | None = None) -> str:
    resp = client.post(
        "/api/auth/login",
        json={"identifier": identifier, "password": password or PASSWORDS[identifier]},
    )
    assert resp.status_code == 200, resp.text
    return resp.json()["accessToken"]


def auth_headers(client, identifier: str, password: str | None = None) -> dict:
    return {"Authorization": f"Bearer {get_token(client, identifier, password)}"}
