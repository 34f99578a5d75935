# tests/conftest.py
import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from classgroups.domain.models import MBTI_TYPES, InterestStudent, MbtiStudent
from classgroups.infrastructure.db.session import get_db, init_db
from main import app

HOBBIES = [
    "chess", "reading", "music", "art", "sports", "coding", "dance",
    "cooking", "hiking", "gaming", "photography", "theatre",
]


@pytest.fixture
def fake():
    f = Faker()
    f.seed_instance(1234)
    return f


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    Session = sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)
    db = Session()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def client(db_session):
    app.dependency_overrides[get_db] = lambda: db_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def random_interest_roster(fake):
    def build(n):
        return [
            InterestStudent(
                id=f"s{i}",
                name=fake.name(),
                interests=fake.words(nb=3, ext_word_list=HOBBIES, unique=True),
            )
            for i in range(n)
        ]
    return build


@pytest.fixture
def random_mbti_roster(fake):
    def build(n):
        return [
            MbtiStudent(id=f"m{i}", name=fake.name(), mbti_type=fake.random_element(MBTI_TYPES))
            for i in range(n)
        ]
    return build
