import base64
import os
import sys

import pytest

CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# Settings читаются при импорте, поэтому окружение задаём до импорта приложения
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["CACHE_ENABLED"] = "false"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from courses_api.infrastructure.db import get_db
from courses_api.infrastructure.models import Base, CourseORM, UserORM
from courses_api.infrastructure.security import PasswordHasher
from courses_api.main import app

# Тестовая БД в памяти; StaticPool, чтобы все потоки видели одно соединение
test_engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

app.dependency_overrides[get_db] = override_get_db

@pytest.fixture
def tables():
    """Чистые таблицы на каждый тест"""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)

@pytest.fixture
def client(tables):
    yield TestClient(app)

@pytest.fixture
def db_session(tables):
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture
def make_user(db_session):
    """Создаёт пользователя напрямую в БД (пароль хэшируется)"""
    hasher = PasswordHasher()

    def _make(email="owner@school.edu", password="password123", first_name="Ada", last_name="Lovelace"):
        row = UserORM(
            first_name=first_name,
            last_name=last_name,
            email_address=email,
            password_hash=hasher.hash(password),
        )
        db_session.add(row); db_session.commit(); db_session.refresh(row)
        return row
    return _make

@pytest.fixture
def make_course(db_session):
    def _make(owner, title="Python Basics", description="Learn Python", **extra):
        row = CourseORM(title=title, description=description, user_id=owner.id, **extra)
        db_session.add(row); db_session.commit(); db_session.refresh(row)
        return row
    return _make

@pytest.fixture
def basic_auth():
    """Заголовок Authorization для Basic-схемы"""
    def _header(email, password):
        token = base64.b64encode(f"{email}:{password}".encode("utf-8")).decode("ascii")
        return {"Authorization": f"Basic {token}"}
    return _header
