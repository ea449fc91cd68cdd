from unittest.mock import patch

from courses_api.domain.errors import DuplicateEmailError
from courses_api.infrastructure.models import UserORM

NEW_USER = {
    "firstName": "Grace",
    "lastName": "Hopper",
    "emailAddress": "grace@school.edu",
    "password": "compiler1",
}

def test_register_user_success(client, db_session):
    """Регистрация: 201, Location, пароль хранится только хэшем"""
    response = client.post("/api/users", json=NEW_USER)
    assert response.status_code == 201
    assert response.headers["location"] == "/"
    assert response.content == b""

    row = db_session.query(UserORM).filter(UserORM.email_address == "grace@school.edu").one()
    assert row.first_name == "Grace"
    assert row.password_hash != "compiler1"

def test_register_user_validation_errors_are_collected(client):
    response = client.post("/api/users", json={"emailAddress": "bad", "password": "123"})
    assert response.status_code == 400
    errors = response.json()["errors"]
    assert 'Please provide a value for "first name"' in errors
    assert 'Please provide a value for "last name"' in errors
    assert "Please provide a valid email address" in errors
    assert "Password length must be between 8 and 20 characters" in errors

def test_register_user_wrong_types_is_400(client):
    response = client.post("/api/users", json={**NEW_USER, "firstName": ["not", "a", "string"]})
    assert response.status_code == 400
    assert response.json()["errors"]

def test_register_user_invalid_json_is_400(client):
    response = client.post(
        "/api/users",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400

def test_register_user_duplicate(client, make_user):
    make_user(email="grace@school.edu")
    response = client.post("/api/users", json=NEW_USER)
    assert response.status_code == 400
    assert response.json() == {"errors": ["Email must be unique. This email already exists."]}

def test_register_user_race_on_unique_email(client):
    """Уникальность, нарушенная на уровне БД, тоже даёт 400"""
    with patch(
        "courses_api.infrastructure.repositories.UserRepository.create",
        side_effect=DuplicateEmailError("email already exists"),
    ):
        response = client.post("/api/users", json=NEW_USER)
    assert response.status_code == 400
    assert response.json() == {"errors": ["Email must be unique. This email already exists."]}

def test_current_user(client, make_user, basic_auth):
    user = make_user(email="ada@school.edu", password="password123")
    response = client.get("/api/users", headers=basic_auth("ada@school.edu", "password123"))
    assert response.status_code == 200
    assert response.json() == {
        "id": user.id,
        "firstName": "Ada",
        "lastName": "Lovelace",
        "emailAddress": "ada@school.edu",
    }

def test_current_user_without_header(client):
    response = client.get("/api/users")
    assert response.status_code == 401
    assert response.json() == {"message": "Access Denied"}
    assert response.headers["www-authenticate"].startswith("Basic")

def test_unknown_email_and_wrong_password_look_the_same(client, make_user, basic_auth):
    """Клиент не может отличить несуществующий email от неверного пароля"""
    make_user(email="ada@school.edu", password="password123")
    unknown = client.get("/api/users", headers=basic_auth("nobody@school.edu", "password123"))
    wrong = client.get("/api/users", headers=basic_auth("ada@school.edu", "wrongpass1"))

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json() == {"message": "Access Denied"}

def test_malformed_header_is_401(client):
    response = client.get("/api/users", headers={"Authorization": "Basic %%%"})
    assert response.status_code == 401
    assert response.json() == {"message": "Access Denied"}

def test_non_ascii_header_is_401(client):
    """Не-ASCII в заголовке (latin-1 от Starlette) -> обычный 401, а не 500"""
    response = client.get("/api/users", headers={"Authorization": b"Basic \xe9t\xe9"})
    assert response.status_code == 401
    assert response.json() == {"message": "Access Denied"}
