import os
from datetime import datetime, timedelta, timezone

# Set testing environment before the application is imported
os.environ["TESTING"] = "1"
os.environ["TEST_DATABASE_URL"] = "sqlite:///./test.db"

import pytest
from fastapi.testclient import TestClient

from appointment_api.main import app
from appointment_api.core.database import Base, SessionLocal, engine, get_redis
from appointment_api import models  # noqa: F401

class RedisMock:
    """In-memory stand-in for the handful of Redis commands the rate limiter uses."""

    def __init__(self):
        self.data = {}

    def setex(self, key, time, value):
        self.data[key] = str(value)
        return True

    def get(self, key):
        return self.data.get(key)

    def incr(self, key):
        self.data[key] = str(int(self.data.get(key, "0")) + 1)
        return int(self.data[key])

# Test data
test_user_data = {
    "firstName": "John",
    "lastName": "Doe",
    "email": "john.doe@example.com",
    "password": "password123",
    "phoneNumber": "123-456-7890",
    "address": "123 Main St, Anytown USA"
}

other_user_data = {
    "firstName": "Jane",
    "lastName": "Emilie",
    "email": "jane.emilie@example.com",
    "password": "secret456",
    "phoneNumber": "523-456-110",
    "address": "77 Gol Mont, Townany Nepal"
}

def future_date(days: int = 7) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()

def past_date(days: int = 1) -> str:
    return (datetime.now(timezone.utc) - timedelta(days=days)).isoformat()

@pytest.fixture(scope="function")
def test_db():
    # Create tables
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture
def db_session(test_db):
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture
def redis_mock():
    mock = RedisMock()
    app.dependency_overrides[get_redis] = lambda: mock
    yield mock
    app.dependency_overrides.pop(get_redis, None)

@pytest.fixture
def client(test_db, redis_mock):
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client

def signup_and_signin(client, user_data) -> dict:
    """Register ``user_data`` and return its id and auth headers."""
    signup_response = client.post("/api/v1/users/signup", json=user_data)
    assert signup_response.status_code == 201

    signin_response = client.post(
        "/api/v1/users/signin",
        json={"email": user_data["email"], "password": user_data["password"]}
    )
    assert signin_response.status_code == 200

    body = signin_response.json()
    return {
        "id": body["id"],
        "headers": {"Authorization": f"Bearer {body['accessToken']}"},
        "refresh_token": body["refreshToken"],
    }

@pytest.fixture
def auth_user(client):
    return signup_and_signin(client, test_user_data)

@pytest.fixture
def other_user(client):
    return signup_and_signin(client, other_user_data)
