"""Integration tests for the /users endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from identity.api import router
from identity.user.user import User
from protean import current_domain
from protean.integrations.fastapi import register_exception_handlers


@pytest.fixture()
def client(auth):
    app = FastAPI()
    app.include_router(router)
    register_exception_handlers(app)
    return TestClient(app)


def _create(client, **overrides):
    payload = {
        "email": "jane.doe@example.com",
        "password": "correct-horse",
        "name": "Jane Doe",
        "username": "janed",
    }
    payload.update(overrides)
    response = client.post("/users", json=payload)
    assert response.status_code == 201
    return response.json()["user_id"]


class TestCreateUser:
    def test_returns_201_with_id(self, client):
        user_id = _create(client, address="12 Harbour Road")

        user = current_domain.repository_for(User).get(user_id)
        assert user.address == "12 Harbour Road"

    def test_duplicate_email_returns_400(self, client):
        _create(client)

        response = client.post(
            "/users",
            json={"email": "jane.doe@example.com", "password": "another-pass", "name": "J", "username": "j2"},
        )
        assert response.status_code == 400

    def test_short_password_is_rejected(self, client):
        response = client.post(
            "/users",
            json={"email": "x@example.com", "password": "123", "name": "X", "username": "x"},
        )
        assert response.status_code == 422


class TestReadUsers:
    def test_list(self, client):
        _create(client)
        _create(client, email="john@example.com", username="johnd")

        response = client.get("/users")
        assert response.status_code == 200
        assert {u["username"] for u in response.json()} == {"janed", "johnd"}

    def test_detail(self, client):
        user_id = _create(client)

        response = client.get(f"/users/{user_id}")
        assert response.status_code == 200
        assert response.json()["email"] == "jane.doe@example.com"
        assert response.json()["role"] == "user"


class TestUpdateAndDelete:
    def test_update(self, client):
        user_id = _create(client)

        response = client.put(f"/users/{user_id}", json={"phone_number": "555-0456"})
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert current_domain.repository_for(User).get(user_id).phone_number == "555-0456"

    def test_delete(self, client, auth):
        user_id = _create(client)

        response = client.delete(f"/users/{user_id}")
        assert response.status_code == 200
        assert auth.deleted_ids == [user_id]


class TestSignInAndSeed:
    def test_sign_in(self, client):
        _create(client)

        response = client.post("/users/sign-in", json={"email": "jane.doe@example.com", "password": "correct-horse"})
        assert response.status_code == 200
        assert response.json()["username"] == "janed"

    def test_sign_in_with_bad_password(self, client):
        _create(client)

        response = client.post("/users/sign-in", json={"email": "jane.doe@example.com", "password": "wrong"})
        assert response.status_code == 400

    def test_seed(self, client):
        response = client.post("/users/seed")
        assert response.status_code == 200
        assert len(response.json()["created"]) == 2
