"""End-to-end tests through the FastAPI transport."""

import pytest

from app.models import Favorite, Movie, User, UserActivity
from app.utils.config import settings
from tests.conftest import JANE, bearer


def _login(client, email="jane@example.com", password="Strong@123"):
    return client.post("/api/auth/login", json={"email": email, "password": password})


@pytest.fixture
def registered(client):
    response = client.post("/api/auth/register", json=JANE)
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture
def token(client, registered):
    response = _login(client)
    client.cookies.clear()
    return response.json()["data"]["token"]


class TestRegisterEndpoint:
    def test_register_created_without_hashes(self, client):
        response = client.post("/api/auth/register", json=JANE)
        body = response.json()
        assert response.status_code == 201
        assert body["status"] == "success"
        assert body["data"]["email"] == "jane@example.com"
        assert "password" not in body["data"]
        assert "security_answer" not in body["data"]

    def test_register_accepts_snake_case(self, client):
        payload = {
            "first_name": "Jane",
            "last_name": "Doe",
            "age": 25,
            "email": "jane@example.com",
            "password": "Strong@123",
            "security_question": "Pet name?",
            "security_answer": "Rex",
        }
        assert client.post("/api/auth/register", json=payload).status_code == 201

    def test_missing_field(self, client):
        payload = {k: v for k, v in JANE.items() if k != "securityAnswer"}
        response = client.post("/api/auth/register", json=payload)
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert User.objects.count() == 0

    def test_unknown_field_rejected(self, client):
        response = client.post("/api/auth/register", json={**JANE, "tokenVersion": 5})
        assert response.status_code == 400
        assert User.objects.count() == 0

    @pytest.mark.parametrize("age", [12, 121])
    def test_age_bounds(self, client, age):
        response = client.post("/api/auth/register", json={**JANE, "age": age})
        assert response.status_code == 400

    def test_weak_password(self, client):
        response = client.post("/api/auth/register", json={**JANE, "password": "abc12345"})
        assert response.status_code == 400
        assert response.json()["code"] == "WEAK_PASSWORD"

    def test_nul_byte_password(self, client):
        response = client.post("/api/auth/register", json={**JANE, "password": "Strong@123\u0000"})
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert User.objects.count() == 0

    def test_password_beyond_bcrypt_limit(self, client):
        """A suffix past 72 bytes would be ignored at login, so it is refused up front."""
        response = client.post("/api/auth/register", json={**JANE, "password": "Strong@123" + "x" * 63})
        assert response.status_code == 400
        assert response.json()["code"] == "WEAK_PASSWORD"

    def test_duplicate_email(self, client, registered):
        response = client.post("/api/auth/register", json={**JANE, "email": "Jane@Example.com"})
        assert response.status_code == 409
        assert response.json()["code"] == "EMAIL_TAKEN"


class TestLoginEndpoint:
    def test_login_sets_http_only_cookie(self, client, registered):
        response = _login(client)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["token"]
        assert data["user"]["id"] == registered["id"]
        assert response.cookies.get(settings.cookie_name) == data["token"]
        assert "httponly" in response.headers["set-cookie"].lower()

    def test_wrong_password_and_unknown_email_match(self, client, registered):
        wrong = _login(client, password="Wrong@123")
        unknown = _login(client, email="nobody@example.com")
        assert wrong.status_code == unknown.status_code == 401
        assert wrong.json()["code"] == unknown.json()["code"] == "INVALID_CREDENTIALS"
        assert wrong.json()["message"] == unknown.json()["message"]


class TestProtectedEndpoints:
    def test_no_token(self, client):
        response = client.get("/api/users/profile")
        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_TOKEN"

    def test_bearer_token(self, client, token):
        response = client.get("/api/users/profile", headers=bearer(token))
        assert response.status_code == 200
        assert response.json()["data"]["email"] == "jane@example.com"

    def test_cookie_token(self, client, registered):
        _login(client)
        assert client.get("/api/users/profile").status_code == 200

    def test_update_profile(self, client, token):
        response = client.put("/api/users/profile", json={"firstName": "Janet"}, headers=bearer(token))
        assert response.status_code == 200
        assert response.json()["data"]["user"]["first_name"] == "Janet"
        assert response.json()["data"]["updated_fields"] == ["first_name"]

    def test_activity_history(self, client, token):
        response = client.get("/api/users/activity", headers=bearer(token))
        actions = [a["action"] for a in response.json()["data"]["activities"]]
        assert set(actions) == {"Registered", "Logged in"}


class TestSessionRevocation:
    def test_logout_revokes_token(self, client, token):
        response = client.post("/api/auth/logout", headers=bearer(token))
        assert response.status_code == 200

        response = client.get("/api/users/profile", headers=bearer(token))
        assert response.status_code == 401
        assert response.json()["code"] == "SESSION_EXPIRED"

    def test_logout_without_token_succeeds(self, client):
        assert client.post("/api/auth/logout").status_code == 200

    def test_change_password_then_reuse_old_token(self, client, token):
        response = client.put(
            "/api/users/change-password",
            json={"currentPassword": "Strong@123", "newPassword": "Newer@456"},
            headers=bearer(token),
        )
        assert response.status_code == 200
        assert User.objects.first().token_version == 1

        response = client.get("/api/users/profile", headers=bearer(token))
        assert response.json()["code"] == "SESSION_EXPIRED"
        assert _login(client, password="Newer@456").status_code == 200

    def test_change_password_wrong_current(self, client, token):
        response = client.put(
            "/api/users/change-password",
            json={"currentPassword": "Wrong@123", "newPassword": "Newer@456"},
            headers=bearer(token),
        )
        assert response.status_code == 400
        assert response.json()["code"] == "WRONG_CURRENT_PASSWORD"


class TestRecoveryEndpoints:
    def test_forgot_password_known_email(self, client, registered):
        response = client.post("/api/users/forgot-password", json={"email": "jane@example.com"})
        assert response.json()["data"] == {"security_question": "Pet name?"}

    def test_forgot_password_unknown_email_is_neutral(self, client):
        response = client.post("/api/users/forgot-password", json={"email": "nobody@example.com"})
        assert response.status_code == 200
        assert response.json()["data"] == {"security_question": None}

    def test_reset_with_wrong_answer(self, client, registered):
        before = User.objects.first()
        response = client.post(
            "/api/users/reset-password-secret",
            json={"email": "jane@example.com", "answer": "Max", "newPassword": "Newer@456"},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "WRONG_ANSWER"
        after = User.objects.first()
        assert after.password == before.password
        assert after.token_version == before.token_version == 0

    def test_reset_with_answer(self, client, registered):
        response = client.post(
            "/api/users/reset-password-secret",
            json={"email": "jane@example.com", "answer": "Rex", "newPassword": "Newer@456"},
        )
        assert response.status_code == 200
        assert _login(client, password="Newer@456").status_code == 200


class TestAccountDeletion:
    def test_delete_cascades_to_favorites_and_activity(self, client, token, registered):
        owner = User.objects(id=registered["id"]).first()
        movie = Movie(title="Inception", genre=["sci-fi"], year=2010, user=owner).save()
        assert client.post("/api/favorites", json={"movieId": str(movie.id)}, headers=bearer(token)).status_code == 201

        response = client.delete("/api/users/profile", headers=bearer(token))
        assert response.status_code == 200
        assert User.objects.count() == 0
        assert Favorite.objects.count() == 0
        assert Movie.objects.count() == 0
        assert UserActivity.objects.count() == 0

        assert client.get("/api/users/profile", headers=bearer(token)).json()["code"] == "INVALID_TOKEN"


class TestErrorEnvelope:
    def test_details_hidden_in_production(self, client, monkeypatch):
        monkeypatch.setattr(settings, "environment", "production")
        response = client.post("/api/auth/register", json={})
        assert response.status_code == 400
        assert response.json()["details"] is None

    def test_details_shown_outside_production(self, client):
        response = client.post("/api/auth/register", json={})
        fields = {err["field"] for err in response.json()["details"]["errors"]}
        assert "firstName" in fields

    def test_server_error_is_generic(self, client, flow, monkeypatch):
        def boom(email):
            raise RuntimeError("connection reset")

        monkeypatch.setattr(flow.store, "find_by_email", boom)
        response = _login(client)
        assert response.status_code == 500
        assert response.json()["code"] == "SERVER_ERROR"
        assert response.json()["message"] == "Server error"

    def test_failure_after_flow_still_uses_envelope(self, lenient_client, monkeypatch):
        """A crash outside the flow is rendered as SERVER_ERROR JSON, not plain text."""

        def boom(*args, **kwargs):
            raise RuntimeError("activity store down")

        monkeypatch.setattr("app.api.auth.record_activity", boom)
        response = lenient_client.post("/api/auth/register", json=JANE)
        assert response.status_code == 500
        assert response.json()["status"] == "error"
        assert response.json()["code"] == "SERVER_ERROR"


class TestAccountDeletionOrder:
    def test_failed_cascade_keeps_user(self, lenient_client, token, monkeypatch):
        """Dependents are removed before the user, so a failed cascade leaves the account intact."""

        def boom(user_id):
            raise RuntimeError("activity store down")

        monkeypatch.setattr("app.services.activity.delete_for_user", boom)
        response = lenient_client.delete("/api/users/profile", headers=bearer(token))
        assert response.status_code == 500
        assert User.objects.count() == 1
        assert lenient_client.get("/api/users/profile", headers=bearer(token)).status_code == 200
