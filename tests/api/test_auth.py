"""
API tests for registration, login, logout and availability checks.

System role: Verification of the account access contract
"""

from explorely.boundary.db.models import AuthSessionModel, UserModel

DEFAULT_PASSWORD = "Passw0rdOK"


def _register_payload(username: str = "traveler1", **overrides) -> dict:
    return {
        "email": f"{username}@example.com",
        "password": DEFAULT_PASSWORD,
        "name": "Tess",
        "username": username,
        **overrides,
    }


class TestRegister:
    def test_register_returns_token_and_user(self, client) -> None:
        response = client.post("/auth/register", json=_register_payload())

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Registration successful"
        assert body["token"]
        assert body["user"]["username"] == "traveler1"
        assert body["user"]["isAdmin"] is False
        assert "token" in response.cookies

    def test_duplicate_email_is_conflict_and_creates_nothing(self, client, count_rows) -> None:
        client.post("/auth/register", json=_register_payload())

        response = client.post(
            "/auth/register",
            json=_register_payload(username="traveler2", email="traveler1@example.com"),
        )

        assert response.status_code == 409
        assert response.json()["message"] == "Email already registered"
        assert count_rows(UserModel) == 1

    def test_duplicate_username_is_conflict(self, client) -> None:
        client.post("/auth/register", json=_register_payload())

        response = client.post(
            "/auth/register", json=_register_payload(email="other@example.com")
        )

        assert response.status_code == 409
        assert response.json()["message"] == "Username already taken"

    def test_weak_password_is_rejected(self, client, count_rows) -> None:
        response = client.post("/auth/register", json=_register_payload(password="password"))

        assert response.status_code == 400
        assert "Password" in response.json()["message"]
        assert count_rows(UserModel) == 0

    def test_short_username_is_rejected(self, client) -> None:
        response = client.post("/auth/register", json=_register_payload(username="abc"))

        assert response.status_code == 400

    def test_malformed_email_is_rejected(self, client) -> None:
        response = client.post(
            "/auth/register", json=_register_payload(email="not an email")
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid email format"

    def test_long_password_registers_and_logs_in(self, client) -> None:
        long_password = "Aa1" + "x" * 80

        registered = client.post(
            "/auth/register", json=_register_payload(password=long_password)
        )
        login = client.post(
            "/auth/login",
            json={"email": "traveler1@example.com", "password": long_password},
        )

        assert registered.status_code == 201
        assert login.status_code == 200

    def test_missing_field_is_400_with_errors(self, client) -> None:
        response = client.post("/auth/register", json={"email": "a@b.co"})

        assert response.status_code == 400
        body = response.json()
        assert body["message"]
        assert body["errors"]


class TestLogin:
    def test_login_with_email_or_username(self, client, register) -> None:
        register("traveler1")

        by_email = client.post(
            "/auth/login",
            json={"email": "traveler1@example.com", "password": DEFAULT_PASSWORD},
        )
        by_username = client.post(
            "/auth/login", json={"email": "traveler1", "password": DEFAULT_PASSWORD}
        )

        assert by_email.status_code == 200
        assert by_username.status_code == 200
        assert by_email.json()["message"] == "Login successful"

    def test_wrong_password_is_401_without_session(self, client, register, count_rows) -> None:
        account = register("traveler1")
        sessions_before = count_rows(AuthSessionModel)

        response = client.post(
            "/auth/login",
            json={"email": "traveler1@example.com", "password": "Wr0ngPassword"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"
        assert count_rows(AuthSessionModel) == sessions_before
        assert count_rows(AuthSessionModel, AuthSessionModel.user_id == account["id"]) == 1

    def test_long_wrong_password_is_401(self, client, register) -> None:
        register("traveler1")

        response = client.post(
            "/auth/login",
            json={"email": "traveler1@example.com", "password": "Aa1" + "x" * 80},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_unknown_account_is_401(self, client) -> None:
        response = client.post(
            "/auth/login", json={"email": "ghost@example.com", "password": DEFAULT_PASSWORD}
        )

        assert response.status_code == 401


class TestSessions:
    def test_protected_requires_token(self, client) -> None:
        response = client.get("/auth/protected")

        assert response.status_code == 401
        assert response.json()["message"] == "Unauthorized access"

    def test_protected_accepts_bearer_token(self, client, register) -> None:
        account = register("traveler1")

        response = client.get("/auth/protected", headers=account["headers"])

        assert response.status_code == 200
        assert response.json()["message"] == "Welcome to the protected route!"

    def test_protected_accepts_cookie(self, client, register) -> None:
        account = register("traveler1")
        client.cookies.set("token", account["token"])

        response = client.get("/auth/protected")

        assert response.status_code == 200

    def test_forged_token_is_rejected(self, client) -> None:
        response = client.get(
            "/auth/protected", headers={"Authorization": "Bearer not-a-real-token"}
        )

        assert response.status_code == 401

    def test_logout_revokes_token(self, client, register, count_rows) -> None:
        account = register("traveler1")

        response = client.post("/auth/logout", headers=account["headers"])

        assert response.status_code == 200
        assert count_rows(AuthSessionModel, AuthSessionModel.user_id == account["id"]) == 0
        assert client.get("/auth/protected", headers=account["headers"]).status_code == 401

    def test_logout_without_token_still_succeeds(self, client) -> None:
        response = client.post("/auth/logout")

        assert response.status_code == 200

    def test_users_routes_share_the_auth_service(self, client) -> None:
        response = client.post("/api/users/register", json=_register_payload())

        assert response.status_code == 201
        login = client.post(
            "/api/users/login",
            json={"email": "traveler1@example.com", "password": DEFAULT_PASSWORD},
        )
        assert login.status_code == 200


class TestAvailability:
    def test_username_available(self, client) -> None:
        response = client.get("/auth/check-username", params={"username": "newcomer"})

        assert response.status_code == 200
        assert response.json()["message"] == "Username is available."

    def test_username_too_short(self, client) -> None:
        response = client.get("/auth/check-username", params={"username": "abc"})

        assert response.status_code == 400

    def test_username_taken(self, client, register) -> None:
        register("traveler1")

        response = client.get("/auth/check-username", params={"username": "traveler1"})

        assert response.status_code == 409

    def test_email_checks(self, client, register) -> None:
        register("traveler1")

        assert client.get("/auth/check-email", params={"email": "bad"}).status_code == 400
        assert (
            client.get("/auth/check-email", params={"email": "traveler1@example.com"}).status_code
            == 409
        )
        assert (
            client.get("/auth/check-email", params={"email": "fresh@example.com"}).status_code
            == 200
        )
