"""Tests for the authentication endpoints."""

from ats_api.core.security import verify_token


def _cookie_token(set_cookie: str) -> str:
    return set_cookie.split(";", 1)[0].split("=", 1)[1]


def _login(client, password: str):
    return client.post(
        "/authentication/sessions", json={"email": "ada@example.com", "password": password}
    )


class TestRegister:
    def test_register(self, client):
        response = client.post(
            "/authentication/users",
            json={
                "firstName": "Marie",
                "lastName": "Curie",
                "email": "marie@example.com",
                "password": "radium-1898",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["user"]["email"] == "marie@example.com"
        assert data["user"]["slug"].startswith("marie-curie-")
        assert "password" not in data["user"]
        assert data["xsrfToken"]["expiresIn"] == 3600

        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("Authorization=")
        assert "HttpOnly" in set_cookie
        claims = verify_token(_cookie_token(set_cookie))
        assert claims["xsrf_token"] == data["xsrfToken"]["token"]

    def test_register_duplicate_email(self, client, test_user):
        response = client.post(
            "/authentication/users",
            json={
                "firstName": "Ada",
                "lastName": "King",
                "email": "ada@example.com",
                "password": "another-password",
            },
        )

        assert response.status_code == 400
        assert response.json() == {
            "status": 400,
            "message": "User with email ada@example.com already exists",
            "hint": "No hint available",
        }

    def test_register_invalid_body(self, client):
        response = client.post(
            "/authentication/users",
            json={"firstName": "Marie", "lastName": "Curie", "email": "nope", "password": "x"},
        )

        assert response.status_code == 400
        data = response.json()
        assert data["status"] == 400
        assert "email" in data["message"]
        assert "password" in data["message"]
        assert data["hint"] == "No hint available"

    def test_register_password_over_72_bytes(self, client):
        # 40 characters, 80 bytes in UTF-8
        response = client.post(
            "/authentication/users",
            json={
                "firstName": "Marie",
                "lastName": "Curie",
                "email": "marie@example.com",
                "password": "é" * 40,
            },
        )

        assert response.status_code == 400
        assert response.json()["message"] == (
            "password: Value error, password must not be longer than 72 bytes"
        )


class TestLogin:
    def test_login(self, client, test_user, test_password):
        response = _login(client, test_password)

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["id"] == test_user.id
        assert "password" not in data["user"]
        assert data["xsrfToken"]["token"]
        assert response.headers["set-cookie"].endswith("; Path=/; HttpOnly; Max-Age=432000")

    def test_login_wrong_password(self, client, test_user):
        response = _login(client, "wrong-password")

        assert response.status_code == 401
        assert response.json() == {
            "status": 401,
            "message": "Wrong credentials provided",
            "hint": "No hint available",
        }

    def test_login_unknown_email(self, client):
        response = client.post(
            "/authentication/sessions",
            json={"email": "nobody@example.com", "password": "whatever-password"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Wrong credentials provided"


class TestRefresh:
    def test_refresh_after_login(self, client, test_user, test_password):
        login = _login(client, test_password)
        refresh_token = _cookie_token(login.headers["set-cookie"])
        xsrf_token = login.json()["xsrfToken"]["token"]

        response = client.get(
            "/authentication/sessions/token",
            headers={"cookie": f"Authorization={refresh_token}", "x-xsrf-token": xsrf_token},
        )

        assert response.status_code == 200
        new_xsrf = response.json()["xsrfToken"]["token"]
        assert new_xsrf != xsrf_token
        claims = verify_token(_cookie_token(response.headers["set-cookie"]))
        assert claims["xsrf_token"] == new_xsrf
        assert claims["exp"] == verify_token(refresh_token)["exp"]

    def test_refresh_without_header(self, client, auth_headers):
        response = client.get(
            "/authentication/sessions/token", headers={"cookie": auth_headers["cookie"]}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Authentication token missing"

    def test_refresh_without_cookie(self, client, auth_headers):
        response = client.get(
            "/authentication/sessions/token",
            headers={"x-xsrf-token": auth_headers["x-xsrf-token"]},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Authentication token missing"

    def test_refresh_with_foreign_header(self, client, auth_headers, test_user, test_password):
        other_xsrf = _login(client, test_password).json()["xsrfToken"]["token"]

        response = client.get(
            "/authentication/sessions/token",
            headers={"cookie": auth_headers["cookie"], "x-xsrf-token": other_xsrf},
        )

        assert response.status_code == 401
        assert response.json() == {
            "status": 401,
            "message": "Wrong authentication token",
            "hint": "Either the token hasn't been issued by our service or it is expired",
        }


def test_logout_expires_cookie(client):
    response = client.delete("/authentication/sessions")

    assert response.status_code == 204
    assert response.headers["set-cookie"] == "Authorization=; Path=/; HttpOnly; Max-Age=0"


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.headers["x-response-time"].endswith("ms")
