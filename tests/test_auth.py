import pytest

# Test data
test_user_data = {
    "email": "test@example.com",
    "password": "TestPassword123",
    "fullName": "Test User",
    "username": "testuser"
}

test_login_data = {
    "email": "test@example.com",
    "password": "TestPassword123"
}

def _login(client):
    client.post("/api/auth/register", json=test_user_data)
    return client.post("/api/auth/login", json=test_login_data)

class TestAuthentication:

    def test_register_user(self, client):
        """Test user registration."""
        response = client.post("/api/auth/register", json=test_user_data)
        assert response.status_code == 201

        data = response.json()
        assert data["email"] == test_user_data["email"]
        assert data["fullName"] == test_user_data["fullName"]
        assert data["role"] == "patient"
        assert "password" not in data
        assert "passwordHash" not in data

    def test_register_ignores_requested_role(self, client):
        """Registration always creates patients."""
        response = client.post("/api/auth/register", json={**test_user_data, "role": "admin"})
        assert response.status_code == 201
        assert response.json()["role"] == "patient"

    def test_register_duplicate_email(self, client):
        """Test registration with duplicate email."""
        client.post("/api/auth/register", json=test_user_data)

        response = client.post("/api/auth/register", json=test_user_data)
        assert response.status_code == 400
        assert "already registered" in response.json()["detail"]

    def test_register_short_password(self, client):
        """Passwords need at least six characters."""
        invalid_data = test_user_data.copy()
        invalid_data["password"] = "weak"

        response = client.post("/api/auth/register", json=invalid_data)
        assert response.status_code == 400
        assert response.json()["error"] == "Validation Error"

    @pytest.mark.parametrize("field, value", [
        ("email", "not-an-email"),
        ("fullName", "   "),
    ])
    def test_register_invalid_fields(self, client, field, value):
        response = client.post("/api/auth/register", json={**test_user_data, field: value})
        assert response.status_code == 400

    def test_login_success(self, client):
        """Test successful login."""
        response = _login(client)
        assert response.status_code == 200

        data = response.json()
        assert "access_token" in data
        assert "refresh_token" in data
        assert data["token_type"] == "bearer"
        assert data["user"]["email"] == test_user_data["email"]

    def test_login_invalid_credentials(self, client):
        """Test login with unknown email."""
        response = client.post("/api/auth/login", json={
            "email": "nonexistent@example.com",
            "password": "wrongpassword"
        })
        assert response.status_code == 401

    def test_login_wrong_password(self, client):
        """Test login with wrong password."""
        client.post("/api/auth/register", json=test_user_data)

        wrong_login = test_login_data.copy()
        wrong_login["password"] = "wrongpassword"

        response = client.post("/api/auth/login", json=wrong_login)
        assert response.status_code == 401

    def test_login_rate_limited(self, client, monkeypatch):
        """Repeated login attempts are throttled."""
        monkeypatch.setattr("medibook.api.deps.settings", type("S", (), {
            "RATE_LIMIT_REQUESTS": 3,
            "RATE_LIMIT_WINDOW_SECONDS": 60,
        })())

        statuses = [
            client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "secret1"}).status_code
            for _ in range(4)
        ]
        assert statuses == [401, 401, 401, 429]

    def test_get_current_user(self, client):
        """Test getting current user info."""
        token = _login(client).json()["access_token"]
        headers = {"Authorization": f"Bearer {token}"}

        response = client.get("/api/auth/me", headers=headers)
        assert response.status_code == 200
        assert response.json()["email"] == test_user_data["email"]

    def test_get_current_user_invalid_token(self, client):
        """Test get current user with invalid token."""
        headers = {"Authorization": "Bearer invalid_token"}

        response = client.get("/api/auth/me", headers=headers)
        assert response.status_code == 401

    def test_get_current_user_without_token(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401

    def test_refresh_token_cannot_authenticate_requests(self, client):
        refresh_token = _login(client).json()["refresh_token"]

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {refresh_token}"})
        assert response.status_code == 401

    def test_refresh_token(self, client):
        """Test token refresh."""
        refresh_token = _login(client).json()["refresh_token"]

        response = client.post(
            "/api/auth/refresh",
            json={"refresh_token": refresh_token}
        )
        assert response.status_code == 200

        data = response.json()
        assert "access_token" in data
        assert data["refresh_token"] != refresh_token

    def test_refresh_token_is_single_use(self, client):
        refresh_token = _login(client).json()["refresh_token"]
        client.post("/api/auth/refresh", json={"refresh_token": refresh_token})

        response = client.post("/api/auth/refresh", json={"refresh_token": refresh_token})
        assert response.status_code == 401

    def test_refresh_invalid_token(self, client):
        """Test refresh with invalid token."""
        response = client.post(
            "/api/auth/refresh",
            json={"refresh_token": "invalid_token"}
        )
        assert response.status_code == 401

    def test_logout(self, client):
        """Logout revokes the refresh token."""
        refresh_token = _login(client).json()["refresh_token"]

        response = client.post(
            "/api/auth/logout",
            json={"refresh_token": refresh_token}
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Successfully logged out"

        response = client.post("/api/auth/refresh", json={"refresh_token": refresh_token})
        assert response.status_code == 401
