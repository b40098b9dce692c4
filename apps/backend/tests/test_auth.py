def _register(client, email, password="sugar-rush-123"):
    return client.post("/api/auth/register", json={"email": email, "password": password})


def test_register_returns_user_and_tokens(client, unique_email):
    response = _register(client, unique_email)
    assert response.status_code == 201
    data = response.json()
    assert data["user"]["email"] == unique_email
    assert data["user"]["role"] == "user"
    assert data["tokens"]["token_type"] == "bearer"
    assert data["tokens"]["access_token"]
    assert data["tokens"]["refresh_token"]


def test_register_duplicate_email_conflicts(client, unique_email):
    assert _register(client, unique_email).status_code == 201
    response = _register(client, unique_email)
    assert response.status_code == 409
    assert response.json() == {"status": "error", "message": "Email already registered"}


def test_register_rejects_unknown_role(client, unique_email):
    response = client.post(
        "/api/auth/register",
        json={"email": unique_email, "password": "sugar-rush-123", "role": "owner"},
    )
    assert response.status_code == 400


def test_register_validates_body(client):
    response = client.post("/api/auth/register", json={"email": "not-an-email", "password": "short"})
    assert response.status_code == 422
    body = response.json()
    assert body["status"] == "error"
    assert body["message"] == "Invalid request"
    assert body["errors"]


def test_login_with_wrong_password_is_unauthorized(client, unique_email):
    _register(client, unique_email)
    response = client.post("/api/auth/login", json={"email": unique_email, "password": "wrong-password"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid email or password"


def test_login_accepts_urlencoded_form(client, unique_email):
    _register(client, unique_email)
    response = client.post(
        "/api/auth/login",
        data={"email": unique_email, "password": "sugar-rush-123"},
    )
    assert response.status_code == 200
    assert response.json()["user"]["email"] == unique_email


def test_malformed_json_is_a_client_error(client):
    response = client.post(
        "/api/auth/login",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"status": "error", "message": "Malformed JSON body"}


def test_refresh_rotates_tokens(client, unique_email):
    tokens = _register(client, unique_email).json()["tokens"]

    response = client.post("/api/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert response.status_code == 200
    rotated = response.json()
    assert rotated["refresh_token"] != tokens["refresh_token"]

    # The old refresh token was revoked by the rotation
    reused = client.post("/api/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert reused.status_code == 401

    # The new one works
    again = client.post("/api/auth/refresh", json={"refresh_token": rotated["refresh_token"]})
    assert again.status_code == 200


def test_refresh_rejects_access_token(client, unique_email):
    tokens = _register(client, unique_email).json()["tokens"]
    response = client.post("/api/auth/refresh", json={"refresh_token": tokens["access_token"]})
    assert response.status_code == 401


def test_me_returns_current_user(client, unique_email):
    tokens = _register(client, unique_email).json()["tokens"]
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {tokens['access_token']}"})
    assert response.status_code == 200
    assert response.json()["email"] == unique_email


def test_me_requires_bearer_token(client):
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer nonsense"}).status_code == 401
