def test_signup_returns_session(client):
    response = client.post("/api/v1/auth/signup", json={"email": "New@Example.com", "password": "secret123"})

    assert response.status_code == 201
    body = response.get_json()
    assert body["access_token"]
    assert body["user"]["email"] == "new@example.com"


def test_signup_validation(client, alice):
    short = client.post("/api/v1/auth/signup", json={"email": "x@example.com", "password": "123"})
    assert short.status_code == 400

    duplicate = client.post("/api/v1/auth/signup", json={"email": "alice@example.com", "password": "secret123"})
    assert duplicate.status_code == 409


def test_login(client, alice):
    ok = client.post("/api/v1/auth/login", json={"email": "alice@example.com", "password": "secret123"})
    assert ok.status_code == 200
    assert ok.get_json()["user"]["id"] == alice["id"]

    bad = client.post("/api/v1/auth/login", json={"email": "alice@example.com", "password": "wrong"})
    assert bad.status_code == 401


def test_session_reflects_token(client, alice):
    assert client.get("/api/v1/auth/session").get_json() == {"session": None}

    session = client.get("/api/v1/auth/session", headers=alice["headers"]).get_json()["session"]
    assert session["user"]["id"] == alice["id"]
    assert session["access_token"] == alice["token"]
    assert session["expires_at"]


def test_logout_revokes_token(client, alice):
    assert client.post("/api/v1/auth/logout", headers=alice["headers"]).status_code == 200
    assert client.get("/api/v1/users/me", headers=alice["headers"]).status_code == 401


def test_update_profile(client, alice, bob):
    response = client.put("/api/v1/users/me", json={"bio": "Always packing"}, headers=alice["headers"])
    assert response.status_code == 200
    assert response.get_json()["bio"] == "Always packing"

    taken = client.put("/api/v1/users/me", json={"username": "bob"}, headers=alice["headers"])
    assert taken.status_code == 409


def test_openapi_document_is_served(client):
    response = client.get("/openapi/feed.yaml")
    assert response.status_code == 200
    assert b"Amigo Feed API" in response.data
