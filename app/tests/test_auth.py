import uuid

from app.models.user import User


def _register_user(client, email=None, password="Password123!", name="Test User"):
    if email is None:
        email = f"user_{uuid.uuid4().hex[:8]}@example.com"
    payload = {"name": name, "email": email, "password": password}
    r = client.post("/auth/", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


def _login(client, email, password="Password123!"):
    # OAuth2PasswordRequestForm expects form data
    return client.post("/auth/login", data={"username": email, "password": password})


def test_register_user_success(client, db_session):
    data = _register_user(client, email="new@example.com", name="New")
    assert data["email"] == "new@example.com"
    assert data["name"] == "New"
    assert "password" not in data and "password_hash" not in data

    user = db_session.query(User).filter_by(email="new@example.com").one()
    assert user.password_hash != "Password123!"


def test_register_rejects_taken_email(client):
    _register_user(client, email="taken@example.com")
    r = client.post(
        "/auth/",
        json={"name": "Again", "email": "taken@example.com", "password": "Password123!"},
    )
    assert r.status_code == 400


def test_register_validates_body(client):
    r = client.post("/auth/", json={"name": "x", "email": "not-an-email", "password": "short"})
    assert r.status_code == 422


def test_login_returns_a_token_that_authenticates(client):
    data = _register_user(client, name="Jo")
    r = _login(client, data["email"])
    assert r.status_code == 200, r.text
    token = r.json()
    assert token["token_type"] == "bearer"

    me = client.get("/users/", headers={"Authorization": f"Bearer {token['access_token']}"})
    assert me.status_code == 200
    assert me.json()["id"] == data["id"]
    assert me.json()["name"] == "Jo"


def test_login_with_wrong_password_fails(client):
    data = _register_user(client)
    r = _login(client, data["email"], password="wrong-password")
    assert r.status_code == 401


def test_invalid_token_is_rejected(client):
    r = client.get("/favorites", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401


def test_public_user_profile(client, make_user):
    user = make_user(name="Public")
    r = client.get(f"/users/{user.id}")
    assert r.status_code == 200
    assert r.json() == {"id": user.id, "name": "Public"}
    assert client.get("/users/999").status_code == 404


def test_health_check(client):
    assert client.get("/healthy").json() == {"status": "Healthy"}
