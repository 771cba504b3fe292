import logging

import pytest

from habitat_layout.accounts import InMemoryUserRepository
from habitat_layout.server import create_app
from habitat_layout.settings import AppSettings
from habitat_layout.storage import InMemoryHabitatStore, JsonFileHabitatStore

DESIGN = {
    "config": {
        "destination": "moon",
        "crewSize": 4,
        "duration": 30,
        "habitatType": "inflatable",
        "length": 15,
        "diameter": 8,
        "floors": 1,
    },
    "zones": [{"id": 1, "type": "sleep", "x": 120, "y": 140, "width": 300, "height": 300}],
}


@pytest.fixture
def store():
    return InMemoryHabitatStore()


@pytest.fixture
def client(store, tmp_path):
    settings = AppSettings(data_path=tmp_path / "habitats.json", secret_key="test-secret")
    app = create_app(settings, store=store, users=InMemoryUserRepository())
    app.config["TESTING"] = True
    return app.test_client()


def test_save_and_list(client, store):
    response = client.post("/api/save", json=DESIGN)
    assert response.status_code == 200
    body = response.get_json()
    assert body["message"] == "Habitat saved successfully"
    assert body["habitat"]["zones"] == DESIGN["zones"]
    assert "id" in body["habitat"]

    listing = client.get("/api/habitats")
    assert listing.status_code == 200
    assert listing.get_json() == [body["habitat"]]
    assert listing.headers["Access-Control-Allow-Origin"] == "*"


def test_save_missing_zones_is_client_error(client, store):
    response = client.post("/api/save", json={"config": DESIGN["config"]})
    assert response.status_code == 400
    assert response.get_json() == {"message": "Invalid habitat data"}
    assert store.list_all() == []


def test_save_storage_failure(tmp_path):
    path = tmp_path / "habitats.json"
    store = JsonFileHabitatStore(path)
    path.write_text("garbage")
    app = create_app(AppSettings(data_path=path), store=store)
    response = app.test_client().post("/api/save", json=DESIGN)
    assert response.status_code == 500
    body = response.get_json()
    assert body["message"] == "Error saving habitat"
    assert body["error"]

    listing = app.test_client().get("/api/habitats")
    assert listing.status_code == 500
    assert listing.get_json()["message"] == "Error reading habitats"


def test_default_store_is_json_file(tmp_path):
    path = tmp_path / "nested" / "habitats.json"
    app = create_app(AppSettings(data_path=path))
    app.test_client().post("/api/save", json=DESIGN)
    assert path.exists()
    assert len(app.test_client().get("/api/habitats").get_json()) == 1


def test_evaluate_layout(client):
    response = client.post("/api/layout/evaluate", json=DESIGN)
    assert response.status_code == 200
    body = response.get_json()
    assert body["breakdown"]["score"] == 64
    assert body["zones"][0]["status"] == "ok"
    assert len(body["summary"]["missing"]) == 9


def test_evaluate_rejects_bad_config(client):
    response = client.post("/api/layout/evaluate", json={"config": {"destination": "venus"}, "zones": []})
    assert response.status_code == 400
    assert response.get_json()["message"] == "Invalid design payload"


def test_evaluate_rejects_unknown_zone_type(client):
    design = {"config": DESIGN["config"], "zones": [{"id": 1, "type": "pool", "width": 10, "height": 10}]}
    response = client.post("/api/layout/evaluate", json=design)
    assert response.status_code == 400


def test_catalog(client):
    body = client.get("/api/catalog").get_json()
    assert len(body["zoneTypes"]) == 10
    assert body["zoneTypes"][0]["minArea"] == 40
    assert [d["id"] for d in body["destinations"]] == ["moon", "mars", "transit"]


def test_signup_login_profile(client):
    signup = client.post("/signup", json={"name": "Ada", "email": "ada@example.com", "password": "pw"})
    assert signup.status_code == 201
    token = signup.get_json()["token"]

    duplicate = client.post("/signup", json={"name": "B", "email": "ada@example.com", "password": "x"})
    assert duplicate.status_code == 400
    assert duplicate.get_json()["message"] == "Email already registered"

    login = client.post("/login", json={"email": "ada@example.com", "password": "pw"})
    assert login.status_code == 200
    assert login.get_json()["user"]["name"] == "Ada"

    profile = client.get("/profile", headers={"Authorization": f"Bearer {token}"})
    assert profile.status_code == 200
    assert profile.get_json()["user"]["email"] == "ada@example.com"
    assert "createdAt" in profile.get_json()["user"]

    users = client.get("/users").get_json()
    assert users["total"] == 1


def test_signup_missing_fields(client):
    response = client.post("/signup", json={"email": "ada@example.com"})
    assert response.status_code == 400
    assert response.get_json()["message"] == "All fields required"


def test_login_failures(client):
    client.post("/signup", json={"name": "Ada", "email": "ada@example.com", "password": "pw"})
    assert client.post("/login", json={"email": "x@example.com", "password": "pw"}).get_json()["message"] == "Invalid email"
    wrong = client.post("/login", json={"email": "ada@example.com", "password": "nope"})
    assert wrong.status_code == 400
    assert wrong.get_json()["message"] == "Invalid password"


def test_profile_token_errors(client):
    missing = client.get("/profile")
    assert missing.status_code == 401
    assert missing.get_json()["message"] == "No token provided"

    invalid = client.get("/profile", headers={"Authorization": "Bearer not-a-token"})
    assert invalid.status_code == 401
    assert invalid.get_json()["message"] == "Invalid token"


def test_non_string_password_is_client_error(client):
    signup = client.post("/signup", json={"name": "A", "email": "a@example.com", "password": 123})
    assert signup.status_code == 400
    assert signup.get_json() == {"message": "All fields required"}

    client.post("/signup", json={"name": "A", "email": "a@example.com", "password": "pw"})
    login = client.post("/login", json={"email": "a@example.com", "password": 123})
    assert login.status_code == 400
    assert login.get_json() == {"message": "Invalid password"}

    odd_email = client.post("/login", json={"email": ["a@example.com"], "password": "pw"})
    assert odd_email.status_code == 400
    assert odd_email.get_json() == {"message": "Invalid email"}


class BrokenUserRepository(InMemoryUserRepository):
    def add(self, user):
        raise RuntimeError("user store offline")

    def find_by_email(self, email):
        raise RuntimeError("user store offline")


def test_unexpected_account_failure_returns_json(tmp_path):
    app = create_app(AppSettings(data_path=tmp_path / "habitats.json"), users=BrokenUserRepository())
    client = app.test_client()

    signup = client.post("/signup", json={"name": "A", "email": "a@example.com", "password": "pw"})
    assert signup.status_code == 500
    assert signup.get_json() == {"message": "Signup failed", "error": "user store offline"}

    login = client.post("/login", json={"email": "a@example.com", "password": "pw"})
    assert login.status_code == 500
    assert login.get_json() == {"message": "Login failed", "error": "user store offline"}


def test_requests_and_logins_are_logged(client, caplog):
    caplog.set_level(logging.INFO, logger="habitat_layout")
    client.post("/signup", json={"name": "Ada", "email": "ada@example.com", "password": "pw"})
    client.post("/login", json={"email": "ada@example.com", "password": "pw"})
    client.post("/login", json={"email": "nobody@example.com", "password": "pw"})
    client.get("/profile", headers={"Authorization": "Bearer not-a-token"})

    messages = [record.getMessage() for record in caplog.records]
    assert "POST /login -> 200" in messages
    assert any(message.endswith("logged in") for message in messages)
    assert "Failed login, unknown email nobody@example.com" in messages
    assert "Token with bad signature presented" in messages
    assert "GET /profile -> 401" in messages
