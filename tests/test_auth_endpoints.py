"""
Endpoint tests for registration, login and the current-user lookup.
"""


class TestRegister:

    def test_register_returns_user_and_token(self, client):
        resp = client.post("/api/auth/register", json={
            "email": "Alice@Example.com", "password": "secret123", "role": "parent",
            "first_name": "Alice", "last_name": "Liddell",
        })
        assert resp.status_code == 201
        body = resp.json()
        assert body["token"]
        assert body["user"]["email"] == "alice@example.com"
        assert body["user"]["role"] == "parent"
        assert "password" not in body["user"]
        assert "password_hash" not in body["user"]

    def test_duplicate_email_fails(self, client, register):
        register("alice@example.com", "parent")
        resp = client.post("/api/auth/register", json={
            "email": "alice@example.com", "password": "other-pass", "role": "ncd_patient",
            "first_name": "A", "last_name": "B",
        })
        assert resp.status_code == 400
        assert resp.json()["code"] == "duplicate_email"

    def test_provider_requires_facility_name(self, client):
        resp = client.post("/api/auth/register", json={
            "email": "doc@example.com", "password": "secret123", "role": "healthcare_provider",
            "first_name": "Doc", "last_name": "Who",
        })
        assert resp.status_code == 400
        body = resp.json()
        assert body["code"] == "validation_error"
        assert any("facility_name" in e["message"] for e in body["errors"])

    def test_unknown_role_is_rejected(self, client):
        resp = client.post("/api/auth/register", json={
            "email": "root@example.com", "password": "secret123", "role": "superadmin",
            "first_name": "R", "last_name": "T",
        })
        assert resp.status_code == 400
        assert any(e["field"] == "role" for e in resp.json()["errors"])

    def test_short_password_is_rejected(self, client):
        resp = client.post("/api/auth/register", json={
            "email": "x@example.com", "password": "123", "role": "parent",
            "first_name": "X", "last_name": "Y",
        })
        assert resp.status_code == 400
        assert any(e["field"] == "password" for e in resp.json()["errors"])


class TestLogin:

    def test_login_succeeds(self, client, alice):
        resp = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "secret123"})
        assert resp.status_code == 200
        assert resp.json()["user"]["id"] == alice["user"]["id"]
        assert resp.json()["token"]

    def test_login_is_case_insensitive_on_email(self, client, alice):
        resp = client.post("/api/auth/login", json={"email": "ALICE@example.com", "password": "secret123"})
        assert resp.status_code == 200

    def test_wrong_password_and_unknown_email_are_indistinguishable(self, client, alice):
        wrong = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "nope-nope"})
        missing = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "secret123"})
        assert wrong.status_code == missing.status_code == 401
        assert wrong.json() == missing.json()
        assert wrong.json()["code"] == "invalid_credentials"


class TestMe:

    def test_me_returns_caller(self, client, alice, auth_headers):
        resp = client.get("/api/auth/me", headers=auth_headers(alice["token"]))
        assert resp.status_code == 200
        assert resp.json()["email"] == "alice@example.com"

    def test_missing_token_is_unauthenticated(self, client):
        resp = client.get("/api/auth/me")
        assert resp.status_code == 401
        assert resp.json()["code"] == "unauthenticated"

    def test_bad_token_is_invalid(self, client, auth_headers):
        resp = client.get("/api/auth/me", headers=auth_headers("garbage"))
        assert resp.status_code == 401
        assert resp.json()["code"] == "invalid_token"


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
