from tests.conftest import register, auth_header


class TestRegister:

    def test_register_grants_signup_bonus(self, client, mongo):
        res = register(client)

        assert res.status_code == 201
        body = res.get_json()
        assert body["access_token"]
        assert body["user"]["wallet_balance"] == 5000
        assert body["user"]["role"] == "user"
        assert mongo.wallet_transactions.count_documents({"type": "bonus", "amount": 5000}) == 1

    def test_register_stores_hashed_password(self, client, mongo):
        register(client, password="secret123")

        user = mongo.users.find_one({"email": "asha@predictx.io"})
        assert user["password_hash"] != "secret123"

    def test_duplicate_email_is_rejected(self, client):
        register(client)
        res = register(client, email="ASHA@predictx.io")

        assert res.status_code == 409

    def test_missing_fields(self, client):
        res = client.post("/api/v1/auth/register", json={"email": "x@predictx.io"})

        assert res.status_code == 400
        assert "error" in res.get_json()

    def test_body_must_be_an_object(self, client):
        res = client.post("/api/v1/auth/register", json=["asha@predictx.io", "secret123"])

        assert res.status_code == 400
        assert res.get_json()["error"] == "Request body must be a JSON object"

    def test_invalid_email(self, client):
        res = register(client, email="not-an-email")

        assert res.status_code == 400

    def test_short_password(self, client):
        res = register(client, password="abc")

        assert res.status_code == 400


class TestLogin:

    def test_login_returns_token(self, client):
        register(client)
        res = client.post("/api/v1/auth/login", json={"email": "asha@predictx.io", "password": "secret123"})

        assert res.status_code == 200
        assert res.get_json()["user"]["email"] == "asha@predictx.io"

    def test_wrong_password(self, client):
        register(client)
        res = client.post("/api/v1/auth/login", json={"email": "asha@predictx.io", "password": "wrong-pass"})

        assert res.status_code == 401

    def test_unknown_user(self, client):
        res = client.post("/api/v1/auth/login", json={"email": "ghost@predictx.io", "password": "secret123"})

        assert res.status_code == 401


class TestSession:

    def test_me(self, client, user):
        _, headers = user
        res = client.get("/api/v1/auth/me", headers=headers)

        assert res.status_code == 200
        assert res.get_json()["name"] == "Asha"
        assert "password_hash" not in res.get_json()

    def test_me_requires_token(self, client):
        res = client.get("/api/v1/auth/me")

        assert res.status_code == 401

    def test_logout_revokes_token(self, client, user):
        _, headers = user

        assert client.post("/api/v1/auth/logout", headers=headers).status_code == 200
        assert client.get("/api/v1/auth/me", headers=headers).status_code == 401

    def test_garbage_token(self, client):
        res = client.get("/api/v1/auth/me", headers=auth_header("not.a.token"))

        assert res.status_code == 401
