"""Tests for operator authentication (bcrypt) and POST /api/login."""
from app.models.operator import Operator
from app.modules.auth import authenticate, create_operator, hash_password, verify_password

from tests.factories import TEST_PASSWORD, make_operator


class TestPasswordHashing:
    def test_hash_is_not_plaintext(self):
        hashed = hash_password("s3cret")
        assert hashed != "s3cret"
        assert hashed.startswith("$2")

    def test_verify_round(self):
        hashed = hash_password("s3cret")
        assert verify_password("s3cret", hashed) is True
        assert verify_password("wrong", hashed) is False

    def test_malformed_hash_is_rejected(self):
        assert verify_password("s3cret", "not-a-bcrypt-hash") is False


class TestAuthenticate:
    def test_success_stamps_last_login(self, db):
        make_operator(db)
        db.commit()

        operator = authenticate(db, "op1", TEST_PASSWORD)
        db.commit()

        assert operator is not None
        assert operator.last_login_time is not None

    def test_wrong_password(self, db):
        make_operator(db)
        db.commit()
        assert authenticate(db, "op1", "nope") is None
        assert db.query(Operator).one().last_login_time is None

    def test_unknown_user(self, db):
        assert authenticate(db, "ghost", TEST_PASSWORD) is None

    def test_create_operator_hashes_password(self, db):
        operator = create_operator(db, "admin", "hunter22", "Admin")
        db.commit()
        assert operator.password_hash != "hunter22"
        assert authenticate(db, "admin", "hunter22").operator_id == operator.operator_id


class TestLoginEndpoint:
    def test_success(self, client, db):
        make_operator(db, username="watch")
        db.commit()

        resp = client.post("/api/login", json={"username": "watch", "password": TEST_PASSWORD})

        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "Login successful"
        assert body["operator"]["username"] == "watch"
        assert body["operator"]["role"] == "Operator"
        assert "password_hash" not in body["operator"]

    def test_last_login_persisted(self, client, db):
        make_operator(db)
        db.commit()
        client.post("/api/login", json={"username": "op1", "password": TEST_PASSWORD})
        db.expire_all()
        assert db.query(Operator).one().last_login_time is not None

    def test_wrong_password_is_401(self, client, db):
        make_operator(db)
        db.commit()
        resp = client.post("/api/login", json={"username": "op1", "password": "bad"})
        assert resp.status_code == 401

    def test_unknown_user_is_401(self, client):
        resp = client.post("/api/login", json={"username": "ghost", "password": "x"})
        assert resp.status_code == 401

    def test_missing_password_is_400(self, client):
        resp = client.post("/api/login", json={"username": "op1"})
        assert resp.status_code == 400
