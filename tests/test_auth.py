from datetime import datetime, timedelta, timezone

import jwt

from filedrop.core.security import create_access_token, decode_token, hash_password, verify_password
from helpers import auth_header, register_and_login


def test_register_then_duplicate_is_rejected(test_client):
    body = {"email": "bob@example.com", "password": "pw123456"}
    r = test_client.post("/register", json=body)
    assert r.status_code == 200, r.text
    assert r.json() == {"success": True, "message": "Registration successful."}

    r = test_client.post("/register", json=body)
    assert r.status_code == 409
    assert r.json() == {"success": False, "message": "Email already registered."}


def test_register_creates_user_folder(test_client, tmp_path):
    token = register_and_login(test_client, "carol@example.com")
    user_id = decode_token(token)["id"]
    assert (tmp_path / "uploads" / user_id).is_dir()


def test_register_missing_fields(test_client):
    r = test_client.post("/register", json={"email": "x@example.com"})
    assert r.status_code == 400
    assert r.json()["message"] == "Email and password required."

    r = test_client.post("/register", json={"email": "", "password": "abc"})
    assert r.status_code == 400


def test_register_malformed_body_is_400(test_client):
    r = test_client.post("/register", content=b"not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json()["success"] is False


def test_login_missing_fields(test_client):
    r = test_client.post("/login", json={"password": "abc"})
    assert r.status_code == 400


def test_login_unknown_email_and_wrong_password(test_client):
    register_and_login(test_client, "dave@example.com", "right-password")

    r = test_client.post("/login", json={"email": "nobody@example.com", "password": "x"})
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid credentials."

    r = test_client.post("/login", json={"email": "dave@example.com", "password": "wrong"})
    assert r.status_code == 401


def test_token_round_trips_to_identity(test_client):
    token = register_and_login(test_client, "erin@example.com")
    r = test_client.get("/me", headers=auth_header(token))
    assert r.status_code == 200
    me = r.json()
    assert me["email"] == "erin@example.com"
    assert me["id"] == decode_token(token)["id"]


def test_protected_route_without_token(test_client):
    r = test_client.get("/files")
    assert r.status_code == 401
    assert r.json()["message"] == "No token"


def test_protected_route_with_bad_token(test_client):
    r = test_client.get("/files", headers=auth_header("not.a.token"))
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid or expired token"


def test_expired_token_is_rejected(test_client):
    past = datetime.now(timezone.utc) - timedelta(hours=3)
    token = jwt.encode(
        {"id": "1", "email": "old@example.com", "iat": past, "exp": past + timedelta(hours=2)},
        "test-secret",
        algorithm="HS256",
    )
    r = test_client.get("/me", headers=auth_header(token))
    assert r.status_code == 401


def test_token_signed_with_other_secret_is_rejected(test_client):
    token = jwt.encode(
        {"id": "1", "email": "x@example.com", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        "another-secret",
        algorithm="HS256",
    )
    r = test_client.get("/me", headers=auth_header(token))
    assert r.status_code == 401


def test_password_hashing():
    hashed = hash_password("hunter22")
    assert hashed != "hunter22"
    assert verify_password("hunter22", hashed)
    assert not verify_password("hunter23", hashed)


def test_create_and_decode_token(test_client):
    payload = decode_token(create_access_token("42", "z@example.com"))
    assert payload["id"] == "42"
    assert payload["email"] == "z@example.com"
    assert payload["exp"] > payload["iat"]


def test_token_with_non_string_email_is_rejected(test_client):
    token = jwt.encode(
        {"id": "1", "email": 123, "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        "test-secret",
        algorithm="HS256",
    )
    r = test_client.get("/me", headers=auth_header(token))
    assert r.status_code == 401
    assert r.json() == {"success": False, "message": "Invalid or expired token"}


def test_register_password_over_bcrypt_limit(test_client):
    r = test_client.post("/register", json={"email": "long@example.com", "password": "a" * 73})
    assert r.status_code == 400
    assert r.json()["message"] == "Password too long (bcrypt is limited to 72 bytes)."

    # 72 bytes passe encore
    r = test_client.post("/register", json={"email": "long@example.com", "password": "a" * 72})
    assert r.status_code == 200
