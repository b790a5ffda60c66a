import io


def register_and_login(client, email="alice@example.com", password="s3cret-pass"):
    r = client.post("/register", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    r = client.post("/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["token"]


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def upload(client, token, name, content: bytes, content_type="application/octet-stream"):
    files = {"file": (name, io.BytesIO(content), content_type)}
    return client.post("/upload", files=files, headers=auth_header(token))
