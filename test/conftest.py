import uuid
import pytest
from fastapi.testclient import TestClient
from app.application import create_application
from app.config.environments import Settings
from app.utility.storage import MediaStorage

USERS_URL = "/api/v1/users"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class FakeMediaStorage(MediaStorage):
    """MediaStorage whose Supabase calls are replaced by in-memory bookkeeping."""

    def __init__(self):
        super().__init__("https://project.supabase.co", "service-key", "images")
        self.fail = False
        self.fail_attempts = set()  # 0-based upload attempts that raise
        self.before_upload = None
        self.attempts = 0
        self.uploaded = []
        self.removed = []

    def _upload(self, local_path):
        attempt = self.attempts
        self.attempts += 1
        if self.before_upload:
            self.before_upload(attempt)
        if self.fail or attempt in self.fail_attempts:
            raise RuntimeError("media host unavailable")
        with open(local_path, "rb") as f:
            content = f.read()
        url = f"https://media.example.com/storage/v1/object/public/images/{uuid.uuid4()}.png"
        self.uploaded.append((url, content))
        return url

    def _remove(self, filename):
        self.removed.append(filename)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'videotube.db'}",
        access_token_secret="access-secret-for-tests",
        refresh_token_secret="refresh-secret-for-tests",
        supabase_project_url="https://project.supabase.co",
        supabase_service_key="service-key",
        static_dir=str(tmp_path / "public"),
        temp_dir=str(tmp_path / "public" / "temp"),
        log_level="DEBUG",
    )


@pytest.fixture
def storage():
    return FakeMediaStorage()


@pytest.fixture
def application(settings, storage):
    return create_application(settings, storage=storage)


@pytest.fixture
def client(application):
    with TestClient(application) as client:
        yield client


def register_user(client, username="abc", email="a@b.com", full_name="A B", password="pw",
                  avatar=True, cover_image=False):
    files = {}
    if avatar:
        files["avatar"] = ("avatar.png", PNG_BYTES, "image/png")
    if cover_image:
        files["coverImage"] = ("cover.png", PNG_BYTES, "image/png")

    return client.post(
        f"{USERS_URL}/register",
        data={"username": username, "email": email, "fullName": full_name, "password": password},
        files=files or None,
    )


def login_user(client, password="pw", **identity):
    identity = identity or {"username": "abc"}
    return client.post(f"{USERS_URL}/login", json={**identity, "password": password})


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def set_cookie_headers(response):
    return response.headers.get_list("set-cookie")


def cookie_names(response):
    return sorted(header.split("=", 1)[0] for header in set_cookie_headers(response))
