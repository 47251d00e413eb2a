import pytest

from weedwatch.app import create_app
from weedwatch.models import db


@pytest.fixture
def app(tmp_path):
    """Fresh app with an in-memory database and a throwaway upload folder."""
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "JWT_SECRET_KEY": "test-secret-key-that-is-long-enough-for-hs256",
        "UPSTREAM_URL": "http://upstream.test",
        "UPLOAD_FOLDER": str(tmp_path / "uploads"),
        "BCRYPT_LOG_ROUNDS": 4,
    })
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


def login_headers(client, email="a@x.com", password="p"):
    client.post("/signup", json={"email": email, "password": password})
    resp = client.post("/login", json={"email": email, "password": password})
    return {"Authorization": f"Bearer {resp.get_json()['token']}"}


@pytest.fixture
def auth_headers(client):
    return login_headers(client)
