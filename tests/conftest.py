"""Shared fixtures: an app on in-memory SQLite and a filesystem bucket."""

from __future__ import annotations

import io

import pytest
from PIL import Image

from amigo import create_app
from amigo.extensions import db


@pytest.fixture
def app(tmp_path):
    app = create_app("testing", UPLOAD_FOLDER=str(tmp_path / "uploads"))

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

    app.extensions["feed_cache"].close()


@pytest.fixture
def client(app):
    return app.test_client()


def _signup(client, email, password="secret123", username=None):
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": email, "password": password, "username": username},
    )
    assert response.status_code == 201, response.get_json()
    body = response.get_json()
    return {
        "id": body["user"]["id"],
        "token": body["access_token"],
        "headers": {"Authorization": f"Bearer {body['access_token']}"},
    }


@pytest.fixture
def signup(client):
    def factory(email="traveler@example.com", **kwargs):
        return _signup(client, email, **kwargs)

    return factory


@pytest.fixture
def alice(signup):
    return signup("alice@example.com", username="alice")


@pytest.fixture
def bob(signup):
    return signup("bob@example.com", username="bob")


def make_image_bytes(size=(64, 48), color=(200, 80, 40), fmt="PNG"):
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def image_bytes():
    return make_image_bytes()


@pytest.fixture
def make_image():
    return make_image_bytes
