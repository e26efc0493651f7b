import pytest

from amigo.services.storage import LocalObjectStorage, StorageError


@pytest.fixture
def storage(tmp_path):
    return LocalObjectStorage(tmp_path, "http://cdn.example/", bucket="posts")


def test_upload_writes_object_and_returns_public_url(storage):
    url = storage.upload("trips/a.jpg", b"jpeg-bytes", "image/jpeg")

    assert url == "http://cdn.example/api/v1/storage/posts/trips/a.jpg"
    assert storage.read("trips/a.jpg") == b"jpeg-bytes"


def test_upload_refuses_to_overwrite(storage):
    storage.upload("a.jpg", b"1", "image/jpeg")
    with pytest.raises(StorageError):
        storage.upload("a.jpg", b"2", "image/jpeg")


def test_paths_cannot_escape_bucket(storage):
    with pytest.raises(StorageError):
        storage.upload("../outside.jpg", b"x", "image/jpeg")


def test_public_url_carries_transform(storage):
    url = storage.get_public_url("a.jpg", transform={"width": 800, "format": "webp", "quality": 80})
    assert url == "http://cdn.example/api/v1/storage/posts/a.jpg?width=800&format=webp&quality=80"


def test_unknown_transform_option_is_rejected(storage):
    with pytest.raises(StorageError):
        storage.get_public_url("a.jpg", transform={"blur": 3})


def test_path_from_url(storage):
    assert storage.path_from_url(storage.get_public_url("x/y.jpg")) == "x/y.jpg"
    assert storage.path_from_url("https://elsewhere.example/y.jpg") is None
    assert storage.path_from_url("") is None


def test_delete(storage):
    storage.upload("a.jpg", b"1", "image/jpeg")
    assert storage.delete("a.jpg") is True
    assert storage.delete("a.jpg") is False
    with pytest.raises(FileNotFoundError):
        storage.read("a.jpg")
