import io

import pytest
from PIL import Image

from amigo.domain.invariants.exceptions import ValidationError
from amigo.services.image_intake import (
    QUALITY_FLOOR,
    START_QUALITY,
    ImageIntake,
    compress_image,
    target_dimensions,
    transform_image,
)
from amigo.services.storage import LocalObjectStorage, StorageError


@pytest.mark.parametrize(
    "size, expected",
    [
        ((4000, 1000), (1920, 480)),
        ((1000, 3840), (500, 1920)),
        ((800, 600), (800, 600)),
        ((1920, 1920), (1920, 1920)),
    ],
)
def test_target_dimensions_scales_longest_side(size, expected):
    assert target_dimensions(*size) == expected


def test_small_image_is_encoded_once_at_start_quality(make_image):
    result = compress_image(make_image())

    assert result.quality == START_QUALITY
    assert result.attempts == 1
    assert result.content_type == "image/jpeg"
    assert Image.open(io.BytesIO(result.data)).format == "JPEG"


def test_large_image_is_downscaled(make_image):
    result = compress_image(make_image(size=(3000, 1500)))

    assert (result.width, result.height) == (1920, 960)
    assert Image.open(io.BytesIO(result.data)).size == (1920, 960)


def test_unreachable_budget_stops_at_quality_floor(make_image):
    result = compress_image(make_image(), max_bytes=1)

    assert result.quality == QUALITY_FLOOR
    assert result.attempts == 6
    assert result.size > 1


def test_corrupt_upload_is_a_validation_error():
    with pytest.raises(ValidationError) as exc_info:
        compress_image(b"definitely not an image")

    assert exc_info.value.field == "file"


def test_transform_resizes_and_converts(make_image):
    data, mimetype = transform_image(make_image(size=(400, 200)), width="100", format="png")

    assert mimetype == "image/png"
    assert Image.open(io.BytesIO(data)).size == (100, 50)


def test_intake_stores_compressed_jpeg(tmp_path, make_image):
    storage = LocalObjectStorage(tmp_path, "http://testserver")
    intake = ImageIntake(storage)

    url = intake.upload(make_image())

    path = storage.path_from_url(url)
    assert url.startswith("http://testserver/api/v1/storage/posts/post-images/")
    assert path.endswith(".jpg")
    assert Image.open(io.BytesIO(storage.read(path))).format == "JPEG"


def test_intake_propagates_storage_failure(make_image):
    class BrokenStorage:
        def upload(self, path, data, content_type):
            raise StorageError("bucket unavailable")

        def get_public_url(self, path, transform=None):
            raise AssertionError("no url for a failed upload")

    with pytest.raises(StorageError):
        ImageIntake(BrokenStorage()).upload(make_image())


def test_transform_never_enlarges(make_image):
    data, _ = transform_image(make_image(size=(400, 200)), width="10", height="100000", format="png")
    assert Image.open(io.BytesIO(data)).size == (400, 200)


def test_transform_with_both_sides_smaller(make_image):
    data, _ = transform_image(make_image(size=(400, 200)), width="100", height="100", format="png")
    assert Image.open(io.BytesIO(data)).size == (100, 100)
