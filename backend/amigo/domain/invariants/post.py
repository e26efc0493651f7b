from amigo.domain.posts import MAX_PLAIN_LENGTH, TRIP_TYPES
from .block import assert_blocks
from .exceptions import ValidationError


def assert_plain_content(content):
    if content is not None and not isinstance(content, str):
        raise ValidationError("Post content must be text", field="content")

    if not content or not content.strip():
        raise ValidationError("Post content is required", field="content")

    if len(content) > MAX_PLAIN_LENGTH:
        raise ValidationError(
            f"Posts are limited to {MAX_PLAIN_LENGTH} characters",
            field="content",
        )


def assert_blog_metadata(*, title, country, duration, trip_type):
    # Checked in form order so the first missing field is reported.
    if not (title or "").strip():
        raise ValidationError("Please add a title", field="title")

    if not (country or "").strip():
        raise ValidationError("Please add a country", field="country")

    if not (duration or "").strip():
        raise ValidationError(
            'Please add duration (e.g., "5 days", "2 weeks")',
            field="duration",
        )

    if trip_type not in TRIP_TYPES:
        raise ValidationError(f"Unknown trip type: {trip_type}", field="trip_type")


def assert_blog_post(post):
    assert_blog_metadata(
        title=post.title,
        country=post.country,
        duration=post.duration,
        trip_type=post.trip_type,
    )
    assert_blocks(post.blocks)
