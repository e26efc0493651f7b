"""
Post variants.

Plain posts and blog posts share one table. ``post_type`` is the only
discriminant; records written before it existed are classified by whether
they carry a title.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .blocks import Block


MAX_PLAIN_LENGTH = 280
TRIP_TYPES = ("Luxury", "Adventure", "Casual", "Wellness", "Eco")
DEFAULT_TRIP_TYPE = "Casual"

PLAIN = "plain"
BLOG = "blog"


@dataclass(frozen=True)
class PlainPost:
    content: str
    id: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[str] = None
    kind: str = field(default=PLAIN, init=False)


@dataclass(frozen=True)
class BlogPost:
    title: str
    blocks: List[Block] = field(default_factory=list)
    country: str = ""
    duration: str = ""
    trip_type: str = DEFAULT_TRIP_TYPE
    hashtags: str = ""
    id: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[str] = None
    kind: str = field(default=BLOG, init=False)


Post = Union[PlainPost, BlogPost]


def promote_cover_image(blocks: List[Block]) -> List[Block]:
    """
    Move the first image block that has a URL to the front.

    Order is otherwise preserved. Returns a new list; the input is left
    untouched. Running it on an already promoted list is a no-op.
    """
    for index, block in enumerate(blocks):
        if block.type == "image" and block.image_url:
            if index == 0:
                break
            return [block] + blocks[:index] + blocks[index + 1:]

    return list(blocks)


def block_to_record(block: Block) -> Dict[str, Any]:
    """Persisted shape of a block, with the url/alt convenience pair."""
    record = block.to_dict()
    record["url"] = block.image_url or None
    record["alt"] = (block.settings.get("alt") or "Post content") if block.type == "image" else None
    return record


def blog_payload(post: BlogPost) -> Dict[str, Any]:
    return {
        "post_type": BLOG,
        "title": post.title.strip(),
        "content": "",
        "blocks": [block_to_record(b) for b in promote_cover_image(post.blocks)],
        "country": post.country.strip(),
        "duration": post.duration.strip(),
        "trip_type": post.trip_type,
        "hashtags": post.hashtags.strip(),
    }


def post_from_record(record: Dict[str, Any]) -> Post:
    post_type = record.get("post_type")
    if post_type is None:
        post_type = BLOG if record.get("title") else PLAIN

    common = {
        "id": record.get("id"),
        "user_id": record.get("user_id"),
        "created_at": record.get("created_at"),
    }

    if post_type == PLAIN:
        return PlainPost(content=record.get("content") or "", **common)

    return BlogPost(
        title=record.get("title") or "",
        blocks=[Block.from_dict(b) for b in record.get("blocks") or []],
        country=record.get("country") or "",
        duration=record.get("duration") or "",
        trip_type=record.get("trip_type") or DEFAULT_TRIP_TYPE,
        hashtags=record.get("hashtags") or "",
        **common,
    )


def split_hashtags(hashtags: str) -> List[str]:
    return [tag if tag.startswith("#") else f"#{tag}" for tag in (hashtags or "").split()]
