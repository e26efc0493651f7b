from typing import Any, Dict
from amigo.extensions import db
from amigo.models.post import Post
from amigo.domain.invariants.post import assert_plain_content
from amigo.domain.posts import PLAIN, BLOG
from amigo.utils.audit import log_action
from amigo.utils.transaction import transactional


def create_plain_post(*, author_id: str, content: str) -> Post:
    """
    Create a short text post.

    Content is validated before anything touches the database.
    """
    assert_plain_content(content)

    post = Post()
    post.user_id = author_id
    post.post_type = PLAIN
    post.content = content

    with transactional():
        db.session.add(post)
        db.session.flush()

        log_action(
            action="post.create",
            entity_type="post",
            entity_id=post.id,
            payload={"post_type": PLAIN, "length": len(content)},
        )

    return post


def add_blog_post(*, author_id: str, payload: Dict[str, Any]) -> Post:
    """
    Stage a blog post built by the composer in the current session.

    The caller owns the transaction so the post can be written together
    with other changes (e.g. removing the draft it came from).
    """
    post = Post()
    post.user_id = author_id
    post.post_type = BLOG
    post.title = payload["title"]
    post.content = payload.get("content", "")
    post.blocks = payload["blocks"]
    post.country = payload["country"]
    post.duration = payload["duration"]
    post.trip_type = payload["trip_type"]
    post.hashtags = payload.get("hashtags", "")

    db.session.add(post)
    db.session.flush()

    log_action(
        action="post.create",
        entity_type="post",
        entity_id=post.id,
        payload={"post_type": BLOG, "blocks": len(post.blocks)},
    )
    return post
