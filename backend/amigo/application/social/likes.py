from typing import Dict
from amigo.extensions import db
from amigo.models.like import Like
from amigo.models.post import Post
from amigo.utils.audit import log_action
from amigo.utils.transaction import transactional
from .notify import add_notification


def toggle_like(*, post: Post, user_id: str) -> Dict[str, object]:
    """Like the post, or remove the like if it already exists."""
    existing = Like.query.filter_by(post_id=post.id, user_id=user_id).first()

    with transactional():
        if existing:
            db.session.delete(existing)
            liked = False
        else:
            like = Like()
            like.post_id = post.id
            like.user_id = user_id
            db.session.add(like)
            add_notification(user_id=post.user_id, type="like", actor_id=user_id, post_id=post.id)
            liked = True

        log_action(
            action="like.toggle",
            entity_type="post",
            entity_id=post.id,
            payload={"liked": liked},
        )

    return {
        "liked": liked,
        "likes_count": Like.query.filter_by(post_id=post.id).count(),
    }
