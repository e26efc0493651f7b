from amigo.extensions import db
from amigo.models.comment import Comment
from amigo.models.post import Post
from amigo.domain.invariants.exceptions import ValidationError
from amigo.utils.audit import log_action
from amigo.utils.transaction import transactional
from .notify import add_notification

MAX_COMMENT_LENGTH = 1000


def add_comment(*, post: Post, user_id: str, content: str) -> Comment:
    if content is not None and not isinstance(content, str):
        raise ValidationError("Comment content must be text", field="content")

    content = (content or "").strip()
    if not content:
        raise ValidationError("Comment cannot be empty", field="content")
    if len(content) > MAX_COMMENT_LENGTH:
        raise ValidationError(
            f"Comments are limited to {MAX_COMMENT_LENGTH} characters",
            field="content",
        )

    comment = Comment()
    comment.post_id = post.id
    comment.user_id = user_id
    comment.content = content

    with transactional():
        db.session.add(comment)
        db.session.flush()
        add_notification(user_id=post.user_id, type="comment", actor_id=user_id, post_id=post.id)

        log_action(
            action="comment.create",
            entity_type="comment",
            entity_id=comment.id,
            payload={"post_id": post.id},
        )

    return comment


def delete_comment(*, comment: Comment) -> None:
    with transactional():
        db.session.delete(comment)

        log_action(
            action="comment.delete",
            entity_type="comment",
            entity_id=comment.id,
        )
