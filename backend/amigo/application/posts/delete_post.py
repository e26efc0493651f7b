from amigo.extensions import db
from amigo.models.post import Post
from amigo.models.notification import Notification
from amigo.utils.audit import log_action
from amigo.utils.transaction import transactional


def delete_post(*, post: Post) -> None:
    """
    Delete a post with its likes, comments and notifications.

    Blocks live inside the post row and go with it.
    """
    post_id = post.id

    with transactional():
        for notification in Notification.query.filter_by(post_id=post_id).all():
            db.session.delete(notification)

        db.session.delete(post)

        log_action(
            action="post.delete",
            entity_type="post",
            entity_id=post_id,
        )
