from typing import Optional
from amigo.extensions import db
from amigo.models.notification import Notification


def add_notification(*, user_id: str, type: str, actor_id: str, post_id: Optional[str] = None):
    """Stage a notification for ``user_id`` unless they caused it themselves."""
    if user_id == actor_id:
        return None

    notification = Notification()
    notification.user_id = user_id
    notification.type = type
    notification.related_user_id = actor_id
    notification.post_id = post_id
    notification.read = False

    db.session.add(notification)
    return notification
