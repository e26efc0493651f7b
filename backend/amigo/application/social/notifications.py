from amigo.extensions import db
from amigo.models.notification import Notification
from amigo.utils.audit import log_action
from amigo.utils.transaction import transactional


def list_notifications(*, user_id: str, limit: int = 50):
    return (
        Notification.query
        .filter_by(user_id=user_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(limit)
        .all()
    )


def unread_count(user_id: str) -> int:
    return Notification.query.filter_by(user_id=user_id, read=False).count()


def mark_read(*, notification: Notification) -> None:
    if notification.read:
        return

    with transactional():
        notification.read = True


def mark_all_read(*, user_id: str) -> int:
    unread = Notification.query.filter_by(user_id=user_id, read=False).all()

    with transactional():
        for notification in unread:
            notification.read = True

        log_action(
            action="notification.read_all",
            entity_type="user",
            entity_id=user_id,
            payload={"count": len(unread)},
        )

    return len(unread)


def delete_notification(*, notification: Notification) -> None:
    with transactional():
        db.session.delete(notification)
