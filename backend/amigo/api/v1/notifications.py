from flask import current_app, g, jsonify
from amigo.models.notification import Notification
from amigo.application.social.notifications import (
    delete_notification,
    list_notifications,
    mark_all_read,
    mark_read,
    unread_count,
)
from amigo.normalizers.notification import normalize_notification
from amigo.utils.decorators import login_required
from . import v1_bp


def _own_notification(notification_id):
    return Notification.query.filter_by(
        id=notification_id,
        user_id=g.current_user.id,
    ).first_or_404()


@v1_bp.route("/notifications", methods=["GET"])
@login_required
def get_notifications():
    user_id = g.current_user.id
    items = list_notifications(user_id=user_id, limit=current_app.config["NOTIFICATION_LIMIT"])

    return jsonify({
        "items": [normalize_notification(n) for n in items],
        "unread_count": unread_count(user_id),
    }), 200


@v1_bp.route("/notifications/<notification_id>/read", methods=["POST"])
@login_required
def read_notification(notification_id):
    mark_read(notification=_own_notification(notification_id))
    return jsonify({"message": "Marked as read"}), 200


@v1_bp.route("/notifications/read-all", methods=["POST"])
@login_required
def read_all_notifications():
    count = mark_all_read(user_id=g.current_user.id)
    return jsonify({"updated": count}), 200


@v1_bp.route("/notifications/<notification_id>", methods=["DELETE"])
@login_required
def remove_notification(notification_id):
    delete_notification(notification=_own_notification(notification_id))
    return jsonify({"message": "Notification deleted"}), 200
