# amigo/normalizers/notification.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from amigo.utils.optimistic_lock import normalize_ts


NOTIFICATION_ICONS = {
    "like": "❤️",
    "comment": "💬",
    "follow": "👤",
}
DEFAULT_ICON = "🔔"


def notification_text(notification) -> str:
    user = f"User {(notification.related_user_id or '')[:8]}"
    if notification.type == "like":
        return f"{user} liked your post"
    if notification.type == "comment":
        return f"{user} commented on your post"
    if notification.type == "follow":
        return f"{user} started following you"
    return "New notification"


def relative_time(timestamp: datetime, now: Optional[datetime] = None) -> str:
    now = normalize_ts(now or datetime.now(timezone.utc))
    seconds = int((now - normalize_ts(timestamp)).total_seconds())

    if seconds < 60:
        return "just now"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    return f"{seconds // 86400}d ago"


def normalize_notification(notification, now: Optional[datetime] = None) -> Dict[str, Any]:
    return {
        "id": notification.id,
        "type": notification.type,
        "related_user_id": notification.related_user_id,
        "post_id": notification.post_id,
        "read": notification.read,
        "icon": NOTIFICATION_ICONS.get(notification.type, DEFAULT_ICON),
        "text": notification_text(notification),
        "relative_time": relative_time(notification.created_at, now),
        "created_at": notification.created_at.isoformat(),
    }
