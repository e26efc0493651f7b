from flask import current_app, g
from typing import Optional


def log_action(
    *,
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    payload: dict | None = None
):
    actor = getattr(g, "current_user", None)
    current_app.logger.info(
        "%s %s=%s actor=%s payload=%s",
        action,
        entity_type,
        entity_id,
        actor.id if actor else None,
        payload or {},
    )
