from typing import Dict
from amigo.extensions import db
from amigo.models.follow import Follow
from amigo.domain.invariants.exceptions import InvariantViolation
from amigo.utils.audit import log_action
from amigo.utils.transaction import transactional
from .notify import add_notification


def toggle_follow(*, follower_id: str, following_id: str) -> Dict[str, object]:
    if follower_id == following_id:
        raise InvariantViolation("Users cannot follow themselves")

    existing = Follow.query.filter_by(
        follower_id=follower_id,
        following_id=following_id,
    ).first()

    with transactional():
        if existing:
            db.session.delete(existing)
            following = False
        else:
            follow = Follow()
            follow.follower_id = follower_id
            follow.following_id = following_id
            db.session.add(follow)
            add_notification(user_id=following_id, type="follow", actor_id=follower_id)
            following = True

        log_action(
            action="follow.toggle",
            entity_type="user",
            entity_id=following_id,
            payload={"following": following},
        )

    return {
        "following": following,
        "followers_count": Follow.query.filter_by(following_id=following_id).count(),
    }


def follow_counts(user_id: str) -> Dict[str, int]:
    return {
        "followers": Follow.query.filter_by(following_id=user_id).count(),
        "following": Follow.query.filter_by(follower_id=user_id).count(),
    }
