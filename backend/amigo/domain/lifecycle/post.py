from typing import Set

from amigo.domain.invariants.exceptions import InvariantViolation

# Fields that may change after a post is created, per post type
EDITABLE_POST_FIELDS: dict[str, Set[str]] = {
    "plain": {"content"},
    "blog": set(),  # no edit path for blog posts yet
}


def assert_post_update(*, post_type: str, fields: Set[str]) -> None:
    """
    Guards post edits.
    Single source of truth for what may change after publish.
    """
    allowed = EDITABLE_POST_FIELDS.get(post_type, set())

    if not allowed:
        raise InvariantViolation(f"Editing {post_type} posts is not supported")

    illegal = fields - allowed
    if illegal:
        raise InvariantViolation(
            f"Fields not editable on {post_type} posts: {sorted(illegal)}"
        )
