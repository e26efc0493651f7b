from typing import Any, Dict
from amigo.models.post import Post
from amigo.domain.invariants.exceptions import ValidationError
from amigo.domain.invariants.post import assert_plain_content
from amigo.domain.lifecycle.post import assert_post_update
from amigo.utils.audit import log_action
from amigo.utils.transaction import transactional


def update_post(*, post: Post, data: Dict[str, Any]) -> Post:
    """
    Targeted update of a published post.

    Only a plain post's ``content`` may change.
    """
    fields = set(data)
    if not fields:
        raise ValidationError("No fields provided for update")

    assert_post_update(post_type=post.post_type, fields=fields)
    assert_plain_content(data["content"])

    with transactional():
        post.content = data["content"]

        log_action(
            action="post.update",
            entity_type="post",
            entity_id=post.id,
            payload={"fields": sorted(fields)},
        )

    return post
