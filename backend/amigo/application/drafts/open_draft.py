from typing import Any, Dict, Optional
from amigo.extensions import db
from amigo.models.post_draft import PostDraft
from amigo.domain.composer import PostComposer
from amigo.utils.audit import log_action
from amigo.utils.transaction import transactional


def open_draft(*, author_id: str, metadata: Optional[Dict[str, Any]] = None) -> PostDraft:
    """Start a new composer session for ``author_id``."""
    composer = PostComposer()
    composer.set_metadata(**(metadata or {}))

    draft = PostDraft()
    draft.user_id = author_id
    draft.snapshot = composer.to_snapshot()

    with transactional():
        db.session.add(draft)
        db.session.flush()

        log_action(
            action="draft.open",
            entity_type="draft",
            entity_id=draft.id,
        )

    return draft


def discard_draft(*, draft: PostDraft) -> None:
    with transactional():
        db.session.delete(draft)

        log_action(
            action="draft.discard",
            entity_type="draft",
            entity_id=draft.id,
        )
