from typing import Any, Callable
from amigo.models.post_draft import PostDraft
from amigo.domain.composer import PostComposer
from amigo.utils.audit import log_action
from amigo.utils.transaction import transactional


def load_composer(draft: PostDraft) -> PostComposer:
    return PostComposer.from_snapshot(draft.snapshot)


def edit_draft(
    *,
    draft: PostDraft,
    action: str,
    mutate: Callable[[PostComposer], Any],
):
    """
    Apply one composer mutation to a stored draft.

    The composer is rebuilt from the snapshot, mutated, and written back.
    Returns whatever ``mutate`` returned.
    """
    composer = load_composer(draft)
    result = mutate(composer)

    with transactional():
        # JSON columns only notice reassignment
        draft.snapshot = composer.to_snapshot()

        log_action(
            action=f"draft.{action}",
            entity_type="draft",
            entity_id=draft.id,
        )

    return result
