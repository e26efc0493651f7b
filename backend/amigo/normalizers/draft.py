def normalize_draft(draft):
    return {
        "id": draft.id,
        "user_id": draft.user_id,
        **(draft.snapshot or {}),
        "updated_at": draft.updated_at.isoformat(),
    }
