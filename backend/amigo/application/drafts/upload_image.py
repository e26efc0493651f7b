from typing import BinaryIO, Optional, Union
from flask import current_app
from amigo.models.post_draft import PostDraft
from .edit_draft import edit_draft, load_composer


def upload_draft_image(
    *,
    draft: PostDraft,
    raw: Union[bytes, BinaryIO],
    block_id: Optional[str] = None,
) -> Optional[str]:
    """
    Compress and store an image, then point a block (or the pending-image
    slot when no block is given) at it.

    A storage failure propagates before the draft is touched, so the
    block's url stays unset.
    """
    if block_id is not None:
        block = load_composer(draft).store.get(block_id)
        if block is None or block.type != "image":
            return None

    url = current_app.extensions["image_intake"].upload(raw)

    if block_id is None:
        edit_draft(draft=draft, action="stage_image", mutate=lambda c: c.stage_image(url))
    else:
        edit_draft(draft=draft, action="attach_image", mutate=lambda c: c.attach_image(block_id, url))

    return url
