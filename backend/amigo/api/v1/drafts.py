# amigo/api/v1/drafts.py
from flask import g, request, jsonify
from amigo.models.post_draft import PostDraft
from amigo.domain.blocks import BLOCK_TYPES, TEXT_SUBTYPES
from amigo.domain.invariants.block import assert_block
from amigo.domain.invariants.exceptions import ValidationError
from amigo.application.drafts.open_draft import open_draft, discard_draft
from amigo.application.drafts.edit_draft import edit_draft
from amigo.application.drafts.publish_draft import publish_draft
from amigo.application.drafts.upload_image import upload_draft_image
from amigo.normalizers.draft import normalize_draft
from amigo.normalizers.post import normalize_post
from amigo.utils.decorators import login_required
from amigo.utils.optimistic_lock import enforce_optimistic_lock, with_last_modified
from . import v1_bp

POINTER_ACTIONS = {"down", "move", "up"}


def _own_draft(draft_id):
    return PostDraft.query.filter_by(
        id=draft_id,
        user_id=g.current_user.id,
    ).first_or_404()


def _locked_draft(draft_id):
    draft = _own_draft(draft_id)

    # -----------------------
    # Optimistic Locking Check
    # -----------------------
    enforce_optimistic_lock(draft)
    return draft


def _draft_response(draft, status=200, **extra):
    response = jsonify({"draft": normalize_draft(draft), **extra})
    response.status_code = status
    return with_last_modified(response, draft)


def _number(data, key):
    try:
        return float(data[key])
    except (KeyError, TypeError, ValueError):
        return None


# ------------------------
# Drafts
# ------------------------

@v1_bp.route("/drafts", methods=["POST"])
@login_required
def create_draft():
    data = request.get_json(silent=True) or {}
    draft = open_draft(author_id=g.current_user.id, metadata=data)
    return _draft_response(draft, status=201)


@v1_bp.route("/drafts", methods=["GET"])
@login_required
def list_drafts():
    drafts = (
        PostDraft.query
        .filter_by(user_id=g.current_user.id)
        .order_by(PostDraft.updated_at.desc())
        .all()
    )
    return jsonify([normalize_draft(d) for d in drafts]), 200


@v1_bp.route("/drafts/<draft_id>", methods=["GET"])
@login_required
def get_draft(draft_id):
    return _draft_response(_own_draft(draft_id))


@v1_bp.route("/drafts/<draft_id>", methods=["PUT"])
@login_required
def update_draft_metadata(draft_id):
    draft = _locked_draft(draft_id)
    data = request.get_json(silent=True) or {}

    changed = edit_draft(
        draft=draft,
        action="metadata",
        mutate=lambda composer: composer.set_metadata(**data),
    )
    return _draft_response(draft, changed=changed)


@v1_bp.route("/drafts/<draft_id>", methods=["DELETE"])
@login_required
def delete_draft(draft_id):
    discard_draft(draft=_own_draft(draft_id))
    return jsonify({"message": "Draft discarded"}), 200


# ------------------------
# Blocks
# ------------------------

@v1_bp.route("/drafts/<draft_id>/blocks", methods=["POST"])
@login_required
def add_block(draft_id):
    draft = _locked_draft(draft_id)
    data = request.get_json(silent=True) or {}

    block_type = data.get("type")
    if not block_type:
        return jsonify({"error": "Block type is required"}), 400

    if block_type not in BLOCK_TYPES:
        return jsonify({"error": "Invalid block type"}), 400

    subtype = data.get("subtype")
    if block_type == "text" and subtype is not None and subtype not in TEXT_SUBTYPES:
        return jsonify({"error": "Invalid text subtype"}), 400

    block = edit_draft(
        draft=draft,
        action="block_add",
        mutate=lambda composer: composer.add_block(block_type, subtype=subtype),
    )
    return _draft_response(draft, status=201, block=block.to_dict())


@v1_bp.route("/drafts/<draft_id>/blocks/<block_id>", methods=["PUT"])
@login_required
def update_block(draft_id, block_id):
    draft = _locked_draft(draft_id)
    data = request.get_json(silent=True) or {}

    settings = data.get("settings") or {}
    if not isinstance(settings, dict):
        return jsonify({"error": "settings must be an object"}), 400

    content = data.get("content")
    if content is not None and not isinstance(content, str):
        raise ValidationError("Block content must be text", field="content")

    def mutate(composer):
        block = None
        if "content" in data:
            block = composer.store.update_content(block_id, content or "")
        for key, value in settings.items():
            block = composer.store.update_setting(block_id, key, value)
        if block is not None:
            # Raises before edit_draft writes the snapshot back
            assert_block(block)
        return block

    block = edit_draft(draft=draft, action="block_update", mutate=mutate)
    return _draft_response(draft, block=block.to_dict() if block else None)


@v1_bp.route("/drafts/<draft_id>/blocks/<block_id>", methods=["DELETE"])
@login_required
def delete_block(draft_id, block_id):
    draft = _locked_draft(draft_id)

    block = edit_draft(
        draft=draft,
        action="block_delete",
        mutate=lambda composer: composer.delete_block(block_id),
    )
    return _draft_response(draft, deleted=block is not None)


@v1_bp.route("/drafts/<draft_id>/blocks/reorder", methods=["POST"])
@login_required
def reorder_blocks(draft_id):
    draft = _locked_draft(draft_id)
    data = request.get_json(silent=True) or {}

    from_index = data.get("from")
    to_index = data.get("to")
    if not isinstance(from_index, int) or not isinstance(to_index, int):
        return jsonify({"error": "from and to must be integers"}), 400

    moved = edit_draft(
        draft=draft,
        action="block_reorder",
        mutate=lambda composer: composer.store.reorder(from_index, to_index),
    )
    return _draft_response(draft, moved=moved)


# ------------------------
# Canvas pointer gestures
# ------------------------

@v1_bp.route("/drafts/<draft_id>/pointer", methods=["POST"])
@login_required
def pointer_event(draft_id):
    draft = _locked_draft(draft_id)
    data = request.get_json(silent=True) or {}

    action = data.get("action")
    if action not in POINTER_ACTIONS:
        return jsonify({"error": "action must be one of down, move, up"}), 400

    x, y = _number(data, "x"), _number(data, "y")
    if action != "up" and (x is None or y is None):
        return jsonify({"error": "x and y are required"}), 400

    def mutate(composer):
        if action == "down":
            composer.canvas.pointer_down(data.get("block_id"), data.get("control", "body"), x, y)
        elif action == "move":
            composer.canvas.pointer_move(x, y)
        else:
            composer.canvas.pointer_up()

    edit_draft(draft=draft, action=f"pointer_{action}", mutate=mutate)
    return _draft_response(draft)


# ------------------------
# Images
# ------------------------

@v1_bp.route("/drafts/<draft_id>/images", methods=["POST"])
@login_required
def upload_image(draft_id):
    draft = _locked_draft(draft_id)

    if "file" not in request.files:
        return jsonify({"error": "file is required"}), 400

    block_id = request.form.get("block_id")
    url = upload_draft_image(draft=draft, raw=request.files["file"].stream, block_id=block_id)
    if url is None:
        return jsonify({"error": "Image block not found"}), 404

    return _draft_response(draft, status=201, url=url)


@v1_bp.route("/drafts/<draft_id>/pending-image", methods=["POST"])
@login_required
def commit_pending_image(draft_id):
    draft = _locked_draft(draft_id)

    block = edit_draft(
        draft=draft,
        action="pending_image_commit",
        mutate=lambda composer: composer.commit_pending_image(),
    )
    if block is None:
        return jsonify({"error": "No pending image"}), 400

    return _draft_response(draft, status=201, block=block.to_dict())


@v1_bp.route("/drafts/<draft_id>/pending-image", methods=["DELETE"])
@login_required
def discard_pending_image(draft_id):
    draft = _locked_draft(draft_id)

    edit_draft(
        draft=draft,
        action="pending_image_discard",
        mutate=lambda composer: composer.discard_pending_image(),
    )
    return _draft_response(draft)


# ------------------------
# Publish
# ------------------------

@v1_bp.route("/drafts/<draft_id>/publish", methods=["POST"])
@login_required
def publish(draft_id):
    draft = _locked_draft(draft_id)
    post = publish_draft(draft=draft)

    return jsonify(normalize_post(post, viewer_id=g.current_user.id)), 201
