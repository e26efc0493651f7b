from flask import g, jsonify, request
from sqlalchemy.exc import IntegrityError
from amigo.models.post import Post
from amigo.models.user import User
from amigo.application.social.follows import follow_counts, toggle_follow
from amigo.normalizers.user import normalize_user
from amigo.utils.audit import log_action
from amigo.utils.decorators import login_required
from amigo.utils.transaction import transactional
from . import v1_bp

PROFILE_FIELDS = ("username", "bio")


def _profile(user, private=False):
    counts = follow_counts(user.id)
    return normalize_user(
        user,
        followers=counts["followers"],
        following=counts["following"],
        posts=Post.query.filter_by(user_id=user.id).count(),
        private=private,
    )


@v1_bp.route("/users/me", methods=["GET"])
@login_required
def get_my_profile():
    return jsonify(_profile(g.current_user, private=True)), 200


@v1_bp.route("/users/me", methods=["PUT"])
@login_required
def update_my_profile():
    user = g.current_user
    data = request.get_json(silent=True) or {}

    changed_fields = []

    for field in PROFILE_FIELDS:
        if field in data and getattr(user, field) != data[field]:
            setattr(user, field, data[field] or None)
            changed_fields.append(field)

    try:
        with transactional():
            if changed_fields:
                log_action(
                    action="user.update",
                    entity_type="user",
                    entity_id=user.id,
                    payload={"fields": changed_fields}
                )
    except IntegrityError:
        return jsonify({"error": "Username already taken"}), 409

    return jsonify(_profile(user, private=True)), 200


@v1_bp.route("/users/<user_id>", methods=["GET"])
@login_required
def get_profile(user_id):
    user = User.query.filter_by(id=user_id).first_or_404()
    return jsonify(_profile(user)), 200


@v1_bp.route("/users/<user_id>/follow", methods=["POST"])
@login_required
def follow_user(user_id):
    user = User.query.filter_by(id=user_id).first_or_404()
    result = toggle_follow(follower_id=g.current_user.id, following_id=user.id)
    return jsonify(result), 200
