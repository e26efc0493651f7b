from flask import g, jsonify, request
from amigo.models.comment import Comment
from amigo.models.post import Post
from amigo.application.social.comments import add_comment, delete_comment
from amigo.application.social.likes import toggle_like
from amigo.normalizers.comment import normalize_comment
from amigo.utils.decorators import assert_owner, login_required
from . import v1_bp


@v1_bp.route("/posts/<post_id>/like", methods=["POST"])
@login_required
def like_post(post_id):
    post = Post.query.filter_by(id=post_id).first_or_404()
    return jsonify(toggle_like(post=post, user_id=g.current_user.id)), 200


@v1_bp.route("/posts/<post_id>/comments", methods=["GET"])
@login_required
def list_comments(post_id):
    post = Post.query.filter_by(id=post_id).first_or_404()
    return jsonify([normalize_comment(c) for c in post.comments]), 200


@v1_bp.route("/posts/<post_id>/comments", methods=["POST"])
@login_required
def create_comment(post_id):
    post = Post.query.filter_by(id=post_id).first_or_404()
    data = request.get_json(silent=True) or {}

    comment = add_comment(post=post, user_id=g.current_user.id, content=data.get("content"))
    return jsonify(normalize_comment(comment)), 201


@v1_bp.route("/comments/<comment_id>", methods=["DELETE"])
@login_required
def remove_comment(comment_id):
    comment = Comment.query.filter_by(id=comment_id).first_or_404()
    assert_owner(comment, g.current_user)

    delete_comment(comment=comment)
    return jsonify({"message": "Comment deleted"}), 200
