from flask import current_app, g, jsonify, request
from amigo.models.post import Post
from amigo.application.posts.create_post import create_plain_post
from amigo.application.posts.update_post import update_post
from amigo.application.posts.delete_post import delete_post
from amigo.application.posts.list_posts import list_posts
from amigo.normalizers.pagination import normalize_pagination
from amigo.normalizers.post import normalize_post, post_record
from amigo.rendering.renderer import render_post, safe_url_optimizer
from amigo.rendering.theme import theme_by_name
from amigo.utils.decorators import assert_owner, login_required
from . import v1_bp

MAX_PAGE_SIZE = 100


@v1_bp.route("/posts", methods=["GET"])
@login_required
def get_feed():
    viewer_id = g.current_user.id
    limit = min(request.args.get("limit", current_app.config["FEED_PAGE_SIZE"], type=int), MAX_PAGE_SIZE)
    cursor = request.args.get("cursor")
    author_id = request.args.get("user_id")

    cache = current_app.extensions["feed_cache"]
    cache_key = f"{viewer_id}:{limit}"
    cacheable = not cursor and not author_id

    if cacheable:
        cached = cache.get(cache_key)
        if cached is not None:
            return jsonify(cached), 200

    items, meta = list_posts(limit=limit, cursor=cursor, user_id=author_id)
    response = normalize_pagination(
        items,
        lambda p: normalize_post(p, viewer_id=viewer_id),
        cursor=meta,
    )

    if cacheable:
        cache.set(cache_key, response)

    return jsonify(response), 200


@v1_bp.route("/posts", methods=["POST"])
@login_required
def create_post():
    data = request.get_json(silent=True) or {}

    post = create_plain_post(
        author_id=g.current_user.id,
        content=data.get("content") or "",
    )

    return jsonify(normalize_post(post, viewer_id=g.current_user.id)), 201


@v1_bp.route("/posts/<post_id>", methods=["GET"])
@login_required
def get_post(post_id):
    post = Post.query.filter_by(id=post_id).first_or_404()
    return jsonify(normalize_post(post, viewer_id=g.current_user.id)), 200


@v1_bp.route("/posts/<post_id>", methods=["PUT"])
@login_required
def edit_post(post_id):
    post = Post.query.filter_by(id=post_id).first_or_404()
    assert_owner(post, g.current_user)

    data = request.get_json(silent=True) or {}
    update_post(post=post, data=data)

    return jsonify(normalize_post(post, viewer_id=g.current_user.id)), 200


@v1_bp.route("/posts/<post_id>", methods=["DELETE"])
@login_required
def remove_post(post_id):
    post = Post.query.filter_by(id=post_id).first_or_404()
    assert_owner(post, g.current_user)

    delete_post(post=post)
    return jsonify({"message": "Post deleted successfully"}), 200


@v1_bp.route("/posts/<post_id>/render", methods=["GET"])
@login_required
def render(post_id):
    post = Post.query.filter_by(id=post_id).first_or_404()
    theme = theme_by_name(request.args.get("theme"))

    optimize = safe_url_optimizer(
        current_app.extensions["object_storage"],
        current_app.config["IMAGE_DELIVERY_TRANSFORM"],
    )

    return jsonify({
        "post_id": post.id,
        "theme": theme.name,
        "nodes": render_post(post_record(post), theme, optimize_url=optimize),
    }), 200
