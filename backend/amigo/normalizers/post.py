from amigo.domain.posts import PLAIN


def normalize_post(post, viewer_id=None):
    data = {
        "id": post.id,
        "user_id": post.user_id,
        "author_name": post.author.display_name if post.author else None,
        "post_type": post.post_type,
        "content": post.content,
        "created_at": post.created_at.isoformat(),
        "likes_count": len(post.likes),
        "comments_count": len(post.comments),
    }

    if viewer_id is not None:
        data["is_liked_by_me"] = any(like.user_id == viewer_id for like in post.likes)

    if post.post_type != PLAIN:
        data.update({
            "title": post.title,
            "blocks": post.blocks or [],
            "country": post.country,
            "duration": post.duration,
            "trip_type": post.trip_type,
            "hashtags": post.hashtags,
        })

    return data


def post_record(post):
    """Storage-shaped dict consumed by the renderer."""
    return {
        "id": post.id,
        "user_id": post.user_id,
        "post_type": post.post_type,
        "content": post.content,
        "title": post.title,
        "blocks": post.blocks,
        "country": post.country,
        "duration": post.duration,
        "trip_type": post.trip_type,
        "hashtags": post.hashtags,
        "created_at": post.created_at.isoformat(),
    }
