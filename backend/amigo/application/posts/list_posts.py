from typing import Optional
from amigo.models.post import Post
from amigo.utils.pagination import paginate_cursor


def list_posts(*, limit: int, cursor: Optional[str] = None, user_id: Optional[str] = None):
    """Posts newest first, optionally for one author."""
    query = Post.query
    if user_id is not None:
        query = query.filter_by(user_id=user_id)

    return paginate_cursor(query, model=Post, limit=limit, cursor=cursor)
