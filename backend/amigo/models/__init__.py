from .user import User
from .post import Post
from .like import Like
from .comment import Comment
from .follow import Follow
from .notification import Notification
from .post_draft import PostDraft
from .revoked_token import RevokedToken
