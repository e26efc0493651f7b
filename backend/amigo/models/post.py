from amigo.extensions import db
from .base import BaseModel


class Post(BaseModel):
    __tablename__ = "posts"

    __table_args__ = (
        db.Index("ix_posts_feed_cursor", "created_at", "id"),
    )

    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    post_type = db.Column(db.String(10), nullable=False, default="plain")  # plain | blog

    content = db.Column(db.Text, nullable=False, default="")

    # Blog posts only
    title = db.Column(db.String(200), nullable=True)
    blocks = db.Column(db.JSON, nullable=True)
    country = db.Column(db.String(100), nullable=True)
    duration = db.Column(db.String(100), nullable=True)
    trip_type = db.Column(db.String(20), nullable=True)
    hashtags = db.Column(db.String(500), nullable=True)

    author = db.relationship("User", back_populates="posts")
    likes = db.relationship("Like", back_populates="post", cascade="all, delete-orphan")
    comments = db.relationship(
        "Comment",
        back_populates="post",
        order_by="Comment.created_at",
        cascade="all, delete-orphan",
    )

    @property
    def is_blog(self):
        return self.post_type == "blog"
