from amigo.extensions import db
from .base import BaseModel


class Like(BaseModel):
    __tablename__ = "likes"

    post_id = db.Column(db.String(36), db.ForeignKey("posts.id"), nullable=False, index=True)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)

    post = db.relationship("Post", back_populates="likes")

    __table_args__ = (
        db.UniqueConstraint("post_id", "user_id", name="uq_like_post_user"),
    )
