from amigo.extensions import db
from .base import BaseModel


class Comment(BaseModel):
    __tablename__ = "comments"

    post_id = db.Column(db.String(36), db.ForeignKey("posts.id"), nullable=False, index=True)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    content = db.Column(db.Text, nullable=False)

    post = db.relationship("Post", back_populates="comments")
    author = db.relationship("User")
