from amigo.extensions import db
from .base import BaseModel


class Notification(BaseModel):
    __tablename__ = "notifications"

    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    type = db.Column(db.String(20), nullable=False)  # like, comment, follow
    related_user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=True)
    post_id = db.Column(db.String(36), db.ForeignKey("posts.id", ondelete="CASCADE"), nullable=True)
    read = db.Column(db.Boolean, nullable=False, default=False, index=True)
