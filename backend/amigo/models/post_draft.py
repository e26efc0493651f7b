from amigo.extensions import db
from .base import BaseModel


class PostDraft(BaseModel):
    __tablename__ = "post_drafts"

    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    snapshot = db.Column(db.JSON, nullable=False, default=dict)
