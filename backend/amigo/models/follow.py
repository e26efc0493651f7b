from amigo.extensions import db
from .base import BaseModel


class Follow(BaseModel):
    __tablename__ = "follows"

    follower_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    following_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)

    __table_args__ = (
        db.UniqueConstraint("follower_id", "following_id", name="uq_follow_pair"),
    )
