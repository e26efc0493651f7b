from amigo.extensions import db
from .base import BaseModel


class RevokedToken(BaseModel):
    __tablename__ = "revoked_tokens"

    jti = db.Column(db.String(36), nullable=False, unique=True, index=True)
