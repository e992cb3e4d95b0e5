from hotspot import db
from hotspot.models.base import BaseModel

class TokenBlocklist(BaseModel):
    __tablename__ = 'token_blocklist'

    jti = db.Column(db.String(36), nullable=False, unique=True, index=True)

    @classmethod
    def revoke(cls, jti):
        if not cls.is_revoked(jti):
            cls(jti=jti).save()

    @classmethod
    def is_revoked(cls, jti):
        return db.session.query(cls.id).filter_by(jti=jti).scalar() is not None
