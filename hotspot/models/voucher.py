from hotspot import db
from hotspot.models.base import BaseModel, isoformat_utc
from sqlalchemy import Index

class Voucher(BaseModel):
    __tablename__ = 'vouchers'

    code = db.Column(db.String(64), nullable=False)
    plan_id = db.Column(db.String(20), nullable=False)
    is_used = db.Column(db.Boolean, nullable=False, default=False)
    used_at = db.Column(db.DateTime)

    # Relationships
    purchase = db.relationship('PurchasedVoucher', back_populates='voucher', uselist=False)

    # Indexes for optimization
    __table_args__ = (
        Index('idx_voucher_plan_used', 'plan_id', 'is_used'),
        Index('idx_voucher_code', 'code'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'code': self.code,
            'plan_id': self.plan_id,
            'is_used': self.is_used,
            'used_at': isoformat_utc(self.used_at),
        }

    def to_public_dict(self):
        return {
            'id': self.id,
            'code': self.code,
            'plan_id': self.plan_id,
        }
