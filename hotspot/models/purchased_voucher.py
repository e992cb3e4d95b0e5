from hotspot import db
from hotspot.models.base import BaseModel, isoformat_utc, to_naive_utc, utcnow
from sqlalchemy import Index

class PurchasedVoucher(BaseModel):
    __tablename__ = 'purchased_vouchers'

    voucher_id = db.Column(db.Integer, db.ForeignKey('vouchers.id'), nullable=False, unique=True)
    phone_number = db.Column(db.String(32), nullable=False)
    purchased_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    expires_at = db.Column(db.DateTime, nullable=False)

    # Relationships
    voucher = db.relationship('Voucher', back_populates='purchase')

    # Indexes for optimization
    __table_args__ = (
        Index('idx_purchase_phone_expiry', 'phone_number', 'expires_at'),
    )

    def is_active(self, now=None):
        now = to_naive_utc(now) if now is not None else utcnow()
        return now < to_naive_utc(self.expires_at)

    def to_dict(self):
        return {
            'id': self.id,
            'voucher_id': self.voucher_id,
            'phone_number': self.phone_number,
            'purchased_at': isoformat_utc(self.purchased_at),
            'expires_at': isoformat_utc(self.expires_at),
            'is_active': self.is_active(),
        }
