from hotspot import db, bcrypt
from hotspot.models.base import BaseModel

class Profile(BaseModel):
    """Admin account allowed into the voucher inventory panel."""
    __tablename__ = 'profiles'

    username = db.Column(db.String(80), nullable=False, unique=True, index=True)
    password_hash = db.Column(db.String(128), nullable=False)

    @property
    def password(self):
        raise AttributeError('password is not a readable attribute')

    @password.setter
    def password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    @classmethod
    def authenticate(cls, username, password):
        """Return the profile for valid credentials, None otherwise."""
        profile = cls.query.filter_by(username=username).first()
        if not profile or not profile.check_password(password):
            return None
        return profile

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'created_at': self.created_at.isoformat(),
        }
