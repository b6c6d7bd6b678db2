import uuid
from datetime import datetime
from flask_login import UserMixin
from extensions import db


def generate_id():
    return uuid.uuid4().hex


class User(UserMixin, db.Model):
    __tablename__ = 'users'

    id = db.Column(db.String(32), primary_key=True, default=generate_id)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    picture = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    logs = db.relationship('Log', backref='user', lazy='dynamic')

    def __init__(self, email, name, picture=None):
        self.id = generate_id()
        self.email = email
        self.name = name
        self.picture = picture

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'picture': self.picture,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<User {self.email}>'
