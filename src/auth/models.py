from datetime import datetime
from flask_login import UserMixin

from src import db
from src.auth.roles import Role


class User(db.Model, UserMixin):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.Enum(Role, name="user_role"), nullable=False, default=Role.PARTICIPANT)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<User {self.username} ({self.role.value})>"

    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def is_participant(self) -> bool:
        return self.role is Role.PARTICIPANT
