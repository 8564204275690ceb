# db/models/user.py
import enum
from configs import db
from flask_login import UserMixin


class UserRole(enum.Enum):
    ADMIN = "ADMIN"
    DENTIST = "DENTIST"  # Nha sĩ
    ASSISTANT = "ASSISTANT"  # Trợ thủ / lễ tân
    ACCOUNTANT = "ACCOUNTANT"  # Kế toán


class User(db.Model, UserMixin):
    __tablename__ = "user_account"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    full_name = db.Column(db.String(120))
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    role = db.Column(db.Enum(UserRole), default=UserRole.ASSISTANT, nullable=False)

    def get_id(self):
        return str(self.id)

    def has_role(self, *roles: UserRole):
        """Kiểm tra xem user có 1 trong các role truyền vào"""
        return self.role in roles
