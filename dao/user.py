from typing import List, Optional
from werkzeug.security import check_password_hash
from db.models.user import User


def list_users() -> List[User]:
    return User.query.order_by(User.email.asc()).all()


def get_user(user_id: int) -> Optional[User]:
    return User.query.get(int(user_id))


def authenticate(email: str, password: str) -> Optional[User]:
    email = (email or "").strip().lower()
    user = User.query.filter_by(email=email).first()
    if not user or not check_password_hash(user.password_hash, password or ""):
        return None
    return user
