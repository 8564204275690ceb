# utils/auth.py
from functools import wraps
from flask import abort
from flask_login import current_user
from utils.errors import NotAuthenticated


def roles_required(*roles):
    def deco(fn):
        @wraps(fn)
        def inner(*a, **kw):
            if not current_user.is_authenticated:
                abort(401)
            if not current_user.has_role(*roles):
                abort(403)
            return fn(*a, **kw)

        return inner

    return deco


def current_actor_id() -> int:
    """id của user đang đăng nhập, dùng làm created_by cho movement/treatment."""
    if not current_user or not current_user.is_authenticated:
        raise NotAuthenticated("User not authenticated")
    return int(current_user.id)
