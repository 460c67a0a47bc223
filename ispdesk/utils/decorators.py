from functools import wraps
from flask_jwt_extended import get_jwt, verify_jwt_in_request, get_jwt_identity
from flask import g
from ispdesk.service.identity import Actor
from .roles import ALL_ROLES


def role_required(*roles):
    """
    Decorator to restrict access to routes based on the operator role.
    If no roles are passed, allows access to ALL_ROLES by default.
    Attaches the current actor to g.current_user.
    """
    allowed_roles = roles or ALL_ROLES

    def wrapper(fn):
        @wraps(fn)
        def decorator(*args, **kwargs):
            # Verify JWT first
            verify_jwt_in_request()
            claims = get_jwt()
            user_role = claims.get("role")

            g.current_user = Actor(
                id=get_jwt_identity(),
                name=claims.get("name", ""),
                role=user_role,
            )

            # Role check
            if user_role not in allowed_roles:
                return {"message": "Forbidden: Insufficient permissions"}, 403

            return fn(*args, **kwargs)
        return decorator
    return wrapper
