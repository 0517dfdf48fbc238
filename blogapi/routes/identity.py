from functools import wraps

from flask import g, jsonify

from blogapi.services.identity_service import resolve_user_id


def identity_required(missing_status=401, message="Unauthorized"):
    """Resolve the acting user into ``g.user_id`` or reject the request."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user_id = resolve_user_id()
            if not user_id:
                return jsonify({"error": message}), missing_status
            g.user_id = user_id
            return view(*args, **kwargs)

        return wrapper

    return decorator


def identity_optional(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        g.user_id = resolve_user_id()
        return view(*args, **kwargs)

    return wrapper
