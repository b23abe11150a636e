from functools import wraps

from flask import g, jsonify, request

from backend.auth.tokens import decode_token
from shared.modules.user.enums.user_role_enum import UserRole


def _unauthorized(message):
    response = jsonify({"error": message})
    response.status_code = 401
    response.headers["WWW-Authenticate"] = "Bearer"
    return response


def admin_required(view):
    """
    Require a valid bearer token whose role is admin.
    401 for a missing/invalid token, 403 for a valid token without the admin role.
    The decoded user is available as ``g.current_user``.
    """

    @wraps(view)
    def wrapper(*args, **kwargs):
        header = request.headers.get("Authorization", "")
        scheme, _, token = header.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            return _unauthorized("Missing bearer token")

        payload = decode_token(token.strip())
        if not payload or not payload.get("sub") or not payload.get("user_id"):
            return _unauthorized("Invalid authentication credentials")

        if payload.get("role") != UserRole.ADMIN.value:
            return jsonify({"error": "Not authorized to perform this action"}), 403

        g.current_user = {
            "user_id": payload["user_id"],
            "email": payload["sub"],
            "role": payload["role"],
        }
        return view(*args, **kwargs)

    return wrapper
