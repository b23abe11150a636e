from flask import Blueprint, request, jsonify
from pydantic import ValidationError

from backend.api.responses import error_response
from backend.factories.service_factory import ServiceFactory
from backend.modules.user.schemas.auth_schemas import LoginRequest
from shared.modules.result.validation import format_validation_errors

bp = Blueprint("auth_controller", __name__, url_prefix="/api/admin")


@bp.route("/login", methods=["POST"])
def login():
    """
    Exchange admin credentials for a bearer token.

    {"email": "admin@example.com", "password": "..."}
    """
    try:
        credentials = LoginRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return error_response("Validation error", 400, format_validation_errors(e))

    result = ServiceFactory.create_auth_service().login(credentials)
    if not result:
        return error_response("Invalid credentials", 401)
    return jsonify(result.model_dump()), 200
