from flask import jsonify

from shared.modules.result.write_result import WriteResult


def write_response(result: WriteResult):
    """Translate a WriteResult into a Flask (body, status) response."""
    return jsonify(result.to_response()), result.http_status


def error_response(message: str, status: int, details=None):
    body = {"error": message}
    if details:
        body["details"] = details
    return jsonify(body), status
