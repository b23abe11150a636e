import logging

from flask import jsonify
from pymongo.errors import PyMongoError
from werkzeug.exceptions import HTTPException

from shared.modules.assets.asset_manager import AssetStorageError

logger = logging.getLogger(__name__)


def register_error_handlers(app):
    """
    JSON error bodies for every failure. Store failures surface as 503 so a
    broken database is never mistaken for an empty result.
    """

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        response = jsonify({"error": e.description or e.name})
        response.status_code = e.code
        return response

    @app.errorhandler(PyMongoError)
    def handle_store_error(e):
        logger.exception(f"Data store error: {e}")
        return jsonify({"error": "Data store unavailable"}), 503

    @app.errorhandler(AssetStorageError)
    def handle_asset_storage_error(e):
        logger.error(f"Asset storage error: {e}")
        return jsonify({"error": "Asset storage unavailable"}), 503

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        logger.exception(f"Unhandled error: {e}")
        return jsonify({"error": "Internal server error"}), 500
