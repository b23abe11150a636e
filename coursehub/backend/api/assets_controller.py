from flask import Blueprint, abort, send_from_directory

from backend.factories.service_factory import ServiceFactory
from shared.modules.assets.local_asset_manager import LocalAssetManager

bp = Blueprint("assets_controller", __name__)


@bp.route("/assets/<path:key>", methods=["GET"])
def serve_asset(key):
    """
    Serve uploaded files in development, when the local filestore stands in for the CDN.
    """
    asset_manager = ServiceFactory.get_asset_manager()
    if not isinstance(asset_manager, LocalAssetManager):
        abort(404)
    return send_from_directory(asset_manager.base_dir, key)
