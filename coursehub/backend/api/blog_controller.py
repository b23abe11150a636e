from flask import Blueprint, jsonify

from backend.api.responses import error_response
from backend.factories.service_factory import ServiceFactory

bp = Blueprint("blog_controller", __name__, url_prefix="/api/blog")


@bp.route("", methods=["GET"])
def list_posts():
    """Published posts, newest first, without their content."""
    return jsonify(ServiceFactory.create_blog_read_service().list_posts()), 200


@bp.route("/<slug>", methods=["GET"])
def get_post(slug):
    post = ServiceFactory.create_blog_read_service().get_post(slug)
    if not post:
        return error_response("Blog post not found", 404)
    return jsonify(post), 200
