from flask import Blueprint, g, request, jsonify

from backend.api.responses import write_response
from backend.auth.decorators import admin_required
from backend.factories.service_factory import ServiceFactory

bp = Blueprint("admin_controller", __name__, url_prefix="/api/admin")


# --- SCHOOLS ---
@bp.route("/schools", methods=["GET"])
@admin_required
def list_schools():
    """All schools regardless of status. Never cached."""
    return jsonify(ServiceFactory.create_school_admin_service().list_schools()), 200


@bp.route("/schools", methods=["POST"])
@admin_required
def create_school():
    result = ServiceFactory.create_school_admin_service().create_school(request.get_json(silent=True))
    return write_response(result)


@bp.route("/schools/<school_id>", methods=["PUT", "POST"])
@admin_required
def update_school(school_id):
    """
    Partial update. Send ``version`` to reject the write if someone else
    changed the school in the meantime.
    """
    result = ServiceFactory.create_school_admin_service().update_school(school_id, request.get_json(silent=True))
    return write_response(result)


@bp.route("/schools/<school_id>", methods=["DELETE"])
@admin_required
def delete_school(school_id):
    return write_response(ServiceFactory.create_school_admin_service().delete_school(school_id))


# --- COURSES ---
@bp.route("/courses", methods=["GET"])
@admin_required
def list_courses():
    school_id = request.args.get("school_id") or None
    return jsonify(ServiceFactory.create_course_admin_service().list_courses(school_id)), 200


@bp.route("/courses", methods=["POST"])
@admin_required
def create_course():
    return write_response(ServiceFactory.create_course_admin_service().create_course(request.get_json(silent=True)))


@bp.route("/courses/<course_id>", methods=["PUT"])
@admin_required
def update_course(course_id):
    result = ServiceFactory.create_course_admin_service().update_course(course_id, request.get_json(silent=True))
    return write_response(result)


@bp.route("/courses/<course_id>", methods=["DELETE"])
@admin_required
def delete_course(course_id):
    return write_response(ServiceFactory.create_course_admin_service().delete_course(course_id))


# --- UPLOADS ---
@bp.route("/upload", methods=["POST"])
@admin_required
def upload_school_image():
    """
    Multipart upload of a school image.

    Fields: file, school_id, kind ("image" or "logo", default "image").
    """
    service = ServiceFactory.create_image_ingestion_service()
    result = service.ingest(
        school_id=request.form.get("school_id"),
        file_storage=request.files.get("file"),
        kind=request.form.get("kind", "image"),
    )
    return write_response(result)


# --- BLOG ---
@bp.route("/blog", methods=["GET"])
@admin_required
def list_blog_posts():
    return jsonify(ServiceFactory.create_blog_admin_service().list_posts()), 200


@bp.route("/blog", methods=["POST"])
@admin_required
def create_blog_post():
    service = ServiceFactory.create_blog_admin_service()
    return write_response(service.create_post(request.get_json(silent=True), author_id=g.current_user["user_id"]))


@bp.route("/blog/<post_id>", methods=["PUT"])
@admin_required
def update_blog_post(post_id):
    return write_response(ServiceFactory.create_blog_admin_service().update_post(post_id, request.get_json(silent=True)))


@bp.route("/blog/<post_id>", methods=["DELETE"])
@admin_required
def delete_blog_post(post_id):
    return write_response(ServiceFactory.create_blog_admin_service().delete_post(post_id))
