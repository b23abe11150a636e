from flask import Blueprint, request, jsonify

from backend.api.responses import error_response
from backend.factories.service_factory import ServiceFactory
from shared.modules.catalog.enums.course_type_enum import CourseType
from shared.modules.catalog.enums.school_status_enum import SchoolStatus

bp = Blueprint("catalog_controller", __name__, url_prefix="/api")

COURSE_TYPES = [t.value for t in CourseType]


def _course_type_arg():
    course_type = request.args.get("type") or None
    if course_type and course_type not in COURSE_TYPES:
        raise ValueError(f"type must be one of {', '.join(COURSE_TYPES)}")
    return course_type


def _bool_arg(name):
    value = request.args.get(name)
    if value is None or value == "":
        return None
    lowered = value.lower()
    if lowered in ("1", "true", "yes"):
        return True
    if lowered in ("0", "false", "no"):
        return False
    raise ValueError(f"{name} must be true or false")


def _float_arg(name):
    value = request.args.get(name)
    if value is None or value == "":
        return None
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number")


@bp.route("/schools", methods=["GET"])
def list_schools():
    """
    Search active schools.

    GET /api/schools?country=Ireland&city=Dublin&type=intensive
    Only active schools are public; ``status`` is accepted but must be "active".
    """
    try:
        course_type = _course_type_arg()
        status = request.args.get("status")
        if status and status != SchoolStatus.ACTIVE.value:
            raise ValueError("status: only active schools are listed")
    except ValueError as e:
        return error_response(f"Validation error: {e}", 400)

    service = ServiceFactory.create_catalog_read_service()
    schools = service.list_schools(
        country=request.args.get("country") or None,
        city=request.args.get("city") or None,
        course_type=course_type,
    )
    return jsonify(schools), 200


@bp.route("/schools/<slug>", methods=["GET"])
def get_school(slug):
    school = ServiceFactory.create_catalog_read_service().get_school(slug)
    if not school:
        return error_response("School not found", 404)
    return jsonify(school), 200


@bp.route("/courses", methods=["GET"])
def list_courses():
    try:
        filters = {
            "school_id": request.args.get("school_id") or None,
            "course_type": _course_type_arg(),
            "visa_included": _bool_arg("visa_included"),
            "max_price": _float_arg("max_price"),
        }
    except ValueError as e:
        return error_response(f"Validation error: {e}", 400)

    courses = ServiceFactory.create_catalog_read_service().list_courses(**filters)
    return jsonify(courses), 200


@bp.route("/countries", methods=["GET"])
def list_countries():
    return jsonify(ServiceFactory.create_catalog_read_service().list_countries()), 200


@bp.route("/cities/<country>", methods=["GET"])
def list_cities(country):
    return jsonify(ServiceFactory.create_catalog_read_service().list_cities(country)), 200
