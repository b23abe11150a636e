import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from backend.modules.cache.cache_invalidator import CacheInvalidator
from backend.modules.catalog.models.course_model import CourseModel
from backend.modules.catalog.models.school_model import SchoolModel
from backend.modules.catalog.schemas.course_schemas import CourseCreate, CourseUpdate
from shared.modules.catalog.models.course import Course
from shared.modules.result.validation import format_validation_errors
from shared.modules.result.write_result import WriteResult

logger = logging.getLogger(__name__)


class CourseAdminService:
    """
    Admin writes for courses. Keeps the owning school's ``price_from`` in
    sync and invalidates the reads that embed course data.
    """

    def __init__(self, invalidator: CacheInvalidator):
        self.invalidator = invalidator

    def list_courses(self, school_id: Optional[str] = None) -> List[Dict[str, Any]]:
        return CourseModel.list_all(school_id)

    def create_course(self, payload: Optional[Dict[str, Any]]) -> WriteResult:
        try:
            data = CourseCreate.model_validate(payload or {})
        except ValidationError as e:
            return WriteResult.invalid(*format_validation_errors(e))

        school = SchoolModel.find(data.school_id)
        if not school:
            return WriteResult.invalid(f"school_id: no school with id {data.school_id}")

        course = Course(**data.model_dump())
        CourseModel.create(course)
        self._refresh_price_from(school.school_id)

        logger.info(f"Created course {course.course_id} for school {school.school_id}")
        self.invalidator.course_changed(school.slug)
        return WriteResult.created(course.model_dump(mode="json"))

    def update_course(self, course_id: str, payload: Optional[Dict[str, Any]]) -> WriteResult:
        try:
            data = CourseUpdate.model_validate(payload or {})
        except ValidationError as e:
            return WriteResult.invalid(*format_validation_errors(e))

        existing = CourseModel.find(course_id)
        if not existing:
            return WriteResult.not_found(f"Course not found: {course_id}")

        changes = data.model_dump(exclude_unset=True)
        expected_version = changes.pop("version", None)
        if expected_version is not None and expected_version != existing.version:
            return WriteResult.conflict(
                f"Course {course_id} was modified (version {existing.version}, got {expected_version})"
            )
        if not changes:
            return WriteResult.updated(existing.model_dump(mode="json"))

        if not CourseModel.update(course_id, expected_version=expected_version, **changes):
            if expected_version is not None:
                return WriteResult.conflict(f"Course {course_id} was modified concurrently")
            return WriteResult.not_found(f"Course not found: {course_id}")

        if "price" in changes:
            self._refresh_price_from(existing.school_id)

        self.invalidator.course_changed(self._school_slug(existing.school_id))
        return WriteResult.updated(CourseModel.find(course_id).model_dump(mode="json"))

    def delete_course(self, course_id: str) -> WriteResult:
        existing = CourseModel.find(course_id)
        if not existing:
            return WriteResult.not_found(f"Course not found: {course_id}")

        CourseModel.delete(course_id)
        self._refresh_price_from(existing.school_id)

        logger.info(f"Deleted course {course_id} of school {existing.school_id}")
        self.invalidator.course_changed(self._school_slug(existing.school_id))
        return WriteResult.deleted({"course_id": course_id, "school_id": existing.school_id})

    # -------------------------------------------------------------------------
    def _refresh_price_from(self, school_id: str) -> None:
        SchoolModel.set_price_from(school_id, CourseModel.lowest_price(school_id))

    @staticmethod
    def _school_slug(school_id: str) -> Optional[str]:
        doc = SchoolModel.find_by_id(school_id, {"slug": 1})
        return doc["slug"] if doc else None
