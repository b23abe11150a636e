import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from pymongo.errors import DuplicateKeyError

from backend.modules.cache.cache_invalidator import CacheInvalidator
from backend.modules.catalog.models.course_model import CourseModel
from backend.modules.catalog.models.school_model import SchoolModel
from backend.modules.catalog.schemas.school_schemas import SchoolCreate, SchoolUpdate
from shared.modules.catalog.models.school import School
from shared.modules.common.slugs import is_valid_slug, slugify
from shared.modules.result.validation import format_validation_errors
from shared.modules.result.write_result import WriteResult

logger = logging.getLogger(__name__)


class SchoolAdminService:
    """
    Admin writes for schools. Each operation validates the payload before
    touching the store and invalidates the derived cache entries only after
    the store write went through.
    """

    def __init__(self, invalidator: CacheInvalidator):
        self.invalidator = invalidator

    def list_schools(self) -> List[Dict[str, Any]]:
        return SchoolModel.list_all()

    def get_school(self, school_id: str) -> Optional[School]:
        return SchoolModel.find(school_id)

    def create_school(self, payload: Optional[Dict[str, Any]]) -> WriteResult:
        try:
            data = SchoolCreate.model_validate(payload or {})
        except ValidationError as e:
            return WriteResult.invalid(*format_validation_errors(e))

        slug = data.slug or slugify(data.name)
        if not is_valid_slug(slug):
            return WriteResult.invalid("slug: could not derive a slug from the name, please provide one")
        if SchoolModel.slug_taken(slug):
            return WriteResult.conflict(f"A school with slug '{slug}' already exists")

        school = School(**data.model_dump(exclude={"slug"}), slug=slug)
        try:
            SchoolModel.create(school)
        except DuplicateKeyError:
            return WriteResult.conflict(f"A school with slug '{slug}' already exists")

        logger.info(f"Created school {school.school_id} ({slug})")
        self.invalidator.school_changed(slug)
        return WriteResult.created(school.model_dump(mode="json"))

    def update_school(self, school_id: str, payload: Optional[Dict[str, Any]]) -> WriteResult:
        try:
            data = SchoolUpdate.model_validate(payload or {})
        except ValidationError as e:
            return WriteResult.invalid(*format_validation_errors(e))

        existing = SchoolModel.find(school_id)
        if not existing:
            return WriteResult.not_found(f"School not found: {school_id}")

        changes = data.model_dump(exclude_unset=True)
        expected_version = changes.pop("version", None)
        if expected_version is not None and expected_version != existing.version:
            return WriteResult.conflict(
                f"School {school_id} was modified (version {existing.version}, got {expected_version})"
            )

        new_slug = changes.get("slug", existing.slug)
        if new_slug != existing.slug and SchoolModel.slug_taken(new_slug, exclude_id=school_id):
            return WriteResult.conflict(f"A school with slug '{new_slug}' already exists")

        if not changes:
            return WriteResult.updated(existing.model_dump(mode="json"))

        try:
            matched = SchoolModel.update(school_id, expected_version=expected_version, **changes)
        except DuplicateKeyError:
            return WriteResult.conflict(f"A school with slug '{new_slug}' already exists")
        if not matched:
            if expected_version is not None:
                return WriteResult.conflict(f"School {school_id} was modified concurrently")
            return WriteResult.not_found(f"School not found: {school_id}")

        updated = SchoolModel.find(school_id)
        logger.info(f"Updated school {school_id}: {sorted(changes)}")
        self.invalidator.school_changed(existing.slug, new_slug)
        return WriteResult.updated(updated.model_dump(mode="json"))

    def delete_school(self, school_id: str) -> WriteResult:
        existing = SchoolModel.find(school_id)
        if not existing:
            return WriteResult.not_found(f"School not found: {school_id}")

        # Courses first: a crash in between must not leave orphaned courses
        deleted_courses = CourseModel.delete_for_school(school_id)
        SchoolModel.delete(school_id)

        logger.info(f"Deleted school {school_id} ({existing.slug}) and {deleted_courses} courses")
        self.invalidator.school_changed(existing.slug)
        return WriteResult.deleted({
            "school_id": school_id,
            "slug": existing.slug,
            "deleted_courses": deleted_courses,
        })
