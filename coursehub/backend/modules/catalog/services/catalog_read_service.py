"""
Public catalog reads (schools, courses, countries, cities).

Every read goes through the cache first and falls back to MongoDB on a miss
or when the cache is unreachable. Nothing personalised is cached here.
"""
import logging
from typing import Any, Dict, List, Optional

from backend.modules.catalog.models.course_model import CourseModel
from backend.modules.catalog.models.school_model import SchoolModel
from shared.modules.cache.cache_key_generator import CACHE_TTL, CacheKeyGenerator
from shared.modules.cache.cache_store import CacheStore
from shared.modules.cache.cache_through import get_or_populate

logger = logging.getLogger(__name__)


def clean_filter(value: Optional[str]) -> Optional[str]:
    """Normalised filter value, shared by the cache key and the store query."""
    if value is None:
        return None
    return value.strip() or None


class CatalogReadService:

    def __init__(self, cache: CacheStore, keys: CacheKeyGenerator, ttls: Optional[Dict[str, int]] = None):
        self.cache = cache
        self.keys = keys
        self.ttls = {**CACHE_TTL, **(ttls or {})}

    def list_schools(
        self,
        country: Optional[str] = None,
        city: Optional[str] = None,
        course_type: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Active schools matching the filters, best rated first, list projection only.
        """
        country, city, course_type = clean_filter(country), clean_filter(city), clean_filter(course_type)

        def load():
            school_ids = CourseModel.school_ids_offering(course_type) if course_type else None
            return SchoolModel.find_list(country=country, city=city, school_ids=school_ids)

        return get_or_populate(
            self.cache,
            self.keys.school_list(country, city, course_type),
            self.ttls["school_list"],
            load,
        )

    def get_school(self, slug: str) -> Optional[Dict[str, Any]]:
        """
        Full school record with its courses, or None for unknown/inactive slugs.
        """
        def load():
            school = SchoolModel.find_detail_by_slug(slug)
            if school is None:
                return None
            school["courses"] = CourseModel.for_school(school["school_id"])
            return school

        return get_or_populate(self.cache, self.keys.school_detail(slug), self.ttls["school_detail"], load)

    def list_courses(
        self,
        school_id: Optional[str] = None,
        course_type: Optional[str] = None,
        visa_included: Optional[bool] = None,
        max_price: Optional[float] = None,
    ) -> List[Dict[str, Any]]:
        school_id, course_type = clean_filter(school_id), clean_filter(course_type)
        filters = {
            "school_id": school_id,
            "type": course_type,
            "visa_included": visa_included,
            "max_price": max_price,
        }

        def load():
            return CourseModel.find_list(
                school_ids=SchoolModel.active_ids(),
                school_id=school_id,
                course_type=course_type,
                visa_included=visa_included,
                max_price=max_price,
            )

        return get_or_populate(self.cache, self.keys.course_list(filters), self.ttls["course_list"], load)

    def list_countries(self) -> List[str]:
        return get_or_populate(self.cache, self.keys.countries(), self.ttls["countries"], SchoolModel.list_countries)

    def list_cities(self, country: str) -> List[str]:
        country = clean_filter(country)
        if country is None:
            return []
        return get_or_populate(
            self.cache,
            self.keys.cities(country),
            self.ttls["cities"],
            lambda: SchoolModel.list_cities(country),
        )
