from typing import Any, Dict, Iterable, List, Optional

from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection

from backend.database.retry import retry_transient_store_errors
from backend.models.base_nosql_model import BaseNoSqlModel
from shared.modules.catalog.enums.school_status_enum import SchoolStatus
from shared.modules.catalog.models.school import School

# Fields needed to render a school card in search results
LIST_PROJECTION = {
    "_id": 1,
    "name": 1,
    "slug": 1,
    "city": 1,
    "country": 1,
    "rating": 1,
    "logo": 1,
    "price_from": 1,
}

LIST_SORT = [("rating", DESCENDING), ("name", ASCENDING)]


class SchoolModel(BaseNoSqlModel):
    """
    MongoDB persistence wrapper for School objects.
    Inherits common CRUD operations from BaseNoSqlModel.
    """

    id_field = "school_id"

    @property
    def collection(self) -> Collection:
        """Get the schools collection from the database."""
        return self.db.schools

    @classmethod
    def _from_doc(cls, doc: Dict[str, Any]) -> School:
        return School(**cls.to_public(doc))

    # -------------------------------------------------------------------------
    # Public read queries
    # -------------------------------------------------------------------------
    @classmethod
    def find_list(
        cls,
        country: Optional[str] = None,
        city: Optional[str] = None,
        status: SchoolStatus = SchoolStatus.ACTIVE,
        school_ids: Optional[Iterable[str]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Filtered school list in list projection.
        Served by the (country, city, status) compound index.
        """
        filters: Dict[str, Any] = {}
        if country:
            filters["country"] = country
        if city:
            filters["city"] = city
        if status:
            filters["status"] = SchoolStatus(status).value
        if school_ids is not None:
            filters["_id"] = {"$in": list(school_ids)}

        docs = cls.find_many(filters, LIST_PROJECTION, sort=LIST_SORT)
        return [cls.to_public(doc) for doc in docs]

    @classmethod
    def find_detail_by_slug(cls, slug: str, active_only: bool = True) -> Optional[Dict[str, Any]]:
        """Full record (detail projection) for a slug, or None."""
        filters: Dict[str, Any] = {"slug": slug}
        if active_only:
            filters["status"] = SchoolStatus.ACTIVE.value
        doc = cls.find_one_by(**filters)
        return cls.to_public(doc) if doc else None

    @classmethod
    def active_ids(cls) -> List[str]:
        return cls.distinct("_id", {"status": SchoolStatus.ACTIVE.value})

    @classmethod
    def list_countries(cls) -> List[str]:
        return sorted(cls.distinct("country", {"status": SchoolStatus.ACTIVE.value}))

    @classmethod
    def list_cities(cls, country: str) -> List[str]:
        return sorted(cls.distinct("city", {"country": country, "status": SchoolStatus.ACTIVE.value}))

    @classmethod
    def top_slugs(cls, limit: int) -> List[str]:
        """Best rated active schools, used to pick the pages to pre-render."""
        docs = cls.find_many(
            {"status": SchoolStatus.ACTIVE.value},
            {"slug": 1},
            sort=LIST_SORT,
            limit=limit,
        )
        return [doc["slug"] for doc in docs]

    # -------------------------------------------------------------------------
    # Admin queries
    # -------------------------------------------------------------------------
    @classmethod
    def list_all(cls) -> List[Dict[str, Any]]:
        docs = cls.find_many({}, sort=[("name", ASCENDING)])
        return [cls.to_public(doc) for doc in docs]

    @classmethod
    def slug_taken(cls, slug: str, exclude_id: Optional[str] = None) -> bool:
        doc = cls.find_one_by(projection={"_id": 1}, slug=slug)
        return bool(doc) and doc["_id"] != exclude_id

    @classmethod
    @retry_transient_store_errors
    def set_price_from(cls, school_id: str, price_from: Optional[float]) -> bool:
        """
        Refresh the denormalised lowest course price. Derived data, so the
        school's ``version`` is left alone. A plain $set, safe to retry.
        """
        instance = cls()
        result = instance.collection.update_one({"_id": school_id}, {"$set": {"price_from": price_from}})
        return result.matched_count > 0
