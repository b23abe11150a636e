from typing import Any, Dict, Iterable, List, Optional

from pymongo import ASCENDING
from pymongo.collection import Collection

from backend.models.base_nosql_model import BaseNoSqlModel
from shared.modules.catalog.models.course import Course

LIST_PROJECTION = {
    "_id": 1,
    "school_id": 1,
    "name": 1,
    "type": 1,
    "duration_weeks": 1,
    "price": 1,
    "visa_included": 1,
}

LIST_SORT = [("price", ASCENDING), ("name", ASCENDING)]


class CourseModel(BaseNoSqlModel):
    """
    MongoDB persistence wrapper for Course objects.
    Courses reference their school through ``school_id``.
    """

    id_field = "course_id"

    @property
    def collection(self) -> Collection:
        return self.db.courses

    @classmethod
    def _from_doc(cls, doc: Dict[str, Any]) -> Course:
        return Course(**cls.to_public(doc))

    @classmethod
    def find_list(
        cls,
        school_ids: Optional[Iterable[str]] = None,
        school_id: Optional[str] = None,
        course_type: Optional[str] = None,
        visa_included: Optional[bool] = None,
        max_price: Optional[float] = None,
    ) -> List[Dict[str, Any]]:
        """
        Filtered course list in list projection. ``school_ids`` restricts the
        result to a set of schools (e.g. the active ones).
        """
        filters: Dict[str, Any] = {}
        if school_ids is not None:
            allowed = list(school_ids)
            if school_id:
                if school_id not in allowed:
                    return []
                filters["school_id"] = school_id
            else:
                filters["school_id"] = {"$in": allowed}
        elif school_id:
            filters["school_id"] = school_id
        if course_type:
            filters["type"] = course_type
        if visa_included is not None:
            filters["visa_included"] = visa_included
        if max_price is not None:
            filters["price"] = {"$lte": max_price}

        docs = cls.find_many(filters, LIST_PROJECTION, sort=LIST_SORT)
        return [cls.to_public(doc) for doc in docs]

    @classmethod
    def for_school(cls, school_id: str) -> List[Dict[str, Any]]:
        return cls.find_list(school_id=school_id)

    @classmethod
    def school_ids_offering(cls, course_type: str) -> List[str]:
        return cls.distinct("school_id", {"type": course_type})

    @classmethod
    def lowest_price(cls, school_id: str) -> Optional[float]:
        docs = cls.find_many({"school_id": school_id}, {"price": 1}, sort=[("price", ASCENDING)], limit=1)
        return docs[0]["price"] if docs else None

    @classmethod
    def list_all(cls, school_id: Optional[str] = None) -> List[Dict[str, Any]]:
        filters = {"school_id": school_id} if school_id else {}
        docs = cls.find_many(filters, sort=[("school_id", ASCENDING), ("name", ASCENDING)])
        return [cls.to_public(doc) for doc in docs]

    @classmethod
    def delete_for_school(cls, school_id: str) -> int:
        instance = cls()
        result = instance.collection.delete_many({"school_id": school_id})
        return result.deleted_count
