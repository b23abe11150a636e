"""
Base model class for MongoDB operations using Flask context.
Provides Rails-like ActiveRecord pattern without explicit dependency injection.
"""
from datetime import datetime, timezone
from typing import Optional, Any, Dict, List, Sequence, Tuple
from enum import Enum
from backend.database.context import DatabaseContext
from backend.database.retry import retry_transient_store_errors


class BaseNoSqlModel:
    """
    Base class for MongoDB models that automatically handles database connection
    through Flask context without requiring explicit dependency injection.

    Similar to Rails ActiveRecord pattern where models automatically
    have access to the database connection and common CRUD operations.

    Documents use the domain object's id field (``id_field``) as ``_id``.
    """

    id_field = "id"

    @property
    def db(self):
        """Get database instance from Flask context automatically."""
        return DatabaseContext.get_mongo_db()

    @property
    def collection(self):
        """
        Get the MongoDB collection for this model.
        Override in subclasses to specify collection name.
        """
        raise NotImplementedError("Subclasses must implement collection property")

    # -------------------------------------------------------------------------
    # Common CRUD operations (Rails-like class methods)
    # -------------------------------------------------------------------------

    @classmethod
    def find(cls, doc_id: str) -> Optional[Any]:
        """
        Find a document by its ID and return as model instance.
        Rails-like: SchoolModel.find(id)
        """
        doc = cls.find_by_id(doc_id)
        if doc:
            return cls._from_doc(doc)
        return None

    @classmethod
    @retry_transient_store_errors
    def find_by_id(cls, doc_id: str, projection: Optional[Dict[str, int]] = None) -> Optional[Dict[str, Any]]:
        """
        Find a raw document by its ID.
        Rails-like: SchoolModel.find_by_id(id) - returns raw dict
        """
        instance = cls()
        return instance.collection.find_one({"_id": doc_id}, projection)

    @classmethod
    @retry_transient_store_errors
    def find_one_by(cls, projection: Optional[Dict[str, int]] = None, **filters) -> Optional[Dict[str, Any]]:
        """
        Rails-like: SchoolModel.find_one_by(slug="atlas-dublin")
        """
        instance = cls()
        return instance.collection.find_one(filters, projection)

    @classmethod
    @retry_transient_store_errors
    def find_many(
        cls,
        filters: Optional[Dict[str, Any]] = None,
        projection: Optional[Dict[str, int]] = None,
        sort: Optional[Sequence[Tuple[str, int]]] = None,
        limit: int = 0,
    ) -> List[Dict[str, Any]]:
        """
        Run a filtered, projected query and materialise the results.
        """
        instance = cls()
        cursor = instance.collection.find(filters or {}, projection)
        if sort:
            cursor = cursor.sort(list(sort))
        if limit:
            cursor = cursor.limit(limit)
        return list(cursor)

    @classmethod
    @retry_transient_store_errors
    def distinct(cls, field: str, filters: Optional[Dict[str, Any]] = None) -> List[Any]:
        instance = cls()
        return instance.collection.distinct(field, filters or {})

    @classmethod
    def create(cls, model_instance: Any) -> Any:
        """
        Create a new document in MongoDB from a Pydantic model instance.
        Rails-like: SchoolModel.create(school)
        """
        doc = model_instance.model_dump()
        doc["_id"] = doc.pop(cls.id_field)

        instance = cls()
        instance.collection.insert_one(doc)
        return model_instance

    @classmethod
    def update(cls, doc_id: str, expected_version: Optional[int] = None, **kwargs) -> bool:
        """
        Update a document by ID using kwargs.
        Rails-like: SchoolModel.update(id, status=SchoolStatus.INACTIVE, name="Updated")

        Every update bumps ``version``. When ``expected_version`` is given the
        update only applies if the stored version still matches.
        Not retried on transient errors: the write may already have been applied.
        Returns False when no document matched.
        """
        instance = cls()

        # Convert Pydantic enums to their values for MongoDB storage
        processed_data = {}
        for key, value in kwargs.items():
            if isinstance(value, Enum):
                processed_data[key] = value.value
            else:
                processed_data[key] = value

        processed_data["updated_at"] = datetime.now(timezone.utc)

        query: Dict[str, Any] = {"_id": doc_id}
        if expected_version is not None:
            query["version"] = expected_version

        result = instance.collection.update_one(
            query,
            {"$set": processed_data, "$inc": {"version": 1}}
        )
        return result.matched_count > 0

    @classmethod
    def push(cls, doc_id: str, field: str, value: Any) -> bool:
        """Append to an array field, bumping ``version``."""
        instance = cls()
        result = instance.collection.update_one(
            {"_id": doc_id},
            {
                "$push": {field: value},
                "$set": {"updated_at": datetime.now(timezone.utc)},
                "$inc": {"version": 1},
            }
        )
        return result.matched_count > 0

    @classmethod
    def delete(cls, doc_id: str) -> bool:
        instance = cls()
        result = instance.collection.delete_one({"_id": doc_id})
        return result.deleted_count > 0

    @classmethod
    def _from_doc(cls, doc: Dict[str, Any]) -> Any:
        """
        Convert MongoDB document to model instance.
        Override in subclasses to provide proper model instantiation.
        """
        raise NotImplementedError("Subclasses must implement _from_doc method")

    @classmethod
    def to_public(cls, doc: Dict[str, Any]) -> Dict[str, Any]:
        """
        Rename ``_id`` to the domain id field for API payloads.
        """
        doc = dict(doc)
        if "_id" in doc:
            doc[cls.id_field] = str(doc.pop("_id"))
        return doc
