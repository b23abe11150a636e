from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection

from backend.models.base_nosql_model import BaseNoSqlModel
from shared.modules.blog.enums.blog_post_status_enum import BlogPostStatus
from shared.modules.blog.models.blog_post import BlogPost

LIST_PROJECTION = {
    "_id": 1,
    "title": 1,
    "slug": 1,
    "author_id": 1,
    "status": 1,
    "created_at": 1,
}

LIST_SORT = [("created_at", DESCENDING), ("slug", ASCENDING)]


class BlogPostModel(BaseNoSqlModel):
    """
    MongoDB persistence wrapper for BlogPost objects.
    """

    id_field = "post_id"

    @property
    def collection(self) -> Collection:
        return self.db.blog_posts

    @classmethod
    def _from_doc(cls, doc: Dict[str, Any]) -> BlogPost:
        return BlogPost(**cls.to_public(doc))

    @classmethod
    def find_published_list(cls) -> List[Dict[str, Any]]:
        docs = cls.find_many({"status": BlogPostStatus.PUBLISHED.value}, LIST_PROJECTION, sort=LIST_SORT)
        return [cls.to_public(doc) for doc in docs]

    @classmethod
    def find_published_by_slug(cls, slug: str) -> Optional[Dict[str, Any]]:
        doc = cls.find_one_by(slug=slug, status=BlogPostStatus.PUBLISHED.value)
        return cls.to_public(doc) if doc else None

    @classmethod
    def list_all(cls) -> List[Dict[str, Any]]:
        docs = cls.find_many({}, LIST_PROJECTION, sort=LIST_SORT)
        return [cls.to_public(doc) for doc in docs]

    @classmethod
    def slug_taken(cls, slug: str, exclude_id: Optional[str] = None) -> bool:
        doc = cls.find_one_by(projection={"_id": 1}, slug=slug)
        return bool(doc) and doc["_id"] != exclude_id
