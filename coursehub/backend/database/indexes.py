"""
Index definitions for the catalog collections.

The public school filters (country, city, status) rely on the compound index;
slugs and emails get unique indexes so duplicate writes fail in the store even
if two admins race past the service-level check.
"""
import logging
from pymongo import ASCENDING, DESCENDING

logger = logging.getLogger(__name__)

INDEXES = {
    "schools": [
        ([("country", ASCENDING), ("city", ASCENDING), ("status", ASCENDING)], {"name": "country_city_status"}),
        ([("slug", ASCENDING)], {"name": "slug_unique", "unique": True}),
        ([("status", ASCENDING), ("rating", DESCENDING)], {"name": "status_rating"}),
    ],
    "courses": [
        ([("school_id", ASCENDING), ("type", ASCENDING)], {"name": "school_type"}),
    ],
    "users": [
        ([("email", ASCENDING)], {"name": "email_unique", "unique": True}),
    ],
    "blog_posts": [
        ([("slug", ASCENDING)], {"name": "slug_unique", "unique": True}),
        ([("status", ASCENDING), ("created_at", DESCENDING)], {"name": "status_created_at"}),
    ],
}


def ensure_indexes(db) -> None:
    """Create every index. Safe to run on each startup."""
    for collection_name, indexes in INDEXES.items():
        for keys, options in indexes:
            db[collection_name].create_index(keys, **options)
    logger.info(f"Indexes ensured for {', '.join(INDEXES)}")
