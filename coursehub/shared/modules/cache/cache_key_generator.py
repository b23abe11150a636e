# Typed cache keys for every cached read, plus their TTLs.
# All keys are namespaced with a configurable prefix: {prefix}:{entity}:{kind}:...

import hashlib
import json
from typing import Any, Dict, Optional
from urllib.parse import quote

# Seconds
CACHE_TTL = {
    "school_list": 300,
    "school_detail": 600,
    "course_list": 300,
    "countries": 3600,
    "cities": 3600,
    "blog_list": 300,
    "blog_detail": 300,
}


class CacheKeyGenerator:
    ALL = "all"

    def __init__(self, prefix: str = "coursehub"):
        self.prefix = prefix

    @staticmethod
    def generate(parameters: Dict[str, Any]) -> str:
        """Stable hash of a filter set, independent of key order."""
        key_str = json.dumps(parameters, sort_keys=True, default=str)
        return hashlib.sha256(key_str.encode()).hexdigest()

    def _segment(self, value: Optional[Any]) -> str:
        """
        Percent-encode a filter value so distinct values never share a key.
        A literal "all" is escaped to keep it apart from the unset filter.
        """
        if value is None or str(value) == "":
            return self.ALL
        encoded = quote(str(value), safe="")
        if encoded == self.ALL:
            return "%61" + encoded[1:]
        return encoded

    def _key(self, *parts: str) -> str:
        return ":".join((self.prefix,) + parts)

    # --- Schools ---
    def school_list(self, country=None, city=None, course_type=None) -> str:
        return self._key("schools", "list", self._segment(country), self._segment(city), self._segment(course_type))

    def school_list_pattern(self) -> str:
        return self._key("schools", "list", "*")

    def school_detail(self, slug: str) -> str:
        return self._key("schools", "detail", self._segment(slug))

    # --- Courses ---
    def course_list(self, filters: Dict[str, Any]) -> str:
        normalized = {k: v for k, v in (filters or {}).items() if v is not None}
        return self._key("courses", "list", self.generate(normalized))

    def course_list_pattern(self) -> str:
        return self._key("courses", "list", "*")

    # --- Locations ---
    def countries(self) -> str:
        return self._key("countries")

    def cities(self, country: str) -> str:
        return self._key("cities", self._segment(country))

    def cities_pattern(self) -> str:
        return self._key("cities", "*")

    # --- Blog ---
    def blog_list(self) -> str:
        return self._key("blog", "list")

    def blog_detail(self, slug: str) -> str:
        return self._key("blog", "detail", self._segment(slug))
