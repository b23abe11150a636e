from typing import Any, Dict, List, Optional

from backend.modules.blog.models.blog_post_model import BlogPostModel
from shared.modules.cache.cache_key_generator import CACHE_TTL, CacheKeyGenerator
from shared.modules.cache.cache_store import CacheStore
from shared.modules.cache.cache_through import get_or_populate


class BlogReadService:
    """Cache-through reads of published blog posts."""

    def __init__(self, cache: CacheStore, keys: CacheKeyGenerator, ttls: Optional[Dict[str, int]] = None):
        self.cache = cache
        self.keys = keys
        self.ttls = {**CACHE_TTL, **(ttls or {})}

    def list_posts(self) -> List[Dict[str, Any]]:
        return get_or_populate(
            self.cache, self.keys.blog_list(), self.ttls["blog_list"], BlogPostModel.find_published_list
        )

    def get_post(self, slug: str) -> Optional[Dict[str, Any]]:
        return get_or_populate(
            self.cache,
            self.keys.blog_detail(slug),
            self.ttls["blog_detail"],
            lambda: BlogPostModel.find_published_by_slug(slug),
        )
