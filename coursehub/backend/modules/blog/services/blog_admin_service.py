import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from pymongo.errors import DuplicateKeyError

from backend.modules.blog.models.blog_post_model import BlogPostModel
from backend.modules.blog.schemas.blog_schemas import BlogPostCreate, BlogPostUpdate
from backend.modules.cache.cache_invalidator import CacheInvalidator
from backend.modules.user.models.user_model import UserModel
from shared.modules.blog.models.blog_post import BlogPost
from shared.modules.common.slugs import is_valid_slug, slugify
from shared.modules.result.validation import format_validation_errors
from shared.modules.result.write_result import WriteResult

logger = logging.getLogger(__name__)


class BlogAdminService:

    def __init__(self, invalidator: CacheInvalidator):
        self.invalidator = invalidator

    def list_posts(self) -> List[Dict[str, Any]]:
        """All posts including drafts, without content."""
        return BlogPostModel.list_all()

    def create_post(self, payload: Optional[Dict[str, Any]], author_id: str) -> WriteResult:
        try:
            data = BlogPostCreate.model_validate(payload or {})
        except ValidationError as e:
            return WriteResult.invalid(*format_validation_errors(e))

        if not UserModel.find_by_id(author_id, {"_id": 1}):
            return WriteResult.invalid(f"author_id: no user with id {author_id}")

        slug = data.slug or slugify(data.title)
        if not is_valid_slug(slug):
            return WriteResult.invalid("slug: could not derive a slug from the title, please provide one")
        if BlogPostModel.slug_taken(slug):
            return WriteResult.conflict(f"A blog post with slug '{slug}' already exists")

        post = BlogPost(**data.model_dump(exclude={"slug"}), slug=slug, author_id=author_id)
        try:
            BlogPostModel.create(post)
        except DuplicateKeyError:
            return WriteResult.conflict(f"A blog post with slug '{slug}' already exists")

        logger.info(f"Created blog post {post.post_id} ({slug})")
        self.invalidator.blog_post_changed(slug)
        return WriteResult.created(post.model_dump(mode="json"))

    def update_post(self, post_id: str, payload: Optional[Dict[str, Any]]) -> WriteResult:
        try:
            data = BlogPostUpdate.model_validate(payload or {})
        except ValidationError as e:
            return WriteResult.invalid(*format_validation_errors(e))

        existing = BlogPostModel.find(post_id)
        if not existing:
            return WriteResult.not_found(f"Blog post not found: {post_id}")

        changes = data.model_dump(exclude_unset=True)
        expected_version = changes.pop("version", None)
        if expected_version is not None and expected_version != existing.version:
            return WriteResult.conflict(
                f"Blog post {post_id} was modified (version {existing.version}, got {expected_version})"
            )

        new_slug = changes.get("slug", existing.slug)
        if new_slug != existing.slug and BlogPostModel.slug_taken(new_slug, exclude_id=post_id):
            return WriteResult.conflict(f"A blog post with slug '{new_slug}' already exists")
        if not changes:
            return WriteResult.updated(existing.model_dump(mode="json"))

        try:
            matched = BlogPostModel.update(post_id, expected_version=expected_version, **changes)
        except DuplicateKeyError:
            return WriteResult.conflict(f"A blog post with slug '{new_slug}' already exists")
        if not matched:
            if expected_version is not None:
                return WriteResult.conflict(f"Blog post {post_id} was modified concurrently")
            return WriteResult.not_found(f"Blog post not found: {post_id}")

        self.invalidator.blog_post_changed(existing.slug, new_slug)
        return WriteResult.updated(BlogPostModel.find(post_id).model_dump(mode="json"))

    def delete_post(self, post_id: str) -> WriteResult:
        existing = BlogPostModel.find(post_id)
        if not existing:
            return WriteResult.not_found(f"Blog post not found: {post_id}")

        BlogPostModel.delete(post_id)
        logger.info(f"Deleted blog post {post_id} ({existing.slug})")
        self.invalidator.blog_post_changed(existing.slug)
        return WriteResult.deleted({"post_id": post_id, "slug": existing.slug})
