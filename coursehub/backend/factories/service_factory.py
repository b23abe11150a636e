"""
Service Factory for creating business service instances with proper dependencies.
"""
from flask import current_app

from backend.modules.blog.services.blog_admin_service import BlogAdminService
from backend.modules.blog.services.blog_read_service import BlogReadService
from backend.modules.cache.cache_invalidator import CacheInvalidator
from backend.modules.catalog.services.catalog_read_service import CatalogReadService
from backend.modules.catalog.services.course_admin_service import CourseAdminService
from backend.modules.catalog.services.image_ingestion_service import ImageIngestionService
from backend.modules.catalog.services.school_admin_service import SchoolAdminService
from backend.modules.user.services.auth_service import AuthService
from shared.modules.assets.asset_manager import AssetManager
from shared.modules.assets.image_processor import ImageProcessor
from shared.modules.cache.cache_key_generator import CacheKeyGenerator
from shared.modules.cache.cache_store import CacheStore

CACHE_STORE_EXTENSION = "coursehub_cache_store"
ASSET_MANAGER_EXTENSION = "coursehub_asset_manager"


class ServiceFactory:
    """
    Factory for creating service instances with injected dependencies.
    Process-wide resources (cache store, asset manager) are read from the
    current Flask app, so this works in request context and in CLI commands.
    """

    @staticmethod
    def get_cache_store() -> CacheStore:
        return current_app.extensions[CACHE_STORE_EXTENSION]

    @staticmethod
    def get_asset_manager() -> AssetManager:
        return current_app.extensions[ASSET_MANAGER_EXTENSION]

    @staticmethod
    def create_cache_key_generator() -> CacheKeyGenerator:
        return CacheKeyGenerator(current_app.config["CACHE_KEY_PREFIX"])

    @staticmethod
    def create_cache_invalidator() -> CacheInvalidator:
        return CacheInvalidator(ServiceFactory.get_cache_store(), ServiceFactory.create_cache_key_generator())

    # --- Reads ---
    @staticmethod
    def create_catalog_read_service() -> CatalogReadService:
        return CatalogReadService(
            ServiceFactory.get_cache_store(),
            ServiceFactory.create_cache_key_generator(),
            current_app.config.get("CACHE_TTL_OVERRIDES"),
        )

    @staticmethod
    def create_blog_read_service() -> BlogReadService:
        return BlogReadService(
            ServiceFactory.get_cache_store(),
            ServiceFactory.create_cache_key_generator(),
            current_app.config.get("CACHE_TTL_OVERRIDES"),
        )

    # --- Writes ---
    @staticmethod
    def create_school_admin_service() -> SchoolAdminService:
        return SchoolAdminService(ServiceFactory.create_cache_invalidator())

    @staticmethod
    def create_course_admin_service() -> CourseAdminService:
        return CourseAdminService(ServiceFactory.create_cache_invalidator())

    @staticmethod
    def create_blog_admin_service() -> BlogAdminService:
        return BlogAdminService(ServiceFactory.create_cache_invalidator())

    @staticmethod
    def create_image_ingestion_service() -> ImageIngestionService:
        config = current_app.config
        return ImageIngestionService(
            asset_manager=ServiceFactory.get_asset_manager(),
            image_processor=ImageProcessor(
                max_dimension=config["IMAGE_MAX_DIMENSION"],
                quality=config["IMAGE_QUALITY"],
            ),
            invalidator=ServiceFactory.create_cache_invalidator(),
            max_upload_bytes=config["MAX_UPLOAD_BYTES"],
        )

    @staticmethod
    def create_auth_service() -> AuthService:
        return AuthService()
