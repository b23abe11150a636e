"""
Application configuration.

Values come from the environment (a local .env file is loaded first) and are
applied to ``app.config`` by the app factory. Tests pass overrides instead.
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    # MongoDB (read by Flask-PyMongo)
    MONGO_URI = os.environ.get("MONGO_URI", "mongodb://localhost:27017/coursehub")
    INIT_DATABASE_ON_STARTUP = _env_bool("INIT_DATABASE_ON_STARTUP", True)

    # Redis cache; an empty CACHE_URL disables caching
    CACHE_URL = os.environ.get("CACHE_URL", "redis://localhost:6379/0")
    CACHE_KEY_PREFIX = os.environ.get("CACHE_KEY_PREFIX", "coursehub")

    # Auth
    SECRET_KEY = os.environ.get("SECRET_KEY", "change-me-in-production")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 60))
    ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL")
    ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD")
    ADMIN_NAME = os.environ.get("ADMIN_NAME", "Administrator")

    # Object storage
    ASSET_STORAGE_PROVIDER = os.environ.get("ASSET_STORAGE_PROVIDER", "local")
    LOCAL_ASSET_ROOT = os.environ.get("LOCAL_ASSET_ROOT", "local_filestore")
    S3_BUCKET_NAME = os.environ.get("S3_BUCKET_NAME")
    S3_REGION = os.environ.get("S3_REGION", "us-east-1")
    AWS_ACCESS_KEY_ID = os.environ.get("AWS_ACCESS_KEY_ID")
    AWS_SECRET_ACCESS_KEY = os.environ.get("AWS_SECRET_ACCESS_KEY")
    CDN_BASE_URL = os.environ.get("CDN_BASE_URL")

    # Image ingestion
    MAX_UPLOAD_BYTES = int(os.environ.get("MAX_UPLOAD_BYTES", 5 * 1024 * 1024))
    IMAGE_MAX_DIMENSION = int(os.environ.get("IMAGE_MAX_DIMENSION", 1600))
    IMAGE_QUALITY = int(os.environ.get("IMAGE_QUALITY", 80))

    PUBLIC_API_BASE_URL = os.environ.get("PUBLIC_API_BASE_URL", "http://localhost:8000")

    # Transient error retries (store reads/writes, cache invalidation)
    RETRY_MAX_TRIES = int(os.environ.get("RETRY_MAX_TRIES", 3))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
