import atexit
import logging

from flask import Flask, jsonify
from flask_pymongo import PyMongo
from pymongo.errors import PyMongoError

from backend.config import Config
from backend.database.context import MONGO_DB_EXTENSION
from backend.factories.service_factory import ASSET_MANAGER_EXTENSION, CACHE_STORE_EXTENSION
from shared.modules.assets.asset_manager_factory import create_asset_manager
from shared.modules.cache.cache_store import CacheStore, NullCacheStore
from shared.modules.cache.redis_cache_store import RedisCacheStore
from shared.modules.cache.redis_client import create_redis_client

logger = logging.getLogger(__name__)

mongo = PyMongo()


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger("botocore").setLevel(logging.WARNING)


def create_cache_store(config) -> CacheStore:
    """Redis-backed cache, or a no-op cache when CACHE_URL is empty."""
    url = config.get("CACHE_URL")
    if not url:
        logger.warning("CACHE_URL is not set, caching is disabled")
        return NullCacheStore()
    return RedisCacheStore(create_redis_client(url), max_tries=config.get("RETRY_MAX_TRIES", 3))


def create_app(config_overrides=None, mongo_db=None, cache_store=None, asset_manager=None):
    """
    Application factory.

    Process-wide resources (MongoDB client, cache connection, asset manager) are
    created here once and released at interpreter exit. Tests inject their own.
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    app.config.setdefault("CACHE_TTL_OVERRIDES", {})
    if config_overrides:
        app.config.update(config_overrides)
    configure_logging(app.config["LOG_LEVEL"])

    # Uploads are capped by the ingestion service; leave headroom for multipart framing
    app.config["MAX_CONTENT_LENGTH"] = app.config["MAX_UPLOAD_BYTES"] + 1024 * 1024

    # MongoDB config
    if mongo_db is None:
        mongo.init_app(app)
        mongo_db = mongo.db
        atexit.register(mongo.cx.close)
    app.extensions[MONGO_DB_EXTENSION] = mongo_db

    if cache_store is None:
        cache_store = create_cache_store(app.config)
        atexit.register(cache_store.close)
    app.extensions[CACHE_STORE_EXTENSION] = cache_store

    app.extensions[ASSET_MANAGER_EXTENSION] = asset_manager or create_asset_manager(app.config)

    # Import and register blueprints after the extensions are in place
    from backend.api.admin_controller import bp as admin_controller_bp
    from backend.api.assets_controller import bp as assets_controller_bp
    from backend.api.auth_controller import bp as auth_controller_bp
    from backend.api.blog_controller import bp as blog_controller_bp
    from backend.api.catalog_controller import bp as catalog_controller_bp
    from backend.api.errors import register_error_handlers
    from backend.cli import init_database, register_cli

    app.register_blueprint(catalog_controller_bp)
    app.register_blueprint(blog_controller_bp)
    app.register_blueprint(auth_controller_bp)
    app.register_blueprint(admin_controller_bp)
    app.register_blueprint(assets_controller_bp)
    register_error_handlers(app)
    register_cli(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        return jsonify({"status": "CourseHub backend is running ✅"}), 200

    if app.config["INIT_DATABASE_ON_STARTUP"]:
        with app.app_context():
            try:
                init_database()
            except PyMongoError as e:
                # Store-backed requests answer 503 until MongoDB is reachable
                logger.error(f"Database initialisation failed: {e}")

    logger.info("🌟 Backend: application created")
    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=8000, debug=False)
