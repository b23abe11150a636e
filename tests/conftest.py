"""
Shared fixtures: an app wired to in-memory MongoDB (mongomock), in-memory Redis
(fakeredis) and a local filestore under tmp_path.
"""
import fakeredis
import mongomock
import pytest

from backend.app import create_app
from shared.modules.assets.local_asset_manager import LocalAssetManager
from shared.modules.cache.cache_key_generator import CacheKeyGenerator
from shared.modules.cache.redis_cache_store import RedisCacheStore

ADMIN_EMAIL = "admin@coursehub.io"
ADMIN_PASSWORD = "correct-horse-battery"
CDN_BASE_URL = "https://cdn.coursehub.io"
KEY_PREFIX = "test"


def school_payload(**overrides):
    payload = {
        "name": "Atlas Language School",
        "city": "Dublin",
        "country": "Ireland",
        "description": "English courses in the heart of Dublin.",
        "founded_year": 2003,
        "rating": 4.6,
    }
    payload.update(overrides)
    return payload


def course_payload(school_id, **overrides):
    payload = {
        "school_id": school_id,
        "name": "General English",
        "type": "general",
        "duration_weeks": 12,
        "price": 2400.0,
        "visa_included": False,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def mongo_db():
    return mongomock.MongoClient()["coursehub_test"]


@pytest.fixture
def redis_client():
    return fakeredis.FakeStrictRedis(server=fakeredis.FakeServer(), decode_responses=True)


@pytest.fixture
def cache_store(redis_client):
    return RedisCacheStore(redis_client, max_tries=2, backoff_factor=0.01)


@pytest.fixture
def keys():
    return CacheKeyGenerator(KEY_PREFIX)


@pytest.fixture
def asset_root(tmp_path):
    return tmp_path / "filestore"


@pytest.fixture
def config_overrides(asset_root):
    return {
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "ADMIN_EMAIL": ADMIN_EMAIL,
        "ADMIN_PASSWORD": ADMIN_PASSWORD,
        "ADMIN_NAME": "Test Admin",
        "CACHE_KEY_PREFIX": KEY_PREFIX,
        "CDN_BASE_URL": CDN_BASE_URL,
        "PUBLIC_API_BASE_URL": "https://api.coursehub.io",
        "RETRY_MAX_TRIES": 2,
        "INIT_DATABASE_ON_STARTUP": True,
        "LOG_LEVEL": "DEBUG",
    }


@pytest.fixture
def asset_manager(asset_root):
    return LocalAssetManager(base_dir=str(asset_root), public_base_url=CDN_BASE_URL)


@pytest.fixture
def app(config_overrides, mongo_db, cache_store, asset_manager):
    return create_app(config_overrides, mongo_db=mongo_db, cache_store=cache_store, asset_manager=asset_manager)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_headers(client):
    response = client.post("/api/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200, response.get_json()
    return {"Authorization": f"Bearer {response.get_json()['access_token']}"}


@pytest.fixture
def create_school(client, admin_headers):
    def _create(**overrides):
        response = client.post("/api/admin/schools", json=school_payload(**overrides), headers=admin_headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()
    return _create


@pytest.fixture
def create_course(client, admin_headers):
    def _create(school_id, **overrides):
        response = client.post("/api/admin/courses", json=course_payload(school_id, **overrides), headers=admin_headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()
    return _create
