import time
from concurrent.futures import ThreadPoolExecutor

import pytest
from pymongo.errors import AutoReconnect, ServerSelectionTimeoutError

from backend.app import create_app
from backend.modules.catalog.models.school_model import SchoolModel
from conftest import school_payload
from test_redis_cache_store import broken_client
from shared.modules.cache.redis_cache_store import RedisCacheStore

LIST_FIELDS = {"school_id", "name", "slug", "city", "country", "rating", "logo", "price_from"}
DUBLIN_ACTIVE = "/api/schools?country=Ireland&city=Dublin&status=active"


class FlakyCollection:
    """Wraps a collection and fails the first ``failures`` calls to find()."""

    def __init__(self, collection, error, failures=1):
        self._collection = collection
        self._error = error
        self.failures = failures
        self.calls = 0

    def find(self, *args, **kwargs):
        self.calls += 1
        if self.calls <= self.failures:
            raise self._error
        return self._collection.find(*args, **kwargs)

    def __getattr__(self, name):
        return getattr(self._collection, name)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200


def test_dublin_search_before_and_after_creating_a_school(client, create_school):
    response = client.get(DUBLIN_ACTIVE)
    assert response.status_code == 200
    assert response.get_json() == []

    school = create_school()

    response = client.get(DUBLIN_ACTIVE)
    body = response.get_json()
    assert len(body) == 1
    assert set(body[0]) == LIST_FIELDS
    assert body[0]["school_id"] == school["school_id"]
    assert body[0]["slug"] == "atlas-language-school"


def test_list_is_filtered_and_ordered_by_rating(client, create_school):
    create_school(name="Second Best", rating=4.1)
    create_school(name="Best", rating=4.9)
    create_school(name="Cork English", city="Cork", rating=5.0)
    create_school(name="Valletta English", city="Valletta", country="Malta")
    create_school(name="Closed", status="inactive")

    body = client.get("/api/schools?country=Ireland&city=Dublin").get_json()
    assert [s["name"] for s in body] == ["Best", "Second Best"]

    body = client.get("/api/schools?country=Ireland").get_json()
    assert [s["name"] for s in body] == ["Cork English", "Best", "Second Best"]

    assert len(client.get("/api/schools").get_json()) == 4


def test_course_type_filter_on_school_list(client, create_school, create_course):
    intensive = create_school(name="Intensive School")
    create_school(name="General School")
    create_course(intensive["school_id"], type="intensive")

    body = client.get("/api/schools?type=intensive").get_json()
    assert [s["name"] for s in body] == ["Intensive School"]


@pytest.mark.parametrize("query", ["status=inactive", "type=cooking"])
def test_bad_list_filters_are_rejected(client, query):
    response = client.get(f"/api/schools?{query}")
    assert response.status_code == 400
    assert "error" in response.get_json()


def test_school_detail_embeds_courses(client, create_school, create_course):
    school = create_school()
    create_course(school["school_id"], name="IELTS Preparation", type="exam_preparation", price=1900.0)

    response = client.get("/api/schools/atlas-language-school")
    assert response.status_code == 200
    body = response.get_json()
    assert body["description"] == "English courses in the heart of Dublin."
    assert body["price_from"] == 1900.0
    assert [c["name"] for c in body["courses"]] == ["IELTS Preparation"]


def test_unknown_and_inactive_slugs_are_not_found(client, create_school, redis_client):
    create_school(name="Closed School", status="inactive")

    assert client.get("/api/schools/no-such-school").status_code == 404
    assert client.get("/api/schools/closed-school").status_code == 404
    assert redis_client.get("test:schools:detail:no-such-school") is None


def test_countries_and_cities(client, create_school):
    create_school(name="A", city="Dublin")
    create_school(name="B", city="Cork")
    create_school(name="C", city="Valletta", country="Malta")
    create_school(name="D", city="Berlin", country="Germany", status="inactive")

    assert client.get("/api/countries").get_json() == ["Ireland", "Malta"]
    assert client.get("/api/cities/Ireland").get_json() == ["Cork", "Dublin"]
    assert client.get("/api/cities/Germany").get_json() == []


def test_course_filters(client, create_school, create_course):
    school = create_school()
    closed = create_school(name="Closed", status="inactive")
    create_course(school["school_id"], name="General", price=2400.0)
    create_course(school["school_id"], name="Visa Intensive", type="intensive", price=3100.0, visa_included=True)
    create_course(closed["school_id"], name="Hidden", price=100.0)

    body = client.get("/api/courses").get_json()
    assert [c["name"] for c in body] == ["General", "Visa Intensive"]

    assert [c["name"] for c in client.get("/api/courses?visa_included=true").get_json()] == ["Visa Intensive"]
    assert [c["name"] for c in client.get("/api/courses?max_price=2500").get_json()] == ["General"]
    assert [c["name"] for c in client.get("/api/courses?type=intensive").get_json()] == ["Visa Intensive"]
    assert client.get(f"/api/courses?school_id={closed['school_id']}").get_json() == []

    assert client.get("/api/courses?max_price=cheap").status_code == 400
    assert client.get("/api/courses?visa_included=maybe").status_code == 400


def test_cold_and_warm_reads_are_identical(client, create_school, redis_client):
    create_school()

    cold = client.get(DUBLIN_ACTIVE)
    assert redis_client.get("test:schools:list:Ireland:Dublin:all") is not None
    warm = client.get(DUBLIN_ACTIVE)

    assert cold.status_code == warm.status_code == 200
    assert cold.data == warm.data

    cold_detail = client.get("/api/schools/atlas-language-school")
    warm_detail = client.get("/api/schools/atlas-language-school")
    assert cold_detail.data == warm_detail.data


def test_cache_entries_carry_their_ttls(client, create_school, redis_client):
    create_school()
    client.get("/api/schools?country=Ireland")
    client.get("/api/schools/atlas-language-school")
    client.get("/api/cities/Ireland")

    assert 0 < redis_client.ttl("test:schools:list:Ireland:all:all") <= 300
    assert 300 < redis_client.ttl("test:schools:detail:atlas-language-school") <= 600
    assert 600 < redis_client.ttl("test:cities:Ireland") <= 3600


def test_stale_list_is_served_until_ttl_expires(client, app, create_school, mongo_db):
    app.config["CACHE_TTL_OVERRIDES"] = {"school_list": 1}
    create_school()
    assert len(client.get(DUBLIN_ACTIVE).get_json()) == 1

    # Written behind the application's back, so nothing invalidates the list
    mongo_db.schools.insert_one({
        "_id": "direct-insert",
        "name": "Direct Insert",
        "slug": "direct-insert",
        "city": "Dublin",
        "country": "Ireland",
        "rating": 3.0,
        "status": "active",
    })
    assert len(client.get(DUBLIN_ACTIVE).get_json()) == 1

    time.sleep(1.2)
    assert len(client.get(DUBLIN_ACTIVE).get_json()) == 2


def test_store_failure_is_a_503_not_an_empty_list(client, monkeypatch, mongo_db):
    broken = FlakyCollection(mongo_db.schools, ServerSelectionTimeoutError("no servers"), failures=100)
    monkeypatch.setattr(SchoolModel, "collection", property(lambda self: broken))

    response = client.get(DUBLIN_ACTIVE)
    assert response.status_code == 503
    assert response.get_json() == {"error": "Data store unavailable"}


def test_transient_store_error_is_retried(client, monkeypatch, mongo_db, create_school):
    create_school()
    flaky = FlakyCollection(mongo_db.schools, AutoReconnect("primary stepped down"), failures=1)
    monkeypatch.setattr(SchoolModel, "collection", property(lambda self: flaky))

    response = client.get(DUBLIN_ACTIVE)
    assert response.status_code == 200
    assert len(response.get_json()) == 1
    assert flaky.calls == 2


def test_reads_and_writes_work_while_cache_is_down(config_overrides, mongo_db, asset_manager):
    store = RedisCacheStore(broken_client(), max_tries=2, backoff_factor=0.01)
    app = create_app(config_overrides, mongo_db=mongo_db, cache_store=store, asset_manager=asset_manager)
    client = app.test_client()
    token = client.post(
        "/api/admin/login",
        json={"email": config_overrides["ADMIN_EMAIL"], "password": config_overrides["ADMIN_PASSWORD"]},
    ).get_json()["access_token"]

    created = client.post("/api/admin/schools", json=school_payload(), headers={"Authorization": f"Bearer {token}"})
    assert created.status_code == 201

    response = client.get(DUBLIN_ACTIVE)
    assert response.status_code == 200
    assert len(response.get_json()) == 1


def test_concurrent_cold_reads_agree(app, create_school):
    create_school()
    create_school(name="Second", rating=3.9)

    def fetch(_):
        return app.test_client().get(DUBLIN_ACTIVE).data

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(fetch, range(16)))

    assert len(set(results)) == 1


def test_padded_filter_matches_the_same_schools_as_the_plain_one(client, create_school):
    create_school()

    padded = client.get("/api/schools?country=Ireland%20&city=%20Dublin")
    plain = client.get("/api/schools?country=Ireland&city=Dublin")

    assert len(padded.get_json()) == 1
    assert plain.data == padded.data
    assert client.get("/api/cities/Ireland%20").get_json() == ["Dublin"]
    assert client.get("/api/cities/Ireland").get_json() == ["Dublin"]


def test_lookalike_filters_do_not_share_cache_entries(client, create_school):
    create_school(name="Underscore School", city="St_Malo", country="France")
    create_school(name="Colon School", city="St:Malo", country="France")

    assert [s["name"] for s in client.get("/api/schools?city=St_Malo").get_json()] == ["Underscore School"]
    assert [s["name"] for s in client.get("/api/schools?city=St:Malo").get_json()] == ["Colon School"]


def test_literal_all_filter_does_not_poison_the_unfiltered_list(client, create_school):
    create_school()

    assert client.get("/api/schools?country=all").get_json() == []
    assert len(client.get("/api/schools").get_json()) == 1
