import pytest

from conftest import school_payload

DUBLIN_ACTIVE = "/api/schools?country=Ireland&city=Dublin&status=active"


@pytest.mark.parametrize("method, path", [
    ("post", "/api/admin/schools"),
    ("put", "/api/admin/schools/some-id"),
    ("delete", "/api/admin/schools/some-id"),
    ("get", "/api/admin/schools"),
])
def test_admin_routes_require_a_token(client, method, path):
    response = getattr(client, method)(path, json={})
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_malformed_token_is_rejected(client):
    response = client.get("/api/admin/schools", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_create_school_returns_the_stored_record(client, admin_headers, mongo_db):
    response = client.post("/api/admin/schools", json=school_payload(slug="atlas-dublin"), headers=admin_headers)

    assert response.status_code == 201
    body = response.get_json()
    assert body["slug"] == "atlas-dublin"
    assert body["status"] == "active"
    assert body["version"] == 1
    assert mongo_db.schools.find_one({"_id": body["school_id"]})["name"] == "Atlas Language School"


def test_create_invalidates_cached_lists(client, create_school):
    assert client.get(DUBLIN_ACTIVE).get_json() == []
    assert client.get("/api/countries").get_json() == []

    create_school()

    assert len(client.get(DUBLIN_ACTIVE).get_json()) == 1
    assert client.get("/api/countries").get_json() == ["Ireland"]


def test_invalid_payload_is_rejected_without_touching_the_store(client, admin_headers, mongo_db):
    response = client.post(
        "/api/admin/schools",
        json=school_payload(rating=7, unknown_field="x"),
        headers=admin_headers,
    )

    assert response.status_code == 400
    body = response.get_json()
    assert any(detail.startswith("rating") for detail in body["details"])
    assert any(detail.startswith("unknown_field") for detail in body["details"])
    assert mongo_db.schools.count_documents({}) == 0


def test_missing_body_is_rejected(client, admin_headers):
    response = client.post("/api/admin/schools", data="not json", headers=admin_headers)
    assert response.status_code == 400


def test_duplicate_slug_is_a_conflict(client, admin_headers, create_school, mongo_db):
    create_school()

    response = client.post("/api/admin/schools", json=school_payload(city="Cork"), headers=admin_headers)

    assert response.status_code == 409
    assert mongo_db.schools.count_documents({}) == 1
    assert mongo_db.schools.find_one({})["city"] == "Dublin"


def test_deactivating_a_school_removes_it_from_public_reads(client, admin_headers, create_school):
    school = create_school()
    assert len(client.get(DUBLIN_ACTIVE).get_json()) == 1
    assert client.get("/api/schools/atlas-language-school").status_code == 200

    response = client.put(
        f"/api/admin/schools/{school['school_id']}",
        json={"status": "inactive"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.get_json()["status"] == "inactive"
    assert response.get_json()["version"] == 2
    assert client.get(DUBLIN_ACTIVE).get_json() == []
    assert client.get("/api/schools/atlas-language-school").status_code == 404
    assert client.get("/api/countries").get_json() == []


def test_slug_change_invalidates_old_detail(client, admin_headers, create_school, redis_client):
    school = create_school()
    client.get("/api/schools/atlas-language-school")
    assert redis_client.get("test:schools:detail:atlas-language-school") is not None

    response = client.put(
        f"/api/admin/schools/{school['school_id']}",
        json={"slug": "atlas-dublin", "rating": 4.8},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert redis_client.get("test:schools:detail:atlas-language-school") is None
    assert client.get("/api/schools/atlas-language-school").status_code == 404
    assert client.get("/api/schools/atlas-dublin").get_json()["rating"] == 4.8


def test_slug_change_onto_another_school_is_a_conflict(client, admin_headers, create_school):
    create_school(name="First")
    second = create_school(name="Second")

    response = client.put(f"/api/admin/schools/{second['school_id']}", json={"slug": "first"}, headers=admin_headers)

    assert response.status_code == 409
    assert client.get("/api/schools/second").status_code == 200


def test_stale_version_is_a_conflict(client, admin_headers, create_school, mongo_db):
    school = create_school()
    path = f"/api/admin/schools/{school['school_id']}"

    first = client.put(path, json={"rating": 4.0, "version": 1}, headers=admin_headers)
    assert first.status_code == 200
    assert first.get_json()["version"] == 2

    second = client.put(path, json={"rating": 3.0, "version": 1}, headers=admin_headers)
    assert second.status_code == 409
    assert mongo_db.schools.find_one({"_id": school["school_id"]})["rating"] == 4.0


def test_null_for_required_field_is_invalid(client, admin_headers, create_school):
    school = create_school()
    response = client.put(f"/api/admin/schools/{school['school_id']}", json={"name": None}, headers=admin_headers)
    assert response.status_code == 400


def test_update_unknown_school_is_not_found(client, admin_headers):
    response = client.put("/api/admin/schools/missing", json={"rating": 4.0}, headers=admin_headers)
    assert response.status_code == 404


def test_delete_school_cascades_to_courses(client, admin_headers, create_school, create_course, mongo_db):
    school = create_school()
    create_course(school["school_id"])
    create_course(school["school_id"], name="Business English", type="business")
    assert len(client.get("/api/courses").get_json()) == 2

    response = client.delete(f"/api/admin/schools/{school['school_id']}", headers=admin_headers)

    assert response.status_code == 200
    assert response.get_json()["deleted_courses"] == 2
    assert mongo_db.courses.count_documents({}) == 0
    assert client.get("/api/courses").get_json() == []
    assert client.get(DUBLIN_ACTIVE).get_json() == []
    assert client.delete(f"/api/admin/schools/{school['school_id']}", headers=admin_headers).status_code == 404


def test_admin_list_includes_inactive_schools(client, admin_headers, create_school):
    create_school(name="Open")
    create_school(name="Closed", status="inactive")

    body = client.get("/api/admin/schools", headers=admin_headers).get_json()
    assert [s["name"] for s in body] == ["Closed", "Open"]
