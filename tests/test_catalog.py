"""Test 질문 카탈로그(패밀리/질문) 관리 API를 검증하는 자동화 테스트입니다."""

from foxclub.models.form import FormAnswer, UserForm
from foxclub.models.question import Question, QuestionFamily
from tests.conftest import auth_headers


def test_first_family_gets_order_one_then_increments(client, seed_users):
    headers = auth_headers(client, "admin")
    first = client.post("/api/admin/question-families", json={"label": "Sorties", "type": "TYPE_1"}, headers=headers)
    assert first.status_code == 201, first.text
    assert first.json()["order"] == 1
    assert first.json()["questionCount"] == 0

    second = client.post("/api/admin/question-families", json={"label": "Voyages", "type": "TYPE_2"}, headers=headers)
    assert second.json()["order"] == 2

    explicit = client.post(
        "/api/admin/question-families",
        json={"label": "Jeux", "type": "TYPE_1", "order": 0},
        headers=headers,
    )
    assert explicit.json()["order"] == 0

    listing = client.get("/api/admin/question-families", headers=headers)
    assert listing.status_code == 200
    assert [row["label"] for row in listing.json()["data"]] == ["Jeux", "Sorties", "Voyages"]
    assert listing.json()["pagination"] == {"page": 1, "limit": 20, "total": 3, "totalPages": 1}


def test_first_question_in_family_gets_order_one(client, seed_users, seed_catalog):
    headers = auth_headers(client, "admin")
    family_id = seed_catalog["type2"].family_id
    resp = client.post(
        "/api/admin/questions",
        json={"questionFamilyId": family_id, "text": "City trip"},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    assert resp.json()["order"] == 2
    assert resp.json()["questionFamily"]["label"] == "Voyages"

    empty_family = client.post("/api/admin/question-families", json={"label": "Sport", "type": "TYPE_2"}, headers=headers)
    first_q = client.post(
        "/api/admin/questions",
        json={"questionFamilyId": empty_family.json()["familyId"], "text": "Yoga"},
        headers=headers,
    )
    assert first_q.json()["order"] == 1


def test_list_families_filters_by_type_and_search(client, seed_users, seed_catalog):
    headers = auth_headers(client, "admin")
    by_type = client.get("/api/admin/question-families", params={"type": "TYPE_2"}, headers=headers)
    assert [row["label"] for row in by_type.json()["data"]] == ["Voyages"]

    by_search = client.get("/api/admin/question-families", params={"search": "sort"}, headers=headers)
    assert [row["label"] for row in by_search.json()["data"]] == ["Sorties"]
    assert by_search.json()["data"][0]["questionCount"] == 2

    paged = client.get("/api/admin/question-families", params={"page": 2, "limit": 1}, headers=headers)
    assert [row["label"] for row in paged.json()["data"]] == ["Voyages"]
    assert paged.json()["pagination"]["totalPages"] == 2

    bad_limit = client.get("/api/admin/question-families", params={"limit": 101}, headers=headers)
    assert bad_limit.status_code == 400


def test_list_questions_filters_and_orders(client, seed_users, seed_catalog):
    headers = auth_headers(client, "admin")
    family_id = seed_catalog["type1"].family_id
    resp = client.get("/api/admin/questions", params={"familyId": family_id}, headers=headers)
    assert resp.status_code == 200
    body = resp.json()
    assert [row["text"] for row in body["data"]] == ["Restaurant", "Cinema"]
    assert body["pagination"]["limit"] == 50
    assert body["data"][0]["answerCount"] == 0

    search = client.get("/api/admin/questions", params={"search": "RANDO"}, headers=headers)
    assert [row["text"] for row in search.json()["data"]] == ["Randonnee"]


def test_family_detail_includes_ordered_questions(client, seed_users, seed_catalog):
    headers = auth_headers(client, "admin")
    resp = client.get(f"/api/admin/question-families/{seed_catalog['type1'].family_id}", headers=headers)
    assert resp.status_code == 200
    assert [q["text"] for q in resp.json()["questions"]] == ["Restaurant", "Cinema"]


def test_update_family_and_move_question(client, seed_users, seed_catalog):
    headers = auth_headers(client, "admin")
    family_id = seed_catalog["type1"].family_id
    renamed = client.patch(f"/api/admin/question-families/{family_id}", json={"label": "Soirees"}, headers=headers)
    assert renamed.status_code == 200
    assert renamed.json()["label"] == "Soirees"
    assert renamed.json()["type"] == "TYPE_1"

    question_id = seed_catalog["questions"]["cinema"].question_id
    moved = client.patch(
        f"/api/admin/questions/{question_id}",
        json={"questionFamilyId": seed_catalog["type2"].family_id, "order": 5},
        headers=headers,
    )
    assert moved.status_code == 200, moved.text
    assert moved.json()["questionFamilyId"] == seed_catalog["type2"].family_id
    assert moved.json()["order"] == 5

    missing_target = client.patch(
        f"/api/admin/questions/{question_id}",
        json={"questionFamilyId": 9999},
        headers=headers,
    )
    assert missing_target.status_code == 404


def test_create_question_in_missing_family_not_found(client, seed_users):
    headers = auth_headers(client, "admin")
    resp = client.post("/api/admin/questions", json={"questionFamilyId": 9999, "text": "Orphan"}, headers=headers)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Question family not found"}


def test_missing_ids_return_not_found(client, seed_users):
    headers = auth_headers(client, "admin")
    assert client.get("/api/admin/question-families/9999", headers=headers).status_code == 404
    assert client.patch("/api/admin/questions/9999", json={"text": "x"}, headers=headers).status_code == 404
    assert client.delete("/api/admin/questions/9999", headers=headers).status_code == 404


def test_delete_family_cascades_to_questions_and_answers(client, db, seed_users, seed_catalog):
    member_headers = auth_headers(client, "member")
    admin_headers = auth_headers(client, "admin")
    restaurant = seed_catalog["questions"]["restaurant"]
    rando = seed_catalog["questions"]["rando"]
    saved = client.post(
        "/api/form",
        json={"answers": [
            {"questionId": restaurant.question_id, "answer": {"score": 3}},
            {"questionId": rando.question_id, "answer": {"score": 2}},
        ]},
        headers=member_headers,
    )
    assert saved.status_code == 200, saved.text

    resp = client.delete(f"/api/admin/question-families/{seed_catalog['type1'].family_id}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True}

    db.expire_all()
    assert db.query(QuestionFamily).count() == 1
    assert db.query(Question).count() == 1
    remaining = db.query(FormAnswer).all()
    assert [row.question_id for row in remaining] == [rando.question_id]
    assert db.query(UserForm).count() == 1


def test_delete_question_cascades_to_answers(client, db, seed_users, seed_catalog):
    member_headers = auth_headers(client, "member")
    admin_headers = auth_headers(client, "admin")
    restaurant = seed_catalog["questions"]["restaurant"]
    client.post(
        "/api/form",
        json={"answers": [{"questionId": restaurant.question_id, "answer": {"score": 3}}]},
        headers=member_headers,
    )

    detail = client.get(f"/api/admin/questions/{restaurant.question_id}", headers=admin_headers)
    assert detail.json()["answerCount"] == 1

    resp = client.delete(f"/api/admin/questions/{restaurant.question_id}", headers=admin_headers)
    assert resp.status_code == 200
    db.expire_all()
    assert db.query(FormAnswer).count() == 0


def test_family_type_is_fixed_after_creation(client, seed_users, seed_catalog):
    headers = auth_headers(client, "admin")
    family_id = seed_catalog["type1"].family_id
    changed = client.patch(f"/api/admin/question-families/{family_id}", json={"type": "TYPE_2"}, headers=headers)
    assert changed.status_code == 400
    assert changed.json()["error"] == "Question family type cannot be changed"

    same = client.patch(
        f"/api/admin/question-families/{family_id}",
        json={"type": "TYPE_1", "order": 7},
        headers=headers,
    )
    assert same.status_code == 200
    assert same.json()["order"] == 7


def test_answered_question_stays_within_its_family_type(client, db, seed_users, seed_catalog):
    member_headers = auth_headers(client, "member")
    admin_headers = auth_headers(client, "admin")
    restaurant = seed_catalog["questions"]["restaurant"]
    saved = client.post(
        "/api/form",
        json={"answers": [{"questionId": restaurant.question_id, "answer": {"score": 3, "top": True, "bot": True}}]},
        headers=member_headers,
    )
    assert saved.status_code == 200, saved.text

    moved = client.patch(
        f"/api/admin/questions/{restaurant.question_id}",
        json={"questionFamilyId": seed_catalog["type2"].family_id},
        headers=admin_headers,
    )
    assert moved.status_code == 400
    body = moved.json()
    assert body["error"] == "Cannot move an answered question to a family of another type"
    assert body["details"][0]["field"] == "questionFamilyId"

    db.expire_all()
    stored = db.query(FormAnswer).filter(FormAnswer.question_id == restaurant.question_id).one()
    assert stored.top is True
    assert stored.bot is True
    assert db.get(Question, restaurant.question_id).question_family_id == seed_catalog["type1"].family_id

    other = client.post(
        "/api/admin/question-families",
        json={"label": "Soirees", "type": "TYPE_1"},
        headers=admin_headers,
    )
    assert other.status_code == 201, other.text
    same_type = client.patch(
        f"/api/admin/questions/{restaurant.question_id}",
        json={"questionFamilyId": other.json()["familyId"]},
        headers=admin_headers,
    )
    assert same_type.status_code == 200, same_type.text
    assert same_type.json()["answerCount"] == 1
