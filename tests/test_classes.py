"""Tests for class creation, enrollment by join code and class deletion."""

from helloworld.classes.class_service import JOIN_CODE_ALPHABET, generate_join_code
from helloworld.core.common_audit import get_audit_trail


def test_generate_join_code():
    code = generate_join_code()
    assert len(code) == 6
    assert all(c in JOIN_CODE_ALPHABET for c in code)
    assert len(generate_join_code(10)) == 10


class TestCreateClass:
    def test_create_class(self, client, teacher):
        resp = client.post("/api/class/create", json={"name": " French A1 "}, headers=teacher["headers"])
        assert resp.status_code == 201
        created = resp.json()["class"]
        assert created["name"] == "French A1"
        assert created["teacher_id"] == teacher["user_id"]
        assert created["student_count"] == 0
        assert len(created["code"]) == 6
        assert "_id" not in created

    def test_codes_are_unique(self, client, teacher):
        codes = {
            client.post("/api/class/create", json={"name": f"Class {i}"}, headers=teacher["headers"]).json()["class"]["code"]
            for i in range(5)
        }
        assert len(codes) == 5

    def test_empty_name_rejected(self, client, teacher):
        resp = client.post("/api/class/create", json={"name": "   "}, headers=teacher["headers"])
        assert resp.status_code == 400

    def test_list_own_classes_with_counts(self, client, teacher, enrolled_class):
        resp = client.get(f"/api/class/teacher/{teacher['user_id']}", headers=teacher["headers"])
        assert resp.status_code == 200
        body = resp.json()
        assert body["count"] == 1
        assert body["classes"][0]["student_count"] == 1

    def test_cannot_list_another_teachers_classes(self, client, teacher, other_teacher):
        resp = client.get(f"/api/class/teacher/{teacher['user_id']}", headers=other_teacher["headers"])
        assert resp.status_code == 403


class TestJoinClass:
    def test_join_and_list(self, client, student, enrolled_class):
        resp = client.get("/api/class/student", headers=student["headers"])
        assert resp.status_code == 200
        classes = resp.json()["classes"]
        assert [c["class_id"] for c in classes] == [enrolled_class["class_id"]]
        assert classes[0]["joined_at"]

    def test_join_twice_is_a_no_op(self, client, teacher, student, enrolled_class, run, db):
        resp = client.post("/api/class/join", json={"code": enrolled_class["code"]}, headers=student["headers"])
        assert resp.status_code == 200
        assert resp.json()["already_joined"] is True
        assert resp.json()["message"] == "Already a member of this class"

        count = run(db.class_members.count_documents({"class_id": enrolled_class["class_id"]}))
        assert count == 1

    def test_first_join_reports_new_membership(self, client, teacher, other_student, enrolled_class):
        resp = client.post("/api/class/join", json={"code": enrolled_class["code"]}, headers=other_student["headers"])
        assert resp.status_code == 200
        assert resp.json()["already_joined"] is False
        assert resp.json()["class"]["class_id"] == enrolled_class["class_id"]

    def test_invalid_code(self, client, student):
        resp = client.post("/api/class/join", json={"code": "ZZZZZZ"}, headers=student["headers"])
        assert resp.status_code == 404
        assert resp.json()["message"] == "Invalid class code"

    def test_teacher_cannot_join(self, client, teacher, enrolled_class):
        resp = client.post("/api/class/join", json={"code": enrolled_class["code"]}, headers=teacher["headers"])
        assert resp.status_code == 403


class TestDeleteClass:
    def test_delete_removes_class_and_mappings(self, client, teacher, student, enrolled_class, run, db):
        class_id = enrolled_class["class_id"]

        resp = client.delete(f"/api/class/{class_id}", headers=teacher["headers"])
        assert resp.status_code == 200
        assert resp.json()["removed_members"] == 1

        assert run(db.class_members.count_documents({"class_id": class_id})) == 0
        listed = client.get(f"/api/class/teacher/{teacher['user_id']}", headers=teacher["headers"]).json()
        assert listed["classes"] == []
        assert client.get("/api/class/student", headers=student["headers"]).json()["classes"] == []

    def test_delete_is_audited(self, client, teacher, enrolled_class, run, db):
        class_id = enrolled_class["class_id"]
        client.delete(f"/api/class/{class_id}", headers=teacher["headers"])

        trail = run(get_audit_trail(db, target_type="class", target_id=class_id))
        assert len(trail) == 1
        assert trail[0]["action"] == "delete_class"
        assert trail[0]["actor_user_id"] == teacher["user_id"]
        assert trail[0]["metadata"] == {"removed_members": 1}

    def test_other_teacher_cannot_delete(self, client, other_teacher, enrolled_class):
        resp = client.delete(f"/api/class/{enrolled_class['class_id']}", headers=other_teacher["headers"])
        assert resp.status_code == 403

    def test_delete_missing_class(self, client, teacher):
        resp = client.delete("/api/class/CLS_MISSING", headers=teacher["headers"])
        assert resp.status_code == 404
