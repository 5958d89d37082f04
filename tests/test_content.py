"""Tests for teacher content, the student notebook and the badge catalog."""

import pytest


class TestTeacherContent:
    @pytest.fixture
    def content(self, client, teacher):
        resp = client.post("/api/tcontent", json={
            "title": "Did you know?", "type": "fact", "content": "Japan has over 6,800 islands."
        }, headers=teacher["headers"])
        assert resp.status_code == 201
        return resp.json()["content"]

    def test_everyone_can_list(self, client, student, content):
        body = client.get("/api/tcontent", headers=student["headers"]).json()
        assert body["count"] == 1
        assert body["content"][0]["type"] == "fact"

    def test_list_own(self, client, teacher, other_teacher, content):
        assert client.get("/api/tcontent/teacher", headers=teacher["headers"]).json()["count"] == 1
        assert client.get("/api/tcontent/teacher", headers=other_teacher["headers"]).json()["count"] == 0

    def test_unknown_type(self, client, teacher):
        resp = client.post("/api/tcontent", json={"title": "x", "type": "meme", "content": "y"},
                           headers=teacher["headers"])
        assert resp.status_code == 400

    def test_owner_updates(self, client, teacher, content):
        resp = client.put(f"/api/tcontent/{content['content_id']}", json={"type": "challenge"},
                          headers=teacher["headers"])
        assert resp.status_code == 200
        assert resp.json()["content"]["type"] == "challenge"
        assert resp.json()["content"]["title"] == "Did you know?"

    def test_other_teacher_cannot_modify(self, client, other_teacher, content):
        url = f"/api/tcontent/{content['content_id']}"
        assert client.put(url, json={"title": "Mine"}, headers=other_teacher["headers"]).status_code == 403
        assert client.delete(url, headers=other_teacher["headers"]).status_code == 403

    def test_owner_deletes(self, client, teacher, content):
        url = f"/api/tcontent/{content['content_id']}"
        assert client.delete(url, headers=teacher["headers"]).status_code == 200
        assert client.delete(url, headers=teacher["headers"]).status_code == 404


class TestNotebook:
    def test_create_with_defaults(self, client, student):
        resp = client.post("/api/notebook", json={"phrase": "Gracias"}, headers=student["headers"])
        assert resp.status_code == 201
        note = resp.json()["note"]
        assert note["note_type"] == "AI Chat"
        assert note["student_id"] == student["user_id"]

    def test_list_newest_first_with_country_filter(self, client, student):
        for phrase, country in (("Hola", "Spain"), ("Ciao", "Italy"), ("Adios", "Spain")):
            client.post("/api/notebook", json={"phrase": phrase, "country": country}, headers=student["headers"])

        all_notes = client.get("/api/notebook", headers=student["headers"]).json()
        assert [n["phrase"] for n in all_notes["notes"]] == ["Adios", "Ciao", "Hola"]

        spain = client.get("/api/notebook?country=Spain", headers=student["headers"]).json()
        assert [n["phrase"] for n in spain["notes"]] == ["Adios", "Hola"]

    def test_notes_are_private(self, client, student, other_student):
        note = client.post("/api/notebook", json={"phrase": "Merci"}, headers=student["headers"]).json()["note"]
        url = f"/api/notebook/{note['note_id']}"

        assert client.get("/api/notebook", headers=other_student["headers"]).json()["count"] == 0
        assert client.put(url, json={"translation": "x"}, headers=other_student["headers"]).status_code == 404
        assert client.delete(url, headers=other_student["headers"]).status_code == 404

    def test_update_and_delete(self, client, student):
        note = client.post("/api/notebook", json={"phrase": "Danke"}, headers=student["headers"]).json()["note"]
        url = f"/api/notebook/{note['note_id']}"

        resp = client.put(url, json={"translation": "Thank you"}, headers=student["headers"])
        assert resp.json()["note"]["translation"] == "Thank you"
        assert resp.json()["note"]["phrase"] == "Danke"

        assert client.delete(url, headers=student["headers"]).status_code == 200
        assert client.get("/api/notebook", headers=student["headers"]).json()["count"] == 0

    def test_teacher_has_no_notebook(self, client, teacher):
        assert client.get("/api/notebook", headers=teacher["headers"]).status_code == 403


class TestBadges:
    def test_catalog_is_public(self, client, teacher):
        created = client.post("/api/badges", json={"name": "Explorer", "description": "Visit 5 countries"},
                              headers=teacher["headers"])
        assert created.status_code == 201
        badge = created.json()["badge"]
        assert badge["xp_reward"] == 50

        assert client.get("/api/badges").json()["count"] == 1
        assert client.get(f"/api/badges/{badge['badge_id']}").json()["badge"]["name"] == "Explorer"

    def test_student_cannot_create(self, client, student):
        resp = client.post("/api/badges", json={"name": "Self-made"}, headers=student["headers"])
        assert resp.status_code == 403

    def test_negative_reward_rejected(self, client, teacher):
        resp = client.post("/api/badges", json={"name": "Bad", "xp_reward": -10}, headers=teacher["headers"])
        assert resp.status_code == 400

    def test_update_and_delete(self, client, teacher):
        badge = client.post("/api/badges", json={"name": "Polyglot"}, headers=teacher["headers"]).json()["badge"]
        url = f"/api/badges/{badge['badge_id']}"

        resp = client.put(url, json={"xp_reward": 200}, headers=teacher["headers"])
        assert resp.json()["badge"]["xp_reward"] == 200

        assert client.delete(url, headers=teacher["headers"]).status_code == 200
        assert client.get(url).status_code == 404

    def test_missing_badge(self, client, teacher):
        assert client.get("/api/badges/BDG_MISSING").status_code == 404
        assert client.put("/api/badges/BDG_MISSING", json={"name": "x"}, headers=teacher["headers"]).status_code == 404
        assert client.delete("/api/badges/BDG_MISSING", headers=teacher["headers"]).status_code == 404
