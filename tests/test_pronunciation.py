"""Tests for pronunciation scoring and the XP it awards."""

import pytest

from helloworld.pronunciation.pronunciation_service import feedback_for, score_pronunciation


@pytest.mark.parametrize("spoken,phrase,expected", [
    ("hola", "hola", 100),
    ("hol", "hola", 90),
    ("h", "buenos dias amigo", 0),
])
def test_score_pronunciation(spoken, phrase, expected):
    assert score_pronunciation(spoken, phrase) == expected


@pytest.mark.parametrize("accuracy,text", [
    (81, "Excellent pronunciation!"),
    (80, "Good, but can improve!"),
    (51, "Good, but can improve!"),
    (50, "Keep practicing!"),
])
def test_feedback_thresholds(accuracy, text):
    assert feedback_for(accuracy) == text


class TestSubmit:
    def test_accuracy_85_awards_9_xp(self, client, student):
        resp = client.post("/api/pronunciation/submit", json={
            "phrase": "Bonjour", "accuracy": 85
        }, headers=student["headers"])
        assert resp.status_code == 201
        record = resp.json()["pronunciation"]
        assert record["xp_awarded"] == 9
        assert record["feedback_text"] == "Excellent pronunciation!"

        progress = client.get("/api/student/progress", headers=student["headers"]).json()["progress"]
        assert progress["xp"] == 9
        assert progress["streak_days"] == 1

    def test_scored_from_spoken_phrase(self, client, student):
        resp = client.post("/api/pronunciation/submit", json={
            "phrase": "Danke", "spoken_phrase": "Dank"
        }, headers=student["headers"])
        record = resp.json()["pronunciation"]
        assert record["accuracy"] == 90
        assert record["xp_awarded"] == 9
        assert record["spoken_phrase"] == "Dank"

    def test_needs_accuracy_or_spoken_phrase(self, client, student):
        resp = client.post("/api/pronunciation/submit", json={"phrase": "Ciao"}, headers=student["headers"])
        assert resp.status_code == 400

    def test_accuracy_out_of_range(self, client, student):
        resp = client.post("/api/pronunciation/submit", json={
            "phrase": "Ciao", "accuracy": 120
        }, headers=student["headers"])
        assert resp.status_code == 400

    def test_history_newest_first(self, client, student):
        for phrase in ("uno", "dos"):
            client.post("/api/pronunciation/submit", json={"phrase": phrase, "accuracy": 70},
                        headers=student["headers"])

        body = client.get("/api/pronunciation/history", headers=student["headers"]).json()
        assert body["count"] == 2
        assert [r["phrase"] for r in body["history"]] == ["dos", "uno"]
