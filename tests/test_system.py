"""Tests for dashboards, health/version, the audit log and the request middleware."""

import uvicorn

from helloworld import main


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_version(client):
    body = client.get("/version").json()
    assert body["status"] == "stable"
    assert "version" in body


def test_request_id_header(client):
    resp = client.get("/health")
    assert len(resp.headers["X-Request-ID"]) == 12


def test_unknown_route_uses_error_shape(client):
    resp = client.get("/api/does-not-exist")
    assert resp.status_code == 404
    assert resp.json()["status"] == "error"


class TestDashboards:
    def test_teacher_dashboard(self, client, teacher, student):
        resp = client.get("/dashboard/teacher", headers=teacher["headers"])
        assert resp.status_code == 200
        assert resp.json()["user"] == {"id": teacher["user_id"], "role": "teacher"}
        assert client.get("/dashboard/teacher", headers=student["headers"]).status_code == 403

    def test_student_dashboard(self, client, teacher, student):
        resp = client.get("/dashboard/student", headers=student["headers"])
        assert resp.status_code == 200
        assert resp.json()["user"] == {"id": student["user_id"], "role": "student"}
        assert client.get("/dashboard/student", headers=teacher["headers"]).status_code == 403

    def test_dashboard_needs_token(self, client):
        assert client.get("/dashboard/student").status_code == 401


def test_run_serves_the_app(monkeypatch):
    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

    main.run()

    assert calls == [(main.app, {"host": main.HOST, "port": main.PORT})]


class TestAuditLogs:
    def test_teacher_sees_own_deletions(self, client, teacher, other_teacher):
        for name in ("Temp A", "Temp B"):
            created = client.post("/api/class/create", json={"name": name}, headers=teacher["headers"]).json()
            client.delete(f"/api/class/{created['class']['class_id']}", headers=teacher["headers"])
        badge = client.post("/api/badges", json={"name": "Gone"}, headers=other_teacher["headers"]).json()
        client.delete(f"/api/badges/{badge['badge']['badge_id']}", headers=other_teacher["headers"])

        resp = client.get("/api/audit/logs", headers=teacher["headers"])
        assert resp.status_code == 200
        body = resp.json()
        assert body["count"] == 2
        assert {log["action"] for log in body["logs"]} == {"delete_class"}
        assert all(log["actor_user_id"] == teacher["user_id"] for log in body["logs"])

        badges_only = client.get("/api/audit/logs?target_type=badge", headers=teacher["headers"]).json()
        assert badges_only["count"] == 0

    def test_students_cannot_read(self, client, student):
        assert client.get("/api/audit/logs", headers=student["headers"]).status_code == 403
