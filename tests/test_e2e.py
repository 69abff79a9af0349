import uuid
from datetime import datetime, timedelta, UTC
from fastapi.testclient import TestClient
from app.database import SessionLocal
from app.models.task import Task
from app.models.user import User


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


class TestE2E:
    def test_complete_user_journey(self, client: TestClient):
        # 1. Registration
        username = f"user_{uuid.uuid4().hex[:8]}"
        password = "SecurePass123!"

        r = client.post("/auth/register", json={"username": username, "password": password})
        assert r.status_code == 200

        r = client.post("/auth/register", json={"username": username, "password": "OtherPass123!"})
        assert r.status_code == 400

        # 2. Login
        r = client.post("/auth/login", json={"username": username, "password": "WrongPass123!"})
        assert r.status_code == 401

        r = client.post("/auth/login", json={"username": username, "password": password})
        assert r.status_code == 200
        token = r.json()["token"]

        # 3. Task operations
        r = client.post("/tasks/", json={"title": "Test Task"})
        assert r.status_code == 401
        assert r.json()["detail"] == "Not authenticated"

        r = client.post("/tasks/?token=invalid", json={"title": "Test Task"})
        assert r.status_code == 401
        assert r.json()["detail"] == "Invalid token"

        r = client.post("/tasks/", json={"title": "Buy milk"}, headers=bearer(token))
        assert r.status_code == 201
        task_data = r.json()
        task_id = task_data["id"]
        assert task_data["title"] == "Buy milk"
        assert task_data["is_completed"] is False
        assert task_data["created_at"]
        assert task_data["description"] is None
        assert task_data["due_date"] is None
        assert r.headers["location"] == f"/tasks/{task_id}"

        # query-param token still works for older clients
        r = client.get(f"/tasks/?token={token}")
        assert r.status_code == 200
        assert [t["id"] for t in r.json()] == [task_id]

        r = client.get(f"/tasks/{task_id}", headers=bearer(token))
        assert r.status_code == 200
        assert r.json()["title"] == "Buy milk"

        # 4. Isolation between users
        other = f"other_{uuid.uuid4().hex[:8]}"
        client.post("/auth/register", json={"username": other, "password": "OtherPass123!"})
        r = client.post("/auth/login", json={"username": other, "password": "OtherPass123!"})
        other_token = r.json()["token"]

        r = client.get("/tasks/", headers=bearer(other_token))
        assert r.status_code == 200
        assert r.json() == []

        for method, kwargs in [
            ("get", {}),
            ("put", {"json": {"is_completed": True}}),
            ("delete", {}),
        ]:
            r = client.request(method, f"/tasks/{task_id}", headers=bearer(other_token), **kwargs)
            assert r.status_code == 404, method

        r = client.get(f"/tasks/{uuid.uuid4()}", headers=bearer(token))
        assert r.status_code == 404

        # 5. Owner updates and deletes
        r = client.put(f"/tasks/{task_id}", json={"is_completed": True}, headers=bearer(token))
        assert r.status_code == 204
        assert r.content == b""

        r = client.get(f"/tasks/{task_id}", headers=bearer(token))
        assert r.json()["is_completed"] is True
        assert r.json()["title"] == "Buy milk"

        r = client.delete(f"/tasks/{task_id}", headers=bearer(token))
        assert r.status_code == 204

        r = client.get("/tasks/", headers=bearer(token))
        assert r.status_code == 200
        assert r.json() == []

    def test_due_date_set_and_cleared_over_http(self, client: TestClient, login):
        token = login(f"user_{uuid.uuid4().hex[:8]}")

        r = client.post(
            "/tasks/",
            json={"title": "Dentist", "description": "bring card", "due_date": "2030-03-01T10:00:00"},
            headers=bearer(token),
        )
        assert r.status_code == 201
        task_id = r.json()["id"]
        assert r.json()["due_date"].startswith("2030-03-01T10:00:00")

        # omitting due_date keeps it
        client.put(f"/tasks/{task_id}", json={"title": "Dentist appointment"}, headers=bearer(token))
        task = client.get(f"/tasks/{task_id}", headers=bearer(token)).json()
        assert task["title"] == "Dentist appointment"
        assert task["due_date"].startswith("2030-03-01T10:00:00")
        assert task["description"] == "bring card"

        # explicit null clears it
        r = client.put(f"/tasks/{task_id}", json={"due_date": None}, headers=bearer(token))
        assert r.status_code == 204
        task = client.get(f"/tasks/{task_id}", headers=bearer(token)).json()
        assert task["due_date"] is None
        assert task["title"] == "Dentist appointment"

    def test_offset_due_date_round_trips_as_utc(self, client: TestClient, login):
        token = login(f"user_{uuid.uuid4().hex[:8]}")

        r = client.post(
            "/tasks/",
            json={"title": "Call home", "due_date": "2030-01-01T10:00:00+05:00"},
            headers=bearer(token),
        )
        assert r.status_code == 201
        expected = datetime(2030, 1, 1, 5, 0, tzinfo=UTC)
        assert datetime.fromisoformat(r.json()["due_date"]) == expected

        task = client.get(f"/tasks/{r.json()['id']}", headers=bearer(token)).json()
        assert datetime.fromisoformat(task["due_date"]) == expected
        assert datetime.fromisoformat(task["created_at"]).utcoffset() == timedelta(0)

        r = client.put(
            f"/tasks/{task['id']}", json={"due_date": "2030-06-01T08:30:00-04:00"}, headers=bearer(token)
        )
        assert r.status_code == 204
        task = client.get(f"/tasks/{task['id']}", headers=bearer(token)).json()
        assert datetime.fromisoformat(task["due_date"]) == datetime(2030, 6, 1, 12, 30, tzinfo=UTC)

    def test_input_validation_and_limits(self, client: TestClient, login):
        token = login(f"user_{uuid.uuid4().hex[:8]}")

        # missing title is a shape error
        r = client.post("/tasks/", json={}, headers=bearer(token))
        assert r.status_code == 422

        # blank title and long description are reported together
        r = client.post("/tasks/", json={"title": "", "description": "x" * 501}, headers=bearer(token))
        assert r.status_code == 400
        assert len(r.json()["errors"]) == 2

        r = client.post("/tasks/", json={"title": "ok"}, headers=bearer(token))
        task_id = r.json()["id"]

        r = client.put(f"/tasks/{task_id}", json={"title": None}, headers=bearer(token))
        assert r.status_code == 400

        # owner_id is not an updatable field
        r = client.put(f"/tasks/{task_id}", json={"owner_id": "someone"}, headers=bearer(token))
        assert r.status_code == 422

    def test_tasks_reference_their_owner(self, client: TestClient, login):
        username = f"user_{uuid.uuid4().hex[:8]}"
        token = login(username)
        for i in range(3):
            r = client.post("/tasks/", json={"title": f"Task {i}"}, headers=bearer(token))
            assert r.status_code == 201

        db = SessionLocal()
        try:
            user = db.query(User).filter(User.username == username).one()
            assert db.query(Task).filter(Task.owner_id == user.id).count() == 3
        finally:
            db.close()

        tasks = client.get("/tasks/", headers=bearer(token)).json()
        assert [t["title"] for t in tasks] == ["Task 0", "Task 1", "Task 2"]
        assert {t["owner_id"] for t in tasks} == {user.id}

    def test_health(self, client: TestClient):
        assert client.get("/health").json() == {"status": "ok"}
