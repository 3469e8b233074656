"""HTTP tests for the /api/subjects routes."""

import pytest
from bson import ObjectId
from httpx import AsyncClient

from main import app as fastapi_app
from subjects_api.deps import get_subject_repository


async def create(client: AsyncClient, **body) -> dict:
    response = await client.post("/api/subjects", json=body)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_health_and_version(client: AsyncClient):
    health = await client.get("/health")
    assert health.status_code == 200
    assert health.json()["status"] == "healthy"

    version = await client.get("/api/version")
    assert version.status_code == 200
    assert set(version.json()) == {"git_commit", "build_time", "environment"}


@pytest.mark.asyncio
async def test_create_subject_returns_201(client: AsyncClient):
    created = await create(client, name="Algebra", teacher="T1")

    assert created["name"] == "Algebra"
    assert created["teacher"] == "T1"
    assert created["alumni"] == []
    assert "_id" not in created


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{"teacher": "T1"}, {"name": "Algebra"}, {"name": "", "teacher": "T1"}])
async def test_create_subject_missing_field_returns_400(client: AsyncClient, db, body):
    response = await client.post("/api/subjects", json=body)

    assert response.status_code == 400
    assert await db.subjects.count_documents({}) == 0


@pytest.mark.asyncio
async def test_get_subject_resolves_alumni(client: AsyncClient):
    created = await create(client, name="Calc", teacher="Dr.X", alumni=["S1", "S2"])

    response = await client.get(f"/api/subjects/{created['subject_id']}")

    assert response.status_code == 200
    assert [u["name"] for u in response.json()["alumni"]] == ["Ada", "Grace"]


@pytest.mark.asyncio
async def test_get_all_subjects(client: AsyncClient):
    await create(client, name="A", teacher="T1", alumni=["S3"])
    await create(client, name="B", teacher="T2")

    response = await client.get("/api/subjects")

    assert response.status_code == 200
    subjects = {s["name"]: s for s in response.json()}
    assert subjects["A"]["alumni"][0]["user_id"] == "S3"
    assert subjects["B"]["alumni"] == []


@pytest.mark.asyncio
async def test_literal_routes_are_not_captured_as_ids(client: AsyncClient):
    await create(client, name="A", teacher="teacher", alumni=["S1"])
    await create(client, name="B", teacher="Dr.X", alumni=["S1", "S2"])

    by_teacher = await client.get("/api/subjects/teacher/Dr.X")
    by_student = await client.get("/api/subjects/student/S2")

    assert by_teacher.status_code == 200
    assert [s["name"] for s in by_teacher.json()] == ["B"]
    assert by_teacher.json()[0]["alumni"] == ["S1", "S2"]
    assert by_student.status_code == 200
    assert [s["name"] for s in by_student.json()] == ["B"]


@pytest.mark.asyncio
async def test_enroll_drop_delete_scenario(client: AsyncClient):
    subject_id = (await create(client, name="Calc", teacher="Dr.X"))["subject_id"]

    enrolled = await client.put(f"/api/subjects/{subject_id}/enroll", json={"studentId": "S1"})
    assert enrolled.status_code == 200
    assert enrolled.json()["alumni"] == ["S1"]

    again = await client.put(f"/api/subjects/{subject_id}/enroll", json={"studentId": "S1"})
    assert again.status_code == 200
    assert again.json()["alumni"] == ["S1"]

    dropped = await client.put(f"/api/subjects/{subject_id}/drop", json={"studentId": "S2"})
    assert dropped.status_code == 200
    assert dropped.json()["alumni"] == ["S1"]

    deleted = await client.delete(f"/api/subjects/{subject_id}")
    assert deleted.status_code == 200
    assert "message" in deleted.json()

    missing = await client.get(f"/api/subjects/{subject_id}")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Subject not found"


@pytest.mark.asyncio
async def test_rename_without_new_name_returns_400_and_keeps_name(client: AsyncClient):
    subject_id = (await create(client, name="Calc", teacher="Dr.X"))["subject_id"]

    response = await client.put(f"/api/subjects/{subject_id}/rename", json={})
    assert response.status_code == 400

    current = await client.get(f"/api/subjects/{subject_id}")
    assert current.json()["name"] == "Calc"


@pytest.mark.asyncio
async def test_rename_changes_only_name(client: AsyncClient):
    subject_id = (await create(client, name="Calc", teacher="Dr.X", alumni=["S1"]))["subject_id"]

    response = await client.put(f"/api/subjects/{subject_id}/rename", json={"newName": "Calculus"})

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Calculus"
    assert body["teacher"] == "Dr.X"
    assert body["alumni"] == ["S1"]


@pytest.mark.asyncio
@pytest.mark.parametrize("action", ["enroll", "drop"])
async def test_enrollment_without_student_id_returns_400(client: AsyncClient, action):
    subject_id = (await create(client, name="Calc", teacher="Dr.X"))["subject_id"]

    response = await client.put(f"/api/subjects/{subject_id}/{action}", json={"studentId": ""})

    assert response.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize("method,path,body", [
    ("GET", "/api/subjects/subj_missing", None),
    ("GET", "/api/subjects/subj_missing/students", None),
    ("PUT", "/api/subjects/subj_missing", {"name": "X"}),
    ("PUT", "/api/subjects/subj_missing/rename", {"newName": "X"}),
    ("PUT", "/api/subjects/subj_missing/enroll", {"studentId": "S1"}),
    ("PUT", "/api/subjects/subj_missing/drop", {"studentId": "S1"}),
    ("DELETE", "/api/subjects/subj_missing", None),
])
async def test_unknown_subject_returns_404(client: AsyncClient, method, path, body):
    response = await client.request(method, path, json=body)

    assert response.status_code == 404
    assert response.json()["detail"] == "Subject not found"


@pytest.mark.asyncio
async def test_update_subject(client: AsyncClient):
    subject_id = (await create(client, name="Calc", teacher="Dr.X"))["subject_id"]

    response = await client.put(f"/api/subjects/{subject_id}", json={"teacher": "Dr.Y", "alumni": ["S1", "S1"]})

    assert response.status_code == 200
    assert response.json()["name"] == "Calc"
    assert response.json()["teacher"] == "Dr.Y"
    assert response.json()["alumni"] == ["S1"]


@pytest.mark.asyncio
async def test_get_subject_students(client: AsyncClient):
    subject_id = (await create(client, name="Calc", teacher="Dr.X", alumni=["S2"]))["subject_id"]

    response = await client.get(f"/api/subjects/{subject_id}/students")

    assert response.status_code == 200
    assert response.json() == [
        {"user_id": "S2", "name": "Grace", "email": "grace@example.com", "role": "student"}
    ]


class BrokenRepository:
    async def get_all(self):
        raise RuntimeError("connection refused at 10.0.0.5:27017")


@pytest.mark.asyncio
async def test_store_failure_returns_generic_500(client: AsyncClient):
    fastapi_app.dependency_overrides[get_subject_repository] = lambda: BrokenRepository()

    response = await client.get("/api/subjects")

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to list subjects"
    assert "10.0.0.5" not in response.text


@pytest.mark.asyncio
async def test_resolved_users_with_object_id_fields_are_serialized(client: AsyncClient, db):
    batch_id = ObjectId()
    await db.users.insert_one({"user_id": "S9", "name": "Oid", "batches": [batch_id], "picture": None})
    subject_id = (await create(client, name="Calc", teacher="Dr.X", alumni=["S9"]))["subject_id"]

    subject = await client.get(f"/api/subjects/{subject_id}")
    students = await client.get(f"/api/subjects/{subject_id}/students")
    listing = await client.get("/api/subjects")

    expected = {"user_id": "S9", "name": "Oid", "batches": [str(batch_id)], "picture": None}
    assert subject.status_code == 200
    assert subject.json()["alumni"] == [expected]
    assert students.status_code == 200
    assert students.json() == [expected]
    assert listing.status_code == 200
    assert listing.json()[0]["alumni"] == [expected]


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{"name": ""}, {"teacher": ""}, {"name": "", "teacher": ""}])
async def test_update_with_blank_required_field_returns_400(client: AsyncClient, body):
    subject_id = (await create(client, name="Calc", teacher="Dr.X"))["subject_id"]

    response = await client.put(f"/api/subjects/{subject_id}", json=body)
    assert response.status_code == 400

    current = (await client.get(f"/api/subjects/{subject_id}")).json()
    assert current["name"] == "Calc"
    assert current["teacher"] == "Dr.X"


@pytest.mark.asyncio
@pytest.mark.parametrize("action", ["rename", "enroll"])
@pytest.mark.parametrize("kwargs", [
    {"json": ["S1"]},
    {"content": b"{not json", "headers": {"Content-Type": "application/json"}},
    {},
])
async def test_non_object_body_returns_400(client: AsyncClient, action, kwargs):
    subject_id = (await create(client, name="Calc", teacher="Dr.X"))["subject_id"]

    response = await client.put(f"/api/subjects/{subject_id}/{action}", **kwargs)

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid request body"

    current = (await client.get(f"/api/subjects/{subject_id}")).json()
    assert current["name"] == "Calc"
    assert current["alumni"] == []
