import pytest

from mathwizard.core.exceptions import ValidationError
from mathwizard.utils.roster_manager import RosterManager


@pytest.fixture
def roster(db):
    return RosterManager(db)


def test_teachers_listed_in_insertion_order(roster):
    roster.add_teacher("Ms Hill")
    roster.add_teacher("  Mr Stone ")
    assert [t.name for t in roster.list_teachers()] == ["Ms Hill", "Mr Stone"]
    assert roster.list_students() == []


def test_blank_student_name_rejected(roster):
    with pytest.raises(ValidationError):
        roster.add_student("   ")
    assert roster.list_students() == []


def test_roster_routes(client):
    resp = client.post("/api/teachers", json={"name": "Ms Hill"})
    assert resp.status_code == 201
    teacher = resp.json()["teacher"]
    assert teacher["name"] == "Ms Hill"
    assert teacher["id"]
    assert teacher["createdAt"]

    assert client.post("/api/students", json={"name": "Sam"}).status_code == 201
    assert [s["name"] for s in client.get("/api/students").json()["students"]] == ["Sam"]
    assert [t["name"] for t in client.get("/api/teachers").json()["teachers"]] == ["Ms Hill"]


def test_roster_route_rejects_missing_name(client):
    resp = client.post("/api/students", json={})
    assert resp.status_code == 400
    assert resp.json()["success"] is False
