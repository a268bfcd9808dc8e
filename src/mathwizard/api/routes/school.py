"""School roster routes: teachers and students."""

from fastapi import APIRouter, status

from mathwizard.core.dependencies import RosterManagerDep
from mathwizard.schemas.roster import AddRosterMemberRequest
from mathwizard.utils.converters import roster_member_to_dict

router = APIRouter(prefix="/api", tags=["School"])


@router.post("/teachers", summary="Add a teacher", status_code=status.HTTP_201_CREATED)
def add_teacher(req: AddRosterMemberRequest, roster_manager: RosterManagerDep) -> dict:
    teacher = roster_manager.add_teacher(req.name)
    return {"success": True, "teacher": roster_member_to_dict(teacher)}


@router.get("/teachers", summary="List teachers")
def list_teachers(roster_manager: RosterManagerDep) -> dict:
    return {
        "success": True,
        "teachers": [roster_member_to_dict(t) for t in roster_manager.list_teachers()],
    }


@router.post("/students", summary="Add a student", status_code=status.HTTP_201_CREATED)
def add_student(req: AddRosterMemberRequest, roster_manager: RosterManagerDep) -> dict:
    student = roster_manager.add_student(req.name)
    return {"success": True, "student": roster_member_to_dict(student)}


@router.get("/students", summary="List students")
def list_students(roster_manager: RosterManagerDep) -> dict:
    return {
        "success": True,
        "students": [roster_member_to_dict(s) for s in roster_manager.list_students()],
    }
