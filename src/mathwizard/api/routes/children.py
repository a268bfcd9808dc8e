"""Child roster routes."""

from fastapi import APIRouter

from mathwizard.core.dependencies import ChildManagerDep
from mathwizard.schemas.child import (
    AddChildRequest,
    RecordProgressRequest,
    RemoveChildRequest,
)
from mathwizard.utils.converters import child_to_dict

router = APIRouter(prefix="/api", tags=["Children"])


@router.post("/children", summary="Add a child to a parent")
def add_child(req: AddChildRequest, child_manager: ChildManagerDep) -> dict:
    """Add a child account.

    Args:
        req: Parent email, child name, username, optional password and year.
        child_manager: Injected ChildManager instance.

    Returns:
        Dictionary with the child's username and password. This is the only
        response that ever contains the password.
    """
    child = child_manager.add_child(
        parent_email=req.parentEmail.strip(),
        name=req.name.strip(),
        username=req.username,
        password=req.password,
        year=req.year,
    )
    return {"success": True, "child": child}


@router.delete("/children/{username}", summary="Remove a child from a parent")
def remove_child(
    username: str, req: RemoveChildRequest, child_manager: ChildManagerDep
) -> dict:
    child_manager.remove_child(req.parentEmail.strip(), username)
    return {"success": True, "message": "Child removed successfully"}


@router.get("/children/{username}", summary="Get a child record")
def get_child(username: str, child_manager: ChildManagerDep) -> dict:
    return {"success": True, "child": child_to_dict(child_manager.get_child(username))}


@router.post("/children/{username}/progress", summary="Record topic progress")
def record_progress(
    username: str, req: RecordProgressRequest, child_manager: ChildManagerDep
) -> dict:
    child = child_manager.record_progress(username, req.topic.strip(), req.score)
    return {"success": True, "progress": child.progress}


@router.get("/parents/{email}/children", summary="List a parent's children")
def list_children(email: str, child_manager: ChildManagerDep) -> dict:
    return {"success": True, "children": child_manager.list_children(email)}
