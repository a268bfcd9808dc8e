"""Conversion helpers between database models and API payloads."""

from typing import List, Union

from mathwizard.models.child import ChildModel
from mathwizard.models.parent import ParentModel, PartnerModel
from mathwizard.models.roster import StudentModel, TeacherModel
from mathwizard.models.school import SchoolModel
from mathwizard.models.system_log import SystemLogModel
from mathwizard.models.topic import TopicModel
from mathwizard.schemas.user import Principal


def partner_to_dict(model: PartnerModel) -> dict:
    return {"name": model.name, "email": model.email, "addedAt": model.added_at}


def partners_to_list(parent: ParentModel) -> List[dict]:
    return [partner_to_dict(p) for p in parent.partners]


def available_child_slots(parent: ParentModel) -> int:
    """Return how many more children ``parent`` may register."""
    return max(0, (parent.max_children or 0) - len(parent.children or []))


def parent_to_principal(parent: ParentModel) -> Principal:
    return Principal(
        role="parent",
        email=parent.email,
        name=parent.name,
        children=list(parent.children or []),
        maxChildren=parent.max_children,
        availableChildSlots=available_child_slots(parent),
        partners=partners_to_list(parent),
    )


def school_to_principal(school: SchoolModel) -> Principal:
    return Principal(role="school", email=school.admin_email, name=school.school_name)


def child_to_principal(child: ChildModel) -> Principal:
    return Principal(
        role="child",
        username=child.username,
        name=child.name,
        year=child.year,
        yearGroup=child.year_group,
    )


def child_to_dict(child: ChildModel) -> dict:
    """Child record without its password."""
    return {
        "id": child.child_id,
        "name": child.name,
        "username": child.username,
        "parentEmail": child.parent_email,
        "year": child.year,
        "yearGroup": child.year_group,
        "progress": list(child.progress or []),
        "createdAt": child.created_at,
    }


def parent_to_summary(parent: ParentModel) -> dict:
    return {
        "id": parent.parent_id,
        "email": parent.email,
        "name": parent.name,
        "role": "parent",
        "verified": parent.verified,
        "children": list(parent.children or []),
        "maxChildren": parent.max_children,
        "createdAt": parent.created_at,
    }


def school_to_summary(school: SchoolModel) -> dict:
    return {
        "id": school.school_id,
        "email": school.admin_email,
        "name": school.school_name,
        "role": "school",
        "verified": school.verified,
        "numberOfTeachers": school.number_of_teachers,
        "createdAt": school.created_at,
    }


def log_to_dict(model: SystemLogModel) -> dict:
    return {
        "id": model.id,
        "type": model.type,
        "message": model.message,
        "adminEmail": model.admin_email,
        "targetId": model.target_id,
        "targetType": model.target_type,
        "details": model.details or {},
        "timestamp": model.timestamp,
    }


def topic_to_dict(model: TopicModel) -> dict:
    return {
        "id": model.id,
        "year": model.year,
        "section": model.section,
        "level": model.level,
        "title": model.title,
        "article": model.article,
        "questions": list(model.questions or []),
        "createdAt": model.created_at,
    }


def roster_member_to_dict(model: Union[TeacherModel, StudentModel]) -> dict:
    return {"id": model.id, "name": model.name, "createdAt": model.created_at}
