"""Curriculum topic routes."""

from fastapi import APIRouter

from mathwizard.core.dependencies import TopicManagerDep

router = APIRouter(prefix="/api/topics", tags=["Topics"])


@router.get("/{year}", summary="Topics of a year grouped by section and level")
def get_topics(year: str, topic_manager: TopicManagerDep) -> dict:
    return {"success": True, "year": year, "sections": topic_manager.get_topics(year)}
