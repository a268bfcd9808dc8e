"""Curriculum topic catalog."""

import logging
from datetime import datetime
from typing import Dict, Iterable, List

import pytz
from sqlalchemy.orm import Session

from mathwizard.models.topic import TopicModel
from mathwizard.schemas.topic import Topic
from mathwizard.utils.converters import topic_to_dict

logger = logging.getLogger(__name__)

LEVEL_ORDER = ("growing", "exceeding", "excelling")


class TopicManager:
    """Reads topics and loads the seed catalog."""

    def __init__(self, db: Session):
        self.db = db

    def get_topics(self, year: str) -> Dict[str, Dict[str, List[dict]]]:
        """Return the topics of a year grouped by section, then level.

        Args:
            year: Curriculum year label, e.g. "year3".

        Returns:
            ``{section: {level: [topic, ...]}}``; empty for unknown years.
        """
        models = (
            self.db.query(TopicModel)
            .filter(TopicModel.year == year.strip().lower())
            .order_by(TopicModel.section, TopicModel.id)
            .all()
        )
        grouped: Dict[str, Dict[str, List[dict]]] = {}
        for model in models:
            levels = grouped.setdefault(model.section, {level: [] for level in LEVEL_ORDER})
            levels.setdefault(model.level, []).append(topic_to_dict(model))
        return grouped

    def replace_topics(self, topics: Iterable[Topic]) -> int:
        """Replace all topics of the years present in ``topics``.

        Returns:
            Number of topics inserted.
        """
        topics = list(topics)
        years = {t.year for t in topics}
        if years:
            self.db.query(TopicModel).filter(TopicModel.year.in_(years)).delete(
                synchronize_session=False
            )
        now = datetime.now(pytz.utc).isoformat()
        for topic in topics:
            self.db.add(
                TopicModel(
                    year=topic.year,
                    section=topic.section,
                    level=topic.level,
                    title=topic.title,
                    article=topic.article,
                    questions=[q.model_dump() for q in topic.questions],
                    created_at=now,
                )
            )
        self.db.commit()
        logger.info("Seeded %d topics for %d years", len(topics), len(years))
        return len(topics)
