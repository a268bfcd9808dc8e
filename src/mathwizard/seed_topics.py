"""Seed the curriculum topic catalog.

Loads the bundled catalog (or a JSON file given on the command line),
validates it and replaces the stored topics of every year it contains.

Usage:
    python -m mathwizard.seed_topics [path/to/topics.json]
"""

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from mathwizard.core.database import SessionLocal, init_db
from mathwizard.core.logging_config import setup_logging
from mathwizard.schemas.topic import Topic
from mathwizard.utils.topic_manager import TopicManager

logger = logging.getLogger(__name__)

DEFAULT_CATALOG = Path(__file__).parent / "data" / "topics.json"


def load_catalog(path: Path = DEFAULT_CATALOG) -> List[Topic]:
    """Load and validate a topic catalog.

    Args:
        path: JSON file holding a list of topics.

    Returns:
        List of validated Topic objects.

    Raises:
        FileNotFoundError: If the file does not exist.
        pydantic.ValidationError: If an entry is malformed.
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    return [Topic.model_validate(item) for item in raw]


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Seed MathWizard curriculum topics.")
    parser.add_argument("catalog", nargs="?", type=Path, default=DEFAULT_CATALOG)
    args = parser.parse_args(argv)

    setup_logging()
    try:
        topics = load_catalog(args.catalog)
    except FileNotFoundError:
        logger.error("Catalog not found: %s", args.catalog)
        return 1
    except (json.JSONDecodeError, ValidationError) as e:
        logger.error("Invalid catalog %s: %s", args.catalog, e)
        return 1

    init_db()
    db = SessionLocal()
    try:
        count = TopicManager(db).replace_topics(topics)
    finally:
        db.close()
    logger.info("Seeded %d topics from %s", count, args.catalog)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
