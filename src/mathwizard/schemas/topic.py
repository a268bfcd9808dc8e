"""Curriculum topic schema definitions."""

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field

TopicLevel = Literal["growing", "exceeding", "excelling"]
QuestionType = Literal["multiple-choice", "short-answer", "true-false"]


class Question(BaseModel):
    question: str
    type: QuestionType
    options: List[str] = Field(default_factory=list)
    answer: Any = Field(description="Expected answer; a string for most question types.")


class Topic(BaseModel):
    """One topic of the curriculum catalog."""

    year: str = Field(description="Curriculum year label, e.g. 'reception' or 'year4'.")
    section: str
    level: TopicLevel
    title: str
    article: Optional[str] = None
    questions: List[Question] = Field(default_factory=list)
