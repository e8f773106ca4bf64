"""
Progress tracking schemas for Math 6 Master.

Defines:
- Quiz modes (assessment vs practice)
- Lesson status for display
- The persisted progress record (lesson id -> best score)
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class QuizMode(str, Enum):
    ASSESSMENT = "assessment"   # timed, progress-affecting, sequential unlocking
    PRACTICE = "practice"       # untimed, never persisted, everything unlocked


class LessonStatus(str, Enum):
    LOCKED = "locked"
    UNLOCKED = "unlocked"
    PASSED = "passed"
    FAILED = "failed"


class ProgressRecord(BaseModel):
    """Best score per lesson, each in [0, 10]."""
    model_config = ConfigDict(extra="forbid")

    scores: dict[str, float] = Field(default_factory=dict)

    @field_validator("scores")
    @classmethod
    def check_score_range(cls, value: dict[str, float]) -> dict[str, float]:
        for lesson_id, score in value.items():
            if not 0.0 <= score <= 10.0:
                raise ValueError(f"Score for {lesson_id} out of range: {score}")
        return value
