"""
Question set schemas for Math 6 Master.

A question set has three parts:
- Part A: multiple choice, one correct option out of four
- Part B: true/false, a stem with several statements
- Part C: short answer, compared after trimming and lower-casing

Field aliases accept the wire names used by the question generator
(part1/part2/part3, question, statement, correctAnswerIndex, ...).
Item ids are coerced to strings since generated content uses integers.
"""

from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _coerce_id(value):
    if isinstance(value, bool):
        raise ValueError("id must be a string or integer")
    if isinstance(value, (int, float)):
        return str(int(value)) if float(value).is_integer() else str(value)
    return value


class Part(str, Enum):
    A = "A"
    B = "B"
    C = "C"


class QuizItem(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value):
        return _coerce_id(value)


class MultipleChoiceItem(QuizItem):
    prompt: str = Field(..., validation_alias=AliasChoices("prompt", "question"))
    options: list[str]
    correct_option_index: int = Field(
        ...,
        ge=0,
        validation_alias=AliasChoices(
            "correct_option_index", "correctOptionIndex", "correctAnswerIndex"
        ),
    )
    explanation: Optional[str] = None


class TrueFalseStatement(QuizItem):
    text: str = Field(..., validation_alias=AliasChoices("text", "statement"))
    is_true: bool = Field(..., validation_alias=AliasChoices("is_true", "isTrue"))
    explanation: Optional[str] = None


class TrueFalseItem(QuizItem):
    stem: str
    statements: list[TrueFalseStatement]


class ShortAnswerItem(QuizItem):
    prompt: str = Field(..., validation_alias=AliasChoices("prompt", "question"))
    correct_answer: str = Field(
        ..., validation_alias=AliasChoices("correct_answer", "correctAnswer")
    )
    explanation: Optional[str] = None

    @field_validator("correct_answer", mode="before")
    @classmethod
    def stringify_answer(cls, value):
        # Generators sometimes return numeric answers
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class QuestionSet(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    topic: str = ""
    part_a: list[MultipleChoiceItem] = Field(
        default_factory=list, validation_alias=AliasChoices("part_a", "partA", "part1")
    )
    part_b: list[TrueFalseItem] = Field(
        default_factory=list, validation_alias=AliasChoices("part_b", "partB", "part2")
    )
    part_c: list[ShortAnswerItem] = Field(
        default_factory=list, validation_alias=AliasChoices("part_c", "partC", "part3")
    )

    @property
    def statement_count(self) -> int:
        return sum(len(item.statements) for item in self.part_b)
