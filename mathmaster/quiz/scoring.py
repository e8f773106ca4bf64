"""
Scoring engine - Pure scoring of a question set against recorded answers.

Point distribution is fixed per part (A: 3.0, B: 4.0, C: 3.0); the weight of
a single item is derived from how many items the part actually contains, so
content sets of any size keep the same distribution.
"""

import logging
from dataclasses import dataclass, field

from mathmaster.config import MAX_SCORE, PART_A_POINTS, PART_B_POINTS, PART_C_POINTS
from mathmaster.schemas import (
    MultipleChoiceItem,
    QuestionSet,
    ShortAnswerItem,
    TrueFalseItem,
    TrueFalseStatement,
)

logger = logging.getLogger(__name__)


def statement_key(item_id: str, statement_id: str) -> str:
    """Answer key of one true/false statement."""
    return f"{item_id}-{statement_id}"


def normalize_short_answer(value: str | None) -> str:
    """Trim surrounding whitespace and lower-case."""
    if value is None:
        return ""
    return str(value).strip().lower()


@dataclass
class AnswerSheet:
    """
    Recorded answers for one attempt.

    Part A and C are keyed by item id, Part B by statement_key().
    """
    part_a: dict[str, int] = field(default_factory=dict)
    part_b: dict[str, bool] = field(default_factory=dict)
    part_c: dict[str, str] = field(default_factory=dict)

    def copy(self) -> "AnswerSheet":
        return AnswerSheet(dict(self.part_a), dict(self.part_b), dict(self.part_c))


@dataclass(frozen=True)
class ScoreBreakdown:
    part_a: float
    part_b: float
    part_c: float
    total: float


# -----------------------------------------------------------------------------
# Per-item correctness
# -----------------------------------------------------------------------------

def is_part_a_correct(item: MultipleChoiceItem, answer: int | None) -> bool:
    return answer is not None and answer == item.correct_option_index


def is_part_b_correct(statement: TrueFalseStatement, answer: bool | None) -> bool:
    # Unanswered never matches
    return answer is not None and answer == statement.is_true


def is_part_c_correct(item: ShortAnswerItem, answer: str | None) -> bool:
    given = normalize_short_answer(answer)
    return given != "" and given == normalize_short_answer(item.correct_answer)


# -----------------------------------------------------------------------------
# Part scores
# -----------------------------------------------------------------------------

def _part_score(points: float, correct: int, total: int) -> float:
    if total == 0:
        return 0.0
    return points * correct / total


def score_part_a(items: list[MultipleChoiceItem], answers: dict[str, int]) -> float:
    correct = sum(1 for item in items if is_part_a_correct(item, answers.get(item.id)))
    return _part_score(PART_A_POINTS, correct, len(items))


def score_part_b(items: list[TrueFalseItem], answers: dict[str, bool]) -> float:
    total = 0
    correct = 0
    for item in items:
        for statement in item.statements:
            total += 1
            if is_part_b_correct(statement, answers.get(statement_key(item.id, statement.id))):
                correct += 1
    return _part_score(PART_B_POINTS, correct, total)


def score_part_c(items: list[ShortAnswerItem], answers: dict[str, str]) -> float:
    correct = sum(1 for item in items if is_part_c_correct(item, answers.get(item.id)))
    return _part_score(PART_C_POINTS, correct, len(items))


def _log_unknown_answers(question_set: QuestionSet, answers: AnswerSheet):
    if not logger.isEnabledFor(logging.DEBUG):
        return
    known_a = {item.id for item in question_set.part_a}
    known_b = {
        statement_key(item.id, s.id) for item in question_set.part_b for s in item.statements
    }
    known_c = {item.id for item in question_set.part_c}
    unknown = (
        [f"A:{k}" for k in answers.part_a if k not in known_a]
        + [f"B:{k}" for k in answers.part_b if k not in known_b]
        + [f"C:{k}" for k in answers.part_c if k not in known_c]
    )
    if unknown:
        logger.debug(f"Ignoring answers for unknown items: {', '.join(unknown)}")


def score_breakdown(question_set: QuestionSet, answers: AnswerSheet) -> ScoreBreakdown:
    """
    Score every part and the clamped total.

    Answers for ids absent from the question set are ignored.
    """
    _log_unknown_answers(question_set, answers)
    part_a = score_part_a(question_set.part_a, answers.part_a)
    part_b = score_part_b(question_set.part_b, answers.part_b)
    part_c = score_part_c(question_set.part_c, answers.part_c)
    total = max(0.0, min(part_a + part_b + part_c, MAX_SCORE))
    return ScoreBreakdown(part_a=part_a, part_b=part_b, part_c=part_c, total=total)


def score(question_set: QuestionSet, answers: AnswerSheet) -> float:
    """Total score in [0, 10]."""
    return score_breakdown(question_set, answers).total
