"""
Boundary validation for generated question sets.

Generated content arrives as loosely-typed JSON. Structural problems make the
set unusable and are reported as ContentUnavailable; deviations from the
generator's content contract (12 / 4x4 / 6 items) are only logged unless
strict validation is requested, since scoring adapts to any item count.
"""

import logging
from typing import Any

from pydantic import ValidationError

from mathmaster.config import (
    CONTRACT_PART_A_ITEMS,
    CONTRACT_PART_B_ITEMS,
    CONTRACT_PART_B_STATEMENTS,
    CONTRACT_PART_C_ITEMS,
    OPTIONS_PER_ITEM,
)
from mathmaster.errors import ContentUnavailable
from mathmaster.schemas import QuestionSet

logger = logging.getLogger(__name__)


def _duplicates(ids: list[str]) -> list[str]:
    seen: set[str] = set()
    dupes = []
    for item_id in ids:
        if item_id in seen:
            dupes.append(item_id)
        seen.add(item_id)
    return dupes


def structural_problems(question_set: QuestionSet) -> list[str]:
    """Problems that make a question set unusable."""
    problems = []

    if not (question_set.part_a or question_set.part_b or question_set.part_c):
        problems.append("question set has no items")

    for item in question_set.part_a:
        if len(item.options) != OPTIONS_PER_ITEM:
            problems.append(f"Part A item {item.id} has {len(item.options)} options")
        if item.correct_option_index >= len(item.options):
            problems.append(f"Part A item {item.id} correct option out of range")

    for item in question_set.part_b:
        if not item.statements:
            problems.append(f"Part B item {item.id} has no statements")
        for dupe in _duplicates([s.id for s in item.statements]):
            problems.append(f"Part B item {item.id} has duplicate statement id {dupe}")

    for item in question_set.part_c:
        if not item.correct_answer.strip():
            problems.append(f"Part C item {item.id} has an empty correct answer")

    for label, items in (
        ("A", question_set.part_a),
        ("B", question_set.part_b),
        ("C", question_set.part_c),
    ):
        for dupe in _duplicates([item.id for item in items]):
            problems.append(f"Part {label} has duplicate item id {dupe}")

    return problems


def contract_deviations(question_set: QuestionSet) -> list[str]:
    """Differences from the generator's content contract."""
    deviations = []
    if len(question_set.part_a) != CONTRACT_PART_A_ITEMS:
        deviations.append(
            f"Part A has {len(question_set.part_a)} items, expected {CONTRACT_PART_A_ITEMS}"
        )
    if len(question_set.part_b) != CONTRACT_PART_B_ITEMS:
        deviations.append(
            f"Part B has {len(question_set.part_b)} items, expected {CONTRACT_PART_B_ITEMS}"
        )
    for item in question_set.part_b:
        if len(item.statements) != CONTRACT_PART_B_STATEMENTS:
            deviations.append(
                f"Part B item {item.id} has {len(item.statements)} statements, "
                f"expected {CONTRACT_PART_B_STATEMENTS}"
            )
    if len(question_set.part_c) != CONTRACT_PART_C_ITEMS:
        deviations.append(
            f"Part C has {len(question_set.part_c)} items, expected {CONTRACT_PART_C_ITEMS}"
        )
    return deviations


def validate_question_set(data: Any, strict: bool = False) -> QuestionSet:
    """
    Parse and check a generated question set.

    Args:
        data: JSON text, a dict, or an already-parsed QuestionSet
        strict: Reject content-contract deviations instead of logging them

    Returns:
        Validated QuestionSet

    Raises:
        ContentUnavailable: If the data is malformed
    """
    try:
        if isinstance(data, QuestionSet):
            question_set = data
        elif isinstance(data, (str, bytes)):
            question_set = QuestionSet.model_validate_json(data)
        else:
            question_set = QuestionSet.model_validate(data)
    except ValidationError as e:
        raise ContentUnavailable(f"Malformed question set: {e.error_count()} validation errors") from e

    problems = structural_problems(question_set)
    if problems:
        raise ContentUnavailable("Malformed question set: " + "; ".join(problems))

    deviations = contract_deviations(question_set)
    if deviations:
        if strict:
            raise ContentUnavailable("Question set breaks content contract: " + "; ".join(deviations))
        for deviation in deviations:
            logger.warning(f"Question set '{question_set.topic}': {deviation}")

    return question_set
