"""
Shared fixtures for Math 6 Master tests.
"""

import pytest

from mathmaster.classroom import CurriculumIndex, ProgressStore
from mathmaster.quiz import AnswerSheet, statement_key
from mathmaster.schemas import (
    Chapter,
    Curriculum,
    Lesson,
    MultipleChoiceItem,
    QuestionSet,
    ShortAnswerItem,
    TrueFalseItem,
    TrueFalseStatement,
)


def build_question_set(part_a: int = 12, part_b: int = 4, statements: int = 4, part_c: int = 6) -> QuestionSet:
    return QuestionSet(
        topic="Bài 1: Tập hợp",
        part_a=[
            MultipleChoiceItem(
                id=str(i),
                prompt=f"Question {i}",
                options=["A. 1", "B. 2", "C. 3", "D. 4"],
                correct_option_index=i % 4,
                explanation=f"Because {i}",
            )
            for i in range(1, part_a + 1)
        ],
        part_b=[
            TrueFalseItem(
                id=str(i),
                stem=f"Stem {i}",
                statements=[
                    TrueFalseStatement(id=str(j), text=f"Statement {i}.{j}", is_true=j % 2 == 0)
                    for j in range(1, statements + 1)
                ],
            )
            for i in range(1, part_b + 1)
        ],
        part_c=[
            ShortAnswerItem(id=str(i), prompt=f"Compute {i}", correct_answer=str(10 * i))
            for i in range(1, part_c + 1)
        ],
    )


def build_correct_answers(question_set: QuestionSet, parts: str = "ABC") -> AnswerSheet:
    answers = AnswerSheet()
    if "A" in parts:
        answers.part_a = {item.id: item.correct_option_index for item in question_set.part_a}
    if "B" in parts:
        answers.part_b = {
            statement_key(item.id, s.id): s.is_true
            for item in question_set.part_b
            for s in item.statements
        }
    if "C" in parts:
        answers.part_c = {item.id: item.correct_answer for item in question_set.part_c}
    return answers


@pytest.fixture
def question_set() -> QuestionSet:
    """Question set following the 12 / 4x4 / 6 content contract."""
    return build_question_set()


@pytest.fixture
def make_question_set():
    return build_question_set


@pytest.fixture
def correct_answers():
    return build_correct_answers


@pytest.fixture
def curriculum() -> Curriculum:
    """Two chapters, five lessons."""
    return Curriculum(chapters=[
        Chapter(id="chap1", title="Chapter 1", lessons=[
            Lesson(id="l1.1", title="Sets", chapter_id="chap1"),
            Lesson(id="l1.2", title="Writing numbers", chapter_id="chap1"),
            Lesson(id="l1.final", title="Chapter 1 review", chapter_id="chap1"),
        ]),
        Chapter(id="chap2", title="Chapter 2", lessons=[
            Lesson(id="l2.8", title="Divisibility", chapter_id="chap2"),
            Lesson(id="l2.9", title="Divisibility rules", chapter_id="chap2"),
        ]),
    ])


@pytest.fixture
def index(curriculum) -> CurriculumIndex:
    return CurriculumIndex(curriculum)


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "progress.db"


@pytest.fixture
def store(db_path) -> ProgressStore:
    return ProgressStore(db_path)
