"""
CurriculumIndex - Global lesson order and lesson adjacency.

Provides:
- Canonical global lesson order (chapters flattened in order)
- Previous/next lesson lookup in O(1) via an index built once at load
- Loading the packaged curriculum or a curriculum JSON file
"""

import json
from pathlib import Path
from typing import Optional

from mathmaster.errors import LessonNotFound
from mathmaster.schemas import Chapter, Curriculum, Lesson


DEFAULT_CURRICULUM_PATH = Path(__file__).parent.parent / "data" / "curriculum.json"


def load_curriculum(path: str | Path) -> Curriculum:
    """Load and validate a curriculum JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        return Curriculum.model_validate(json.load(f))


def load_default_curriculum() -> Curriculum:
    """Load the packaged grade-6 curriculum."""
    return load_curriculum(DEFAULT_CURRICULUM_PATH)


class CurriculumIndex:
    """
    Read-only index over a curriculum.

    Lesson ids are unique (enforced by the Curriculum schema), so the
    order list and the id -> position map are built once here.
    """

    def __init__(self, curriculum: Curriculum):
        self.curriculum = curriculum
        self._lessons: dict[str, Lesson] = {}
        self._order: list[str] = []
        for lesson in curriculum.iter_lessons():
            self._lessons[lesson.id] = lesson
            self._order.append(lesson.id)
        self._position = {lesson_id: idx for idx, lesson_id in enumerate(self._order)}

    @classmethod
    def from_file(cls, path: str | Path) -> "CurriculumIndex":
        return cls(load_curriculum(path))

    @classmethod
    def default(cls) -> "CurriculumIndex":
        return cls(load_default_curriculum())

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, lesson_id: object) -> bool:
        return lesson_id in self._position

    @property
    def chapters(self) -> list[Chapter]:
        return list(self.curriculum.chapters)

    # -------------------------------------------------------------------------
    # Ordering
    # -------------------------------------------------------------------------

    def order(self) -> list[str]:
        """Lesson ids in canonical global order."""
        return list(self._order)

    def first_lesson_id(self) -> Optional[str]:
        return self._order[0] if self._order else None

    def _index_of(self, lesson_id: str) -> int:
        try:
            return self._position[lesson_id]
        except KeyError:
            raise LessonNotFound(lesson_id) from None

    def previous_of(self, lesson_id: str) -> Optional[str]:
        """
        Get the lesson immediately before lesson_id in global order.

        Returns None for the first lesson.

        Raises:
            LessonNotFound: If lesson_id is not in the curriculum
        """
        idx = self._index_of(lesson_id)
        return self._order[idx - 1] if idx > 0 else None

    def next_of(self, lesson_id: str) -> Optional[str]:
        """Get the lesson immediately after lesson_id, or None for the last one."""
        idx = self._index_of(lesson_id)
        return self._order[idx + 1] if idx + 1 < len(self._order) else None

    def position(self, lesson_id: str) -> tuple[int, int]:
        """Lesson position as (1-based index, total)."""
        return (self._index_of(lesson_id) + 1, len(self._order))

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get_lesson(self, lesson_id: str) -> Lesson:
        try:
            return self._lessons[lesson_id]
        except KeyError:
            raise LessonNotFound(lesson_id) from None

    def lessons_for_chapter(self, chapter_id: str) -> list[Lesson]:
        for chapter in self.curriculum.chapters:
            if chapter.id == chapter_id:
                return list(chapter.lessons)
        return []
