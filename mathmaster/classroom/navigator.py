"""
Navigator - Lesson gating, status and curriculum tree.

Provides:
- Lock decisions (assessment mode unlocks lessons one at a time)
- Lesson status for display
- Curriculum tree with per-lesson status
- Recommended lesson and progress summary
"""

from dataclasses import dataclass
from typing import Optional

from mathmaster.config import PASS_THRESHOLD
from mathmaster.errors import LessonNotFound
from mathmaster.schemas import Chapter, Lesson, LessonStatus, QuizMode

from .curriculum import CurriculumIndex
from .progress import ProgressStore


@dataclass
class NavigationLesson:
    """Lesson with navigation metadata."""
    lesson: Lesson
    status: LessonStatus
    best_score: Optional[float]


@dataclass
class NavigationChapter:
    """Chapter with lessons and navigation metadata."""
    chapter: Chapter
    lessons: list[NavigationLesson]
    passed_count: int
    total_count: int


class ProgressionGate:
    """
    Decide lesson accessibility from the curriculum order and stored scores.

    Nothing is cached: every call reads the current ProgressStore, so a
    commit is reflected in the very next decision.
    """

    def __init__(self, index: CurriculumIndex, progress: ProgressStore):
        """
        Initialize gate.

        Args:
            index: CurriculumIndex for lesson order
            progress: ProgressStore for best scores
        """
        self.index = index
        self.progress = progress

    # -------------------------------------------------------------------------
    # Gating
    # -------------------------------------------------------------------------

    def is_locked(self, lesson_id: str, mode: QuizMode) -> bool:
        """
        Check whether a lesson is locked.

        Practice mode never locks. In assessment mode a lesson opens once the
        lesson before it has a best score of at least 8.0. The first lesson,
        and any lesson unknown to the curriculum, has no predecessor and is
        always open.
        """
        if mode == QuizMode.PRACTICE:
            return False

        try:
            previous_id = self.index.previous_of(lesson_id)
        except LessonNotFound:
            return False
        if previous_id is None:
            return False

        previous_score = self.progress.get(previous_id) or 0.0
        return previous_score < PASS_THRESHOLD

    def status(self, lesson_id: str, mode: QuizMode) -> LessonStatus:
        """Lesson status for display."""
        if mode == QuizMode.PRACTICE:
            return LessonStatus.UNLOCKED
        if self.is_locked(lesson_id, mode):
            return LessonStatus.LOCKED

        score = self.progress.get(lesson_id)
        if score is None:
            return LessonStatus.UNLOCKED
        if score >= PASS_THRESHOLD:
            return LessonStatus.PASSED
        return LessonStatus.FAILED

    def blocking_lesson_id(self, lesson_id: str, mode: QuizMode) -> Optional[str]:
        """The lesson that must be passed first, or None if not locked."""
        if not self.is_locked(lesson_id, mode):
            return None
        return self.index.previous_of(lesson_id)

    # -------------------------------------------------------------------------
    # Curriculum tree
    # -------------------------------------------------------------------------

    def navigation_tree(self, mode: QuizMode) -> list[NavigationChapter]:
        """
        Full curriculum tree, each lesson annotated with its status and best
        score.
        """
        passed = self.progress.all_passed()
        tree = []
        for chapter in self.index.chapters:
            nav_lessons = []
            passed_count = 0

            for lesson in chapter.lessons:
                status = self.status(lesson.id, mode)
                if lesson.id in passed:
                    passed_count += 1
                nav_lessons.append(NavigationLesson(
                    lesson=lesson,
                    status=status,
                    best_score=self.progress.get(lesson.id),
                ))

            tree.append(NavigationChapter(
                chapter=chapter,
                lessons=nav_lessons,
                passed_count=passed_count,
                total_count=len(chapter.lessons),
            ))

        return tree

    def recommended_lesson_id(self, mode: QuizMode = QuizMode.ASSESSMENT) -> Optional[str]:
        """
        Suggest the next lesson to work on.

        Priority:
        1. First lesson that is open but not yet passed
        2. First lesson (everything passed, or empty progress in practice)
        """
        for lesson_id in self.index.order():
            if self.status(lesson_id, mode) in (LessonStatus.UNLOCKED, LessonStatus.FAILED):
                if mode == QuizMode.PRACTICE and lesson_id in self.progress.all_passed():
                    continue
                return lesson_id
        return self.index.first_lesson_id()

    def progress_summary(self) -> dict:
        """Progress summary for display."""
        scores = self.progress.scores()
        known = {lesson_id: s for lesson_id, s in scores.items() if lesson_id in self.index}
        passed = self.progress.all_passed() & set(known)
        total = len(self.index)

        return {
            "total_lessons": total,
            "attempted": len(known),
            "passed": len(passed),
            "completion_percent": round(len(passed) / total * 100, 1) if total > 0 else 0,
            "average_best_score": round(sum(known.values()) / len(known), 2) if known else None,
            "recommended_lesson_id": self.recommended_lesson_id(QuizMode.ASSESSMENT),
        }
