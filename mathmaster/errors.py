"""
Error taxonomy for Math 6 Master.

- ContentUnavailable: question generation failed or returned malformed data
- InvalidTransition: a quiz command was issued in a state that forbids it
- LessonNotFound: a lesson id is absent from the curriculum
- PersistenceCorrupt: stored progress could not be decoded
"""


class MathMasterError(Exception):
    """Base class for all Math 6 Master errors."""


class ContentUnavailable(MathMasterError):
    """Question set could not be produced. Retryable by the caller."""


class InvalidTransition(MathMasterError):
    """Command rejected by the quiz session state machine."""


class AlreadyRevealed(InvalidTransition):
    """Answer edit rejected because the item's result is already visible."""

    def __init__(self, part: str, item_key: str):
        self.part = part
        self.item_key = item_key
        super().__init__(f"Part {part} item {item_key!r} is already revealed")


class SessionClosed(InvalidTransition):
    """Command issued on a session that was torn down."""


class LessonLocked(InvalidTransition):
    """Lesson cannot be started until the previous lesson is passed."""

    def __init__(self, lesson_id: str, previous_id: str | None = None):
        self.lesson_id = lesson_id
        self.previous_id = previous_id
        detail = f" (pass {previous_id} first)" if previous_id else ""
        super().__init__(f"Lesson {lesson_id} is locked{detail}")


class LessonNotFound(MathMasterError, KeyError):
    """Lesson id is not part of the curriculum."""

    def __init__(self, lesson_id: str):
        self.lesson_id = lesson_id
        super().__init__(lesson_id)

    def __str__(self) -> str:
        return f"Lesson not found: {self.lesson_id}"


class PersistenceCorrupt(MathMasterError):
    """Persisted progress blob failed to parse or validate."""
