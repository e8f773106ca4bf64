"""
QuizSession - State machine for one quiz attempt.

States:
- ANSWERING: learner records answers (initial)
- CONFIRM_PENDING: learner asked to submit, waiting for confirmation
- SUBMITTED: score frozen (terminal)

Manual submission goes ANSWERING -> CONFIRM_PENDING -> SUBMITTED. In
assessment mode the countdown can move the session straight to SUBMITTED.
Both paths go through _submit(), which runs the submission side effects
exactly once.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from mathmaster.config import ASSESSMENT_DURATION_SECONDS
from mathmaster.errors import AlreadyRevealed, InvalidTransition, SessionClosed
from mathmaster.schemas import Part, QuestionSet, QuizMode

from .scoring import (
    AnswerSheet,
    ScoreBreakdown,
    is_part_a_correct,
    is_part_b_correct,
    is_part_c_correct,
    score,
    score_breakdown,
    statement_key,
)

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    ANSWERING = "answering"
    CONFIRM_PENDING = "confirm_pending"
    SUBMITTED = "submitted"


class SubmitTrigger(str, Enum):
    MANUAL = "manual"       # learner confirmed
    TIMEOUT = "timeout"     # countdown reached zero


@dataclass(frozen=True)
class ItemFeedback:
    """Correctness of one answerable item once its result is visible."""
    part: Part
    item_key: str
    answered: bool
    correct: bool
    correct_answer: str
    explanation: Optional[str]


@dataclass(frozen=True)
class QuizResult:
    """Frozen outcome of a submitted session."""
    score: float
    breakdown: ScoreBreakdown
    trigger: SubmitTrigger
    remaining_seconds: Optional[int]
    answers: AnswerSheet


class QuizSession:
    """
    One attempt at a question set.

    The session owns its answer sheet and countdown. It never touches the
    progress store except through commit_progress(), which runs at most once.
    """

    def __init__(
        self,
        question_set: QuestionSet,
        mode: QuizMode,
        *,
        lesson_id: Optional[str] = None,
        duration_seconds: int = ASSESSMENT_DURATION_SECONDS,
        instant_feedback: Optional[bool] = None,
        on_submitted: Optional[Callable[[QuizResult], None]] = None,
    ):
        """
        Initialize session.

        Args:
            question_set: Validated question set (read-only)
            mode: Assessment (timed, committed) or practice
            lesson_id: Lesson this attempt belongs to, used by commit_progress()
            duration_seconds: Countdown length in assessment mode
            instant_feedback: Practice-mode feedback toggle (default: on in practice)
            on_submitted: Called once with the result when the session is submitted
        """
        self.question_set = question_set
        self.mode = QuizMode(mode)
        self.lesson_id = lesson_id
        self._on_submitted = on_submitted

        if self.mode == QuizMode.PRACTICE:
            self.instant_feedback = True if instant_feedback is None else instant_feedback
            self.remaining_seconds: Optional[int] = None
        else:
            if instant_feedback:
                raise ValueError("Instant feedback is only available in practice mode")
            self.instant_feedback = False
            self.remaining_seconds = max(0, int(duration_seconds))

        self._state = SessionState.ANSWERING
        self._answers = AnswerSheet()
        self._revealed: dict[Part, set[str]] = {part: set() for part in Part}
        self._result: Optional[QuizResult] = None
        self._committed = False
        self._closed = False
        self._build_item_index()

    def _build_item_index(self):
        self._part_a = {item.id: item for item in self.question_set.part_a}
        self._part_b = {
            statement_key(item.id, statement.id): statement
            for item in self.question_set.part_b
            for statement in item.statements
        }
        self._part_c = {item.id: item for item in self.question_set.part_c}

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_submitted(self) -> bool:
        return self._state == SessionState.SUBMITTED

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def is_running(self) -> bool:
        """Whether the countdown should keep ticking."""
        return (
            self.mode == QuizMode.ASSESSMENT
            and not self._closed
            and self._state != SessionState.SUBMITTED
        )

    @property
    def result(self) -> Optional[QuizResult]:
        return self._result

    @property
    def committed(self) -> bool:
        return self._committed

    @property
    def answers(self) -> AnswerSheet:
        return self._answers.copy()

    def _ensure_open(self):
        if self._closed:
            raise SessionClosed("Session has been closed")

    def _answer_map(self, part: Part) -> dict:
        return {Part.A: self._answers.part_a, Part.B: self._answers.part_b, Part.C: self._answers.part_c}[part]

    def _item_map(self, part: Part) -> dict:
        return {Part.A: self._part_a, Part.B: self._part_b, Part.C: self._part_c}[part]

    # -------------------------------------------------------------------------
    # Answers
    # -------------------------------------------------------------------------

    def _check_value(self, part: Part, item_key: str, value):
        if part == Part.A:
            options = len(self._part_a[item_key].options)
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < options:
                raise ValueError(f"Part A answer must be an option index in [0, {options})")
        elif part == Part.B:
            if not isinstance(value, bool):
                raise ValueError("Part B answer must be True or False")
        elif not isinstance(value, str):
            raise ValueError("Part C answer must be a string")

    def record_answer(self, part: Part | str, item_key: str, value) -> bool:
        """
        Record or overwrite an answer.

        Part B answers are keyed by statement_key(item_id, statement_id).
        In practice mode with instant feedback on, a Part A or Part B answer
        reveals its item immediately, which locks it.

        Returns:
            False if item_key is not part of the question set (ignored)

        Raises:
            InvalidTransition: If the session is not ANSWERING
            AlreadyRevealed: If the item's result is already visible, which
                every item is once the session is submitted
            ValueError: If the value has the wrong type for the part
        """
        self._ensure_open()
        part = Part(part)
        items = self._item_map(part)
        if self.is_submitted and item_key in items:
            raise AlreadyRevealed(part.value, item_key)
        if self._state != SessionState.ANSWERING:
            raise InvalidTransition(f"Cannot record answers while {self._state.value}")

        if item_key not in items:
            logger.warning(f"Ignoring answer for unknown Part {part.value} item {item_key!r}")
            return False
        if item_key in self._revealed[part]:
            raise AlreadyRevealed(part.value, item_key)

        self._check_value(part, item_key, value)
        self._answer_map(part)[item_key] = value

        if self.mode == QuizMode.PRACTICE and self.instant_feedback and part in (Part.A, Part.B):
            self._revealed[part].add(item_key)
        return True

    def is_item_revealed(self, part: Part | str, item_key: str) -> bool:
        """Whether the item's correctness is visible (and its answer locked)."""
        return self.is_submitted or item_key in self._revealed[Part(part)]

    def reveal(self, part: Part | str, item_key: str) -> ItemFeedback:
        """
        Show one item's correctness before full submission (practice only).

        A revealed item stays revealed, even if instant feedback is later
        switched off.
        """
        self._ensure_open()
        part = Part(part)
        if self.mode != QuizMode.PRACTICE:
            raise InvalidTransition("Items can only be revealed in practice mode")
        if item_key not in self._item_map(part):
            raise KeyError(f"Unknown Part {part.value} item: {item_key}")
        if not self.is_submitted:
            self._revealed[part].add(item_key)
        return self._feedback(part, item_key)

    def item_feedback(self, part: Part | str, item_key: str) -> ItemFeedback:
        """
        Feedback for a visible item.

        Raises:
            InvalidTransition: If the item has not been revealed yet
        """
        part = Part(part)
        if item_key not in self._item_map(part):
            raise KeyError(f"Unknown Part {part.value} item: {item_key}")
        if not self.is_item_revealed(part, item_key):
            raise InvalidTransition(f"Part {part.value} item {item_key!r} is not revealed")
        return self._feedback(part, item_key)

    def _feedback(self, part: Part, item_key: str) -> ItemFeedback:
        answer = self._answer_map(part).get(item_key)
        item = self._item_map(part)[item_key]
        if part == Part.A:
            correct = is_part_a_correct(item, answer)
            correct_answer = item.options[item.correct_option_index]
        elif part == Part.B:
            correct = is_part_b_correct(item, answer)
            correct_answer = "True" if item.is_true else "False"
        else:
            correct = is_part_c_correct(item, answer)
            correct_answer = item.correct_answer
        return ItemFeedback(
            part=part,
            item_key=item_key,
            answered=answer is not None and answer != "",
            correct=correct,
            correct_answer=correct_answer,
            explanation=item.explanation,
        )

    def set_instant_feedback(self, enabled: bool):
        """Toggle instant feedback (practice only). Revealed items stay revealed."""
        self._ensure_open()
        if self.mode != QuizMode.PRACTICE:
            raise InvalidTransition("Instant feedback is only available in practice mode")
        self.instant_feedback = bool(enabled)

    def live_score(self) -> float:
        """Score of the answers recorded so far."""
        return score(self.question_set, self._answers)

    # -------------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------------

    def request_submit(self):
        """ANSWERING -> CONFIRM_PENDING."""
        self._ensure_open()
        if self._state != SessionState.ANSWERING:
            raise InvalidTransition(f"Cannot request submit while {self._state.value}")
        self._state = SessionState.CONFIRM_PENDING

    def cancel_submit(self):
        """CONFIRM_PENDING -> ANSWERING."""
        self._ensure_open()
        if self._state != SessionState.CONFIRM_PENDING:
            raise InvalidTransition(f"Nothing to cancel while {self._state.value}")
        self._state = SessionState.ANSWERING

    def confirm_submit(self) -> QuizResult:
        """
        CONFIRM_PENDING -> SUBMITTED.

        Once submitted (manually or by timeout) this is a no-op that returns
        the frozen result.
        """
        self._ensure_open()
        if self._state == SessionState.SUBMITTED:
            return self._result
        if self._state != SessionState.CONFIRM_PENDING:
            raise InvalidTransition("Submit must be requested before it is confirmed")
        return self._submit(SubmitTrigger.MANUAL)

    def tick(self) -> Optional[int]:
        """
        Advance the assessment countdown by one second.

        The countdown keeps running while a submit confirmation is pending.
        Reaching zero submits whatever answers exist at that instant. Ticks on
        a submitted, closed or practice session are ignored.

        Returns:
            Remaining seconds (None in practice mode)
        """
        if not self.is_running:
            return self.remaining_seconds

        self.remaining_seconds = max(0, self.remaining_seconds - 1)
        if self.remaining_seconds == 0:
            logger.info("Time is up, submitting automatically")
            self._submit(SubmitTrigger.TIMEOUT)
        return self.remaining_seconds

    def _submit(self, trigger: SubmitTrigger) -> QuizResult:
        # Single authoritative guard for both the manual and the timeout path
        if self._state == SessionState.SUBMITTED:
            return self._result
        self._state = SessionState.SUBMITTED

        breakdown = score_breakdown(self.question_set, self._answers)
        self._result = QuizResult(
            score=breakdown.total,
            breakdown=breakdown,
            trigger=trigger,
            remaining_seconds=self.remaining_seconds,
            answers=self._answers.copy(),
        )
        logger.info(
            f"Session {self.lesson_id or '-'} submitted ({trigger.value}): "
            f"{breakdown.total:.2f} (A {breakdown.part_a:.2f}, B {breakdown.part_b:.2f}, "
            f"C {breakdown.part_c:.2f})"
        )
        if self._on_submitted is not None:
            self._on_submitted(self._result)
        return self._result

    def commit_progress(self, progress, lesson_id: Optional[str] = None) -> bool:
        """
        Write the final score to the progress store, at most once.

        Practice sessions never write. Only the first call after submission
        reaches the store.

        Args:
            progress: ProgressStore to update
            lesson_id: Lesson to credit (default: the session's lesson)

        Returns:
            True if record_if_better() was called

        Raises:
            InvalidTransition: If the session is not submitted yet
        """
        self._ensure_open()
        if self.mode == QuizMode.PRACTICE:
            logger.debug("Practice session, progress not committed")
            return False
        if self._state != SessionState.SUBMITTED:
            raise InvalidTransition("Cannot commit progress before submission")
        if self._committed:
            return False

        lesson_id = lesson_id or self.lesson_id
        if lesson_id is None:
            raise ValueError("No lesson id to commit progress for")

        self._committed = True
        progress.record_if_better(lesson_id, self._result.score)
        return True

    def close(self):
        """Tear down the session. Further commands are rejected, ticks ignored."""
        if not self._closed:
            self._closed = True
            logger.debug(f"Session {self.lesson_id or '-'} closed in state {self._state.value}")
