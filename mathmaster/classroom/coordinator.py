"""
Classroom - Lesson flow from dashboard to committed score.

Ties together the curriculum index, progress store, progression gate and a
question set generator:

    start_lesson() -> QuizSession -> (answers, submit) -> finish()

The progress store is owned here and handed to the gate and to sessions,
never reached as global state.
"""

import logging
from typing import Optional

from mathmaster.config import ASSESSMENT_DURATION_SECONDS, SUBJECT_LABEL
from mathmaster.errors import ContentUnavailable, InvalidTransition, LessonLocked
from mathmaster.generation import QuestionSetGenerator, ReportSender, validate_question_set
from mathmaster.quiz import QuizResult, QuizSession
from mathmaster.schemas import LessonStatus, QuizMode, ScoreReport

from .curriculum import CurriculumIndex
from .navigator import NavigationChapter, ProgressionGate
from .progress import ProgressStore

logger = logging.getLogger(__name__)


def share_message(score: float, topic: str) -> str:
    """Text for sharing a result."""
    return f'I just scored {score:g}/10 on "{topic}" in Math 6 Master! 🏆'


class Classroom:
    """
    Single-learner lesson flow.

    Sessions are created only for lessons the gate allows; their final score
    is committed once through finish().
    """

    def __init__(
        self,
        index: CurriculumIndex,
        progress: ProgressStore,
        generator: QuestionSetGenerator,
        report_sender: Optional[ReportSender] = None,
        subject: str = SUBJECT_LABEL,
        duration_seconds: int = ASSESSMENT_DURATION_SECONDS,
    ):
        self.index = index
        self.progress = progress
        self.gate = ProgressionGate(index, progress)
        self.generator = generator
        self.report_sender = report_sender
        self.subject = subject
        self.duration_seconds = duration_seconds

    # -------------------------------------------------------------------------
    # Dashboard
    # -------------------------------------------------------------------------

    def lesson_status(self, lesson_id: str, mode: QuizMode) -> LessonStatus:
        return self.gate.status(lesson_id, mode)

    def navigation_tree(self, mode: QuizMode) -> list[NavigationChapter]:
        return self.gate.navigation_tree(mode)

    # -------------------------------------------------------------------------
    # Lesson flow
    # -------------------------------------------------------------------------

    def start_lesson(
        self,
        lesson_id: str,
        mode: QuizMode,
        instant_feedback: Optional[bool] = None,
    ) -> QuizSession:
        """
        Generate a question set and open a session for a lesson.

        Raises:
            LessonNotFound: If the lesson is not in the curriculum
            LessonLocked: If assessment mode gates the lesson
            ContentUnavailable: If no usable question set could be generated
        """
        lesson = self.index.get_lesson(lesson_id)
        if self.gate.is_locked(lesson_id, mode):
            raise LessonLocked(lesson_id, self.gate.blocking_lesson_id(lesson_id, mode))

        try:
            question_set = self.generator.generate_question_set(lesson.title, self.subject)
        except ContentUnavailable:
            logger.warning(f"No question set for {lesson_id}")
            raise
        except Exception as e:
            logger.warning(f"Question generator failed for {lesson_id}: {e}")
            raise ContentUnavailable(f"Could not generate a question set for {lesson_id}") from e
        question_set = validate_question_set(question_set)

        logger.info(f"Starting {mode.value} session for {lesson_id}")
        return QuizSession(
            question_set,
            mode,
            lesson_id=lesson_id,
            duration_seconds=self.duration_seconds,
            instant_feedback=instant_feedback,
        )

    def finish(self, session: QuizSession) -> QuizResult:
        """
        Commit a submitted session (assessment only) and close it.

        Raises:
            InvalidTransition: If the session has not been submitted
        """
        if not session.is_submitted:
            raise InvalidTransition("Session must be submitted before it is finished")
        session.commit_progress(self.progress)
        result = session.result
        session.close()
        return result

    def leave(self, session: QuizSession):
        """Abandon a session without committing anything."""
        session.close()

    # -------------------------------------------------------------------------
    # Reporting
    # -------------------------------------------------------------------------

    def build_report(
        self,
        result: QuizResult,
        topic: str,
        student_name: str,
        class_name: str,
        school_name: str,
    ) -> ScoreReport:
        return ScoreReport(
            student_name=student_name,
            class_name=class_name,
            school_name=school_name,
            score=result.score,
            topic=topic,
        )

    def send_report(self, report: ScoreReport) -> bool:
        """Hand a report to the report sender, if one is configured."""
        if self.report_sender is None:
            raise RuntimeError("No report sender configured")
        return self.report_sender.send_report(report)
