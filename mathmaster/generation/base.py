"""
Interfaces of the external collaborators the quiz engine talks to.
"""

from typing import Protocol, runtime_checkable

from mathmaster.schemas import QuestionSet, ScoreReport


@runtime_checkable
class QuestionSetGenerator(Protocol):
    """Produces a question set for a lesson. Failures raise ContentUnavailable."""

    def generate_question_set(self, topic: str, subject: str) -> QuestionSet:
        ...


@runtime_checkable
class ReportSender(Protocol):
    """Delivers a score report (e.g. by email). Returns True on acknowledgement."""

    def send_report(self, report: ScoreReport) -> bool:
        ...
