"""
Math 6 Master Quiz - Scoring and session runtime.

This module provides:
- Scoring engine: pure scoring of a question set against an answer sheet
- QuizSession: per-attempt state machine
- SessionClock: asyncio countdown for assessment sessions
"""

from .scoring import (
    AnswerSheet,
    ScoreBreakdown,
    statement_key,
    normalize_short_answer,
    is_part_a_correct,
    is_part_b_correct,
    is_part_c_correct,
    score,
    score_breakdown,
)

from .session import (
    QuizSession,
    SessionState,
    SubmitTrigger,
    ItemFeedback,
    QuizResult,
)

from .timer import SessionClock

__all__ = [
    # Scoring
    "AnswerSheet",
    "ScoreBreakdown",
    "statement_key",
    "normalize_short_answer",
    "is_part_a_correct",
    "is_part_b_correct",
    "is_part_c_correct",
    "score",
    "score_breakdown",
    # Session
    "QuizSession",
    "SessionState",
    "SubmitTrigger",
    "ItemFeedback",
    "QuizResult",
    # Timer
    "SessionClock",
]
