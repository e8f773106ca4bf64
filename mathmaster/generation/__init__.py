"""
Math 6 Master Generation - Question set sources and boundary validation.

This module provides:
- QuestionSetGenerator / ReportSender: collaborator interfaces
- validate_question_set: boundary validation of generated content
- GeminiQuizGenerator: Gemini-backed question set generator
"""

from .base import QuestionSetGenerator, ReportSender

from .validation import (
    validate_question_set,
    structural_problems,
    contract_deviations,
)

from .gemini import GeminiQuizGenerator

__all__ = [
    "QuestionSetGenerator",
    "ReportSender",
    "validate_question_set",
    "structural_problems",
    "contract_deviations",
    "GeminiQuizGenerator",
]
