"""
Math 6 Master Schemas - Pydantic models for the quiz engine.

This module exports all schema classes for:
- Curriculum: lessons, chapters, curriculum
- Quiz: question set parts and items
- Progress: quiz modes, lesson status, persisted progress record
- Report: score report payload
"""

# Curriculum schemas
from .curriculum import (
    Lesson,
    Chapter,
    Curriculum,
)

# Quiz schemas
from .quiz import (
    Part,
    QuizItem,
    MultipleChoiceItem,
    TrueFalseStatement,
    TrueFalseItem,
    ShortAnswerItem,
    QuestionSet,
)

# Progress schemas
from .progress import (
    QuizMode,
    LessonStatus,
    ProgressRecord,
)

# Report schemas
from .report import ScoreReport

__all__ = [
    # Curriculum
    'Lesson',
    'Chapter',
    'Curriculum',
    # Quiz
    'Part',
    'QuizItem',
    'MultipleChoiceItem',
    'TrueFalseStatement',
    'TrueFalseItem',
    'ShortAnswerItem',
    'QuestionSet',
    # Progress
    'QuizMode',
    'LessonStatus',
    'ProgressRecord',
    # Report
    'ScoreReport',
]
