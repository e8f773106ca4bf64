"""
Math 6 Master - lesson-gated math quizzes with scoring and progress tracking.

Subpackages:
- schemas: pydantic models for curriculum, question sets, progress and reports
- classroom: curriculum index, progress store, progression gate, lesson flow
- quiz: scoring engine, quiz session state machine, countdown clock
- generation: question-set generation adapters and boundary validation
"""

__version__ = "0.1.0"
