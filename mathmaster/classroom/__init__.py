"""
Math 6 Master Classroom - Curriculum, progress and lesson flow.

This module provides:
- CurriculumIndex: global lesson order and adjacency
- ProgressStore: best score per lesson, persisted in SQLite
- ProgressionGate: lesson locking and status
- Classroom: lesson flow from start to committed score
"""

from .curriculum import (
    CurriculumIndex,
    load_curriculum,
    load_default_curriculum,
    DEFAULT_CURRICULUM_PATH,
)

from .progress import (
    ProgressStore,
    decode_progress,
    encode_progress,
)

from .navigator import (
    ProgressionGate,
    NavigationLesson,
    NavigationChapter,
)

from .coordinator import (
    Classroom,
    share_message,
)

__all__ = [
    # Curriculum
    "CurriculumIndex",
    "load_curriculum",
    "load_default_curriculum",
    "DEFAULT_CURRICULUM_PATH",
    # Progress
    "ProgressStore",
    "decode_progress",
    "encode_progress",
    # Navigator
    "ProgressionGate",
    "NavigationLesson",
    "NavigationChapter",
    # Coordinator
    "Classroom",
    "share_message",
]
