"""
Curriculum schemas for Math 6 Master.

Defines Pydantic models for the static curriculum:
- Lessons (the unit of progression gating)
- Chapters (ordered groups of lessons)
- Curriculum (ordered chapters; defines the global lesson order)
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Lesson(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    chapter_id: str = Field(..., alias="chapterId")


class Chapter(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    lessons: list[Lesson]

    @model_validator(mode="after")
    def check_lesson_chapter_ids(self) -> "Chapter":
        for lesson in self.lessons:
            if lesson.chapter_id != self.id:
                raise ValueError(
                    f"Lesson {lesson.id} declares chapter {lesson.chapter_id}, "
                    f"but is listed under {self.id}"
                )
        return self


class Curriculum(BaseModel):
    """
    Ordered chapters. Global lesson order is the flattened concatenation of
    each chapter's lessons; lesson ids must be unique across the curriculum.
    """
    model_config = ConfigDict(frozen=True)

    chapters: list[Chapter]

    @model_validator(mode="after")
    def check_unique_lesson_ids(self) -> "Curriculum":
        seen: set[str] = set()
        for chapter in self.chapters:
            for lesson in chapter.lessons:
                if lesson.id in seen:
                    raise ValueError(f"Duplicate lesson id: {lesson.id}")
                seen.add(lesson.id)
        return self

    def iter_lessons(self):
        """Yield lessons in global order."""
        for chapter in self.chapters:
            yield from chapter.lessons
