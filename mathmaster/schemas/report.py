"""
Score report payload handed to the email report collaborator.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class ScoreReport(BaseModel):
    student_name: str
    class_name: str
    school_name: str
    score: float = Field(..., ge=0.0, le=10.0)
    topic: str
    date: datetime = Field(default_factory=datetime.now)

    def template_params(self) -> dict[str, str | float]:
        """Flatten into the key/value params an email template expects."""
        return {
            "student_name": self.student_name,
            "class_name": self.class_name,
            "school_name": self.school_name,
            "score": self.score,
            "topic": self.topic,
            "date": self.date.strftime("%H:%M:%S %d/%m/%Y"),
        }
