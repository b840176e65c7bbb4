"""Pydantic models for feedback submission."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SentimentLabel(str, Enum):
    """Closed set of sentiment labels attached to every record."""
    POSITIVE = "Positive"
    NEUTRAL = "Neutral"
    NEGATIVE = "Negative"

    @classmethod
    def parse(cls, value: Any) -> Optional["SentimentLabel"]:
        """Match a raw label case-insensitively; None when unrecognized."""
        if not isinstance(value, str):
            return None
        normalized = value.strip().lower()
        for label in cls:
            if label.value.lower() == normalized:
                return label
        return None


class AuthorProfile(BaseModel):
    """Student profile fields needed to attribute a submission."""
    id: str
    branch: str
    semester: int


class FeedbackSubmission(BaseModel):
    """A single feedback submission, built per submit call."""
    subject: str = ""
    category: str = ""
    text: str = ""
    author: Optional[AuthorProfile] = None


class FeedbackRecord(BaseModel):
    """Flat row handed to the record store."""
    student_id: str
    subject: str
    category: str
    feedback_text: str
    sentiment: SentimentLabel
    branch: str
    semester: int

    @classmethod
    def from_submission(
        cls,
        submission: FeedbackSubmission,
        sentiment: SentimentLabel
    ) -> "FeedbackRecord":
        author = submission.author
        return cls(
            student_id=author.id,
            subject=submission.subject,
            category=submission.category,
            feedback_text=submission.text,
            sentiment=sentiment,
            branch=author.branch,
            semester=author.semester,
        )

    def to_row(self) -> Dict[str, Any]:
        """Serialize to the column layout of the feedback table."""
        return self.model_dump(mode="json")


class FeedbackRequest(BaseModel):
    """Request model for feedback submission."""
    user_id: str = Field(..., description="Auth user id of the submitting student")
    subject: str = ""
    category: str = ""
    text: str = ""


class FeedbackResponse(BaseModel):
    """Success response for feedback submission."""
    success: bool
    sentiment: Optional[SentimentLabel] = None
    message: str


class FeedbackOptionsResponse(BaseModel):
    """Choices offered on the submission form."""
    subjects: List[str]
    categories: List[str]
    max_length: int
