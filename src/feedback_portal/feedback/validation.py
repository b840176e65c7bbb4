"""Validation functions for feedback submissions."""

from typing import Optional

from feedback_portal.config.constants import (
    CATEGORIES,
    FEEDBACK_TEXT_SOFT_LIMIT,
    SUBJECTS,
)
from feedback_portal.feedback.models import AuthorProfile, FeedbackSubmission
from feedback_portal.lib.exceptions import (
    MissingFields,
    MissingIdentity,
    ValidationError,
)


def validate_author(author: Optional[AuthorProfile]) -> AuthorProfile:
    """
    Validate that the submitting student has been resolved.

    Args:
        author: Resolved student profile, or None

    Returns:
        The author profile

    Raises:
        MissingIdentity: If no student profile was resolved
    """
    if author is None:
        raise MissingIdentity()
    return author


def validate_required_fields(submission: FeedbackSubmission) -> None:
    """
    Validate that subject, category and text are filled in.

    Text counts as missing when it is only whitespace.

    Args:
        submission: Feedback submission to check

    Raises:
        MissingFields: If any required field is blank
    """
    missing = []
    if not submission.subject:
        missing.append("subject")
    if not submission.category:
        missing.append("category")
    if not submission.text.strip():
        missing.append("text")

    if missing:
        raise MissingFields(details={"missing": missing})


def exceeds_length_hint(text: str, limit: int = FEEDBACK_TEXT_SOFT_LIMIT) -> bool:
    """Return True when text is longer than the displayed character hint."""
    return len(text) > limit


def validate_subject(subject: str) -> str:
    """
    Validate subject is in allowed list.

    Raises:
        ValidationError: If subject is not in allowed list
    """
    if subject not in SUBJECTS:
        raise ValidationError(
            f"Invalid subject. Must be one of: {', '.join(SUBJECTS)}"
        )
    return subject


def validate_category(category: str) -> str:
    """
    Validate category is in allowed list.

    Raises:
        ValidationError: If category is not in allowed list
    """
    if category not in CATEGORIES:
        raise ValidationError(
            f"Invalid category. Must be one of: {', '.join(CATEGORIES)}"
        )
    return category
