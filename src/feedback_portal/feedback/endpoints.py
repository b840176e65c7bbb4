"""FastAPI endpoints for feedback submission."""

from typing import Optional

from fastapi import APIRouter, HTTPException

from feedback_portal.config.constants import CATEGORIES, FEEDBACK_TEXT_SOFT_LIMIT, SUBJECTS
from feedback_portal.feedback.classifier import build_classifier
from feedback_portal.feedback.models import (
    FeedbackOptionsResponse,
    FeedbackRequest,
    FeedbackResponse,
    FeedbackSubmission,
)
from feedback_portal.feedback.pipeline import FeedbackSubmissionPipeline
from feedback_portal.feedback.store import build_record_store
from feedback_portal.feedback.validation import validate_category, validate_subject
from feedback_portal.lib.exceptions import (
    MissingFields,
    MissingIdentity,
    PersistenceFailed,
    RecordStoreError,
    ValidationError,
)
from feedback_portal.utils.logger import setup_logger


# Create router
router = APIRouter()

# Setup logger
feedback_logger = setup_logger("feedback_portal.feedback")

# Submission pipeline (will be initialized at startup)
pipeline: Optional[FeedbackSubmissionPipeline] = None


def init_pipeline(instance: Optional[FeedbackSubmissionPipeline] = None) -> FeedbackSubmissionPipeline:
    """Initialize the submission pipeline (call at startup)."""
    global pipeline
    try:
        pipeline = instance or FeedbackSubmissionPipeline(
            classifier=build_classifier(),
            store=build_record_store()
        )
        feedback_logger.info("Feedback pipeline initialized successfully")
    except ValueError as e:
        feedback_logger.error(f"Failed to initialize feedback pipeline: {e}")
        raise
    return pipeline


@router.get("/feedback/options", response_model=FeedbackOptionsResponse)
async def feedback_options():
    """Subjects and categories offered on the submission form."""
    return FeedbackOptionsResponse(
        subjects=SUBJECTS,
        categories=CATEGORIES,
        max_length=FEEDBACK_TEXT_SOFT_LIMIT
    )


@router.post("/feedback/submit", response_model=FeedbackResponse)
async def submit_feedback(request: FeedbackRequest):
    """
    Classify and store feedback from a student.

    Args:
        request: Feedback submission request

    Returns:
        Success response carrying the sentiment label

    Raises:
        HTTPException: If validation fails, the student is unknown,
            or the record could not be stored
    """
    if pipeline is None:
        raise HTTPException(
            status_code=503,
            detail="Feedback pipeline not initialized"
        )

    try:
        # Blank values are reported by the pipeline as missing fields
        if request.subject:
            validate_subject(request.subject)
        if request.category:
            validate_category(request.category)

        author = await pipeline.store.get_author(request.user_id)

        submission = FeedbackSubmission(
            subject=request.subject,
            category=request.category,
            text=request.text,
            author=author
        )
        sentiment = await pipeline.submit(submission)

        return FeedbackResponse(
            success=True,
            sentiment=sentiment,
            message=f"Your feedback was classified as {sentiment.value}"
        )

    except MissingIdentity as e:
        feedback_logger.warning(f"Unknown student: user_id={request.user_id}")
        raise HTTPException(status_code=403, detail=e.message)

    except (MissingFields, ValidationError) as e:
        raise HTTPException(status_code=400, detail=e.message)

    except (PersistenceFailed, RecordStoreError) as e:
        feedback_logger.error(f"Record store error: user_id={request.user_id}, error={str(e)}")
        raise HTTPException(
            status_code=500,
            detail=PersistenceFailed().message
        )

    except Exception as e:
        feedback_logger.error(f"Unexpected error: user_id={request.user_id}, error={str(e)}")
        raise HTTPException(
            status_code=500,
            detail="An internal error occurred"
        )
