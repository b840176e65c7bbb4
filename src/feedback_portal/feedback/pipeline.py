"""Feedback submission pipeline: validate, classify, persist."""

from feedback_portal.feedback.classifier import KeywordSentimentClassifier, SentimentClassifier
from feedback_portal.feedback.models import (
    FeedbackRecord,
    FeedbackSubmission,
    SentimentLabel,
)
from feedback_portal.feedback.store import RecordStore
from feedback_portal.feedback.validation import (
    exceeds_length_hint,
    validate_author,
    validate_required_fields,
)
from feedback_portal.lib.exceptions import PersistenceFailed
from feedback_portal.utils.logger import setup_logger


pipeline_logger = setup_logger("feedback_portal.pipeline")


class FeedbackSubmissionPipeline:
    """
    Classify feedback text and persist it with the resolved label.

    Classification never fails a submission: classifier errors fall back to
    the keyword heuristic and unrecognized labels become Neutral. The store
    is called at most once per submit. Nothing is cached between calls, so a
    caller may resubmit after PersistenceFailed.
    """

    def __init__(self, classifier: SentimentClassifier, store: RecordStore):
        self.classifier = classifier
        self.store = store
        self.fallback = KeywordSentimentClassifier()

    def validate(self, submission: FeedbackSubmission) -> None:
        """
        Run pre-flight checks. No network activity happens here.

        Raises:
            MissingIdentity: If the author is not resolved
            MissingFields: If subject, category or text is blank
        """
        validate_author(submission.author)
        validate_required_fields(submission)

        if exceeds_length_hint(submission.text):
            pipeline_logger.warning("feedback_exceeds_length_hint", extra={
                "data": {"length": len(submission.text)}
            })

    async def classify(self, text: str) -> SentimentLabel:
        try:
            label = await self.classifier.classify(text)
        except Exception as e:
            pipeline_logger.warning("classification_failed", extra={
                "data": {"error_type": type(e).__name__, "error": str(e)[:200]}
            })
            return self.fallback.label_for(text)

        return SentimentLabel.parse(label) or SentimentLabel.NEUTRAL

    async def submit(self, submission: FeedbackSubmission) -> SentimentLabel:
        """
        Submit one piece of feedback.

        Args:
            submission: Feedback with a resolved author

        Returns:
            The sentiment label stored with the record

        Raises:
            MissingIdentity: If the author is not resolved
            MissingFields: If a required field is blank
            PersistenceFailed: If the record store did not accept the record
        """
        self.validate(submission)

        sentiment = await self.classify(submission.text)
        record = FeedbackRecord.from_submission(submission, sentiment)

        try:
            await self.store.insert(record)
        except Exception as e:
            pipeline_logger.error("feedback_persist_failed", extra={
                "data": {
                    "student_id": record.student_id,
                    "error_type": type(e).__name__,
                    "error": str(e)[:200]
                }
            })
            raise PersistenceFailed() from e

        pipeline_logger.info("feedback_submitted", extra={
            "data": {
                "student_id": record.student_id,
                "subject": record.subject,
                "category": record.category,
                "sentiment": sentiment.value
            }
        })
        return sentiment
