"""Feedback submission and sentiment classification."""

from feedback_portal.feedback.models import (
    AuthorProfile,
    FeedbackRecord,
    FeedbackSubmission,
    SentimentLabel,
)
from feedback_portal.feedback.classifier import (
    FallbackSentimentClassifier,
    KeywordSentimentClassifier,
    RemoteSentimentClassifier,
    SentimentClassifier,
    build_classifier,
)
from feedback_portal.feedback.store import (
    RecordStore,
    SqlRecordStore,
    SupabaseRecordStore,
    build_record_store,
)
from feedback_portal.feedback.pipeline import FeedbackSubmissionPipeline

__all__ = [
    'AuthorProfile',
    'FeedbackRecord',
    'FeedbackSubmission',
    'SentimentLabel',
    'SentimentClassifier',
    'RemoteSentimentClassifier',
    'KeywordSentimentClassifier',
    'FallbackSentimentClassifier',
    'build_classifier',
    'RecordStore',
    'SqlRecordStore',
    'SupabaseRecordStore',
    'build_record_store',
    'FeedbackSubmissionPipeline',
]
