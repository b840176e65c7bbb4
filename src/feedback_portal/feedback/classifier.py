"""Sentiment classifiers: remote edge function with a keyword fallback."""

import asyncio
from abc import ABC, abstractmethod
from typing import Iterable, Optional

import httpx

from feedback_portal.config.constants import NEGATIVE_KEYWORDS, POSITIVE_KEYWORDS
from feedback_portal.config.settings import Settings
from feedback_portal.feedback.models import SentimentLabel
from feedback_portal.lib.exceptions import ClassifierError
from feedback_portal.utils.logger import setup_logger


classifier_logger = setup_logger("feedback_portal.classifier")


class SentimentClassifier(ABC):
    """Anything that can turn feedback text into a sentiment label."""

    @abstractmethod
    async def classify(self, text: str) -> SentimentLabel:
        """Return the sentiment label for text."""


class RemoteSentimentClassifier(SentimentClassifier):
    """Client for the hosted `analyze-sentiment` edge function."""

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize the client from environment settings."""
        settings = settings or Settings()
        self.base_url = settings.SUPABASE_URL
        self.api_key = settings.SUPABASE_ANON_KEY
        self.function_name = settings.SENTIMENT_FUNCTION
        self.timeout = settings.CLASSIFIER_TIMEOUT_SECONDS

        if not self.base_url:
            raise ValueError("SUPABASE_URL environment variable not set")
        if not self.api_key:
            raise ValueError("SUPABASE_ANON_KEY environment variable not set")

    async def classify(self, text: str) -> SentimentLabel:
        """
        Invoke the sentiment function.

        Args:
            text: Feedback text to classify

        Returns:
            The label reported by the function, or Neutral when the
            function answers without a recognizable label

        Raises:
            ClassifierError: If the call fails or the body is not a JSON object
        """
        url = f"{self.base_url}/functions/v1/{self.function_name}"

        headers = {
            'Authorization': f'Bearer {self.api_key}',
            'apikey': self.api_key,
            'Content-Type': 'application/json',
        }

        async with httpx.AsyncClient() as client:
            try:
                response = await client.post(
                    url,
                    json={'text': text},
                    headers=headers,
                    timeout=self.timeout
                )
            except httpx.HTTPError as e:
                raise ClassifierError(f"Sentiment function request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise ClassifierError(
                f"Sentiment function returned {response.status_code}",
                details={"status_code": response.status_code}
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ClassifierError("Sentiment function returned invalid JSON") from e

        if not isinstance(data, dict):
            raise ClassifierError("Sentiment function returned an unexpected body")

        return SentimentLabel.parse(data.get('sentiment')) or SentimentLabel.NEUTRAL


class KeywordSentimentClassifier(SentimentClassifier):
    """Deterministic keyword heuristic used when the remote call fails.

    Positive keywords are checked before negative ones, so text holding
    both kinds is labelled Positive.
    """

    def __init__(
        self,
        positive_keywords: Iterable[str] = POSITIVE_KEYWORDS,
        negative_keywords: Iterable[str] = NEGATIVE_KEYWORDS
    ):
        self.positive_keywords = tuple(positive_keywords)
        self.negative_keywords = tuple(negative_keywords)

    def label_for(self, text: str) -> SentimentLabel:
        lower_text = text.lower()
        if any(keyword in lower_text for keyword in self.positive_keywords):
            return SentimentLabel.POSITIVE
        if any(keyword in lower_text for keyword in self.negative_keywords):
            return SentimentLabel.NEGATIVE
        return SentimentLabel.NEUTRAL

    async def classify(self, text: str) -> SentimentLabel:
        return self.label_for(text)


class FallbackSentimentClassifier(SentimentClassifier):
    """Try the primary classifier; on any failure delegate to the secondary."""

    def __init__(
        self,
        primary: SentimentClassifier,
        secondary: SentimentClassifier,
        timeout: Optional[float] = None
    ):
        self.primary = primary
        self.secondary = secondary
        self.timeout = timeout

    async def classify(self, text: str) -> SentimentLabel:
        """
        Classify text, never raising.

        Args:
            text: Feedback text to classify

        Returns:
            The primary label when it answers in time, else the secondary label
        """
        try:
            if self.timeout is not None:
                label = await asyncio.wait_for(self.primary.classify(text), timeout=self.timeout)
            else:
                label = await self.primary.classify(text)
        except Exception as e:
            classifier_logger.warning("remote_classification_failed", extra={
                "data": {"error_type": type(e).__name__, "error": str(e)[:200]}
            })
            return await self.secondary.classify(text)

        # Primary output is untrusted
        if isinstance(label, SentimentLabel):
            return label
        return SentimentLabel.parse(label) or SentimentLabel.NEUTRAL


def build_classifier(settings: Optional[Settings] = None) -> SentimentClassifier:
    """
    Build the classifier used by the submission pipeline.

    Uses the remote function with keyword fallback when the hosted backend
    is configured, otherwise the keyword heuristic alone.
    """
    settings = settings or Settings()
    fallback = KeywordSentimentClassifier()

    if not settings.has_supabase():
        classifier_logger.warning("remote_classifier_not_configured")
        return fallback

    return FallbackSentimentClassifier(
        primary=RemoteSentimentClassifier(settings),
        secondary=fallback,
        timeout=settings.CLASSIFIER_TIMEOUT_SECONDS
    )
