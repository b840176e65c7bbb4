"""Shared fixtures for the feedback portal test suite."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from feedback_portal.feedback.database import DatabaseConfig
from feedback_portal.feedback.models import (
    AuthorProfile,
    FeedbackSubmission,
    SentimentLabel,
)
from feedback_portal.feedback.store import SqlRecordStore


@pytest.fixture
def author() -> AuthorProfile:
    """A resolved student profile."""
    return AuthorProfile(id="student-1", branch="CSE", semester=5)


@pytest.fixture
def valid_submission(author: AuthorProfile) -> FeedbackSubmission:
    """A submission that passes every pre-flight check."""
    return FeedbackSubmission(
        subject="Data Structures",
        category="Teaching Quality",
        text="The lectures were really helpful",
        author=author,
    )


@pytest.fixture
def mock_classifier() -> MagicMock:
    """Classifier double that always answers Positive."""
    classifier = MagicMock(name="SentimentClassifier")
    classifier.classify = AsyncMock(return_value=SentimentLabel.POSITIVE)
    return classifier


@pytest.fixture
def mock_store(author: AuthorProfile) -> MagicMock:
    """Record store double that accepts every insert."""
    store = MagicMock(name="RecordStore")
    store.insert = AsyncMock(return_value=None)
    store.get_author = AsyncMock(return_value=author)
    return store


@pytest.fixture
def sqlite_url(tmp_path: Path) -> str:
    """URL of a throwaway SQLite database."""
    return f"sqlite:///{tmp_path / 'feedback.db'}"


@pytest.fixture
def sql_store(sqlite_url: str) -> SqlRecordStore:
    """SQL record store with one registered student."""
    store = SqlRecordStore(DatabaseConfig(database_url=sqlite_url))
    store.add_student("user-1", "ECE", 3, roll_number="ECE-042")
    return store
