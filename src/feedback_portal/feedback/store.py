"""Record stores: hosted Supabase tables or a local SQL database."""

import asyncio
from abc import ABC, abstractmethod
from typing import Optional

import httpx
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from feedback_portal.config.constants import FEEDBACK_TABLE, STUDENTS_TABLE
from feedback_portal.config.settings import Settings
from feedback_portal.feedback.database import DatabaseConfig, Feedback, Student
from feedback_portal.feedback.models import AuthorProfile, FeedbackRecord
from feedback_portal.lib.exceptions import RecordStoreError


class RecordStore(ABC):
    """Persistence boundary for feedback records and student lookups."""

    @abstractmethod
    async def insert(self, record: FeedbackRecord) -> None:
        """
        Persist one feedback record.

        Raises:
            RecordStoreError: If the record was not stored
        """

    @abstractmethod
    async def get_author(self, user_id: str) -> Optional[AuthorProfile]:
        """Look up the student profile for an auth user id."""


class SupabaseRecordStore(RecordStore):
    """Record store backed by the hosted PostgREST API."""

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or Settings()
        self.base_url = settings.SUPABASE_URL
        self.api_key = settings.SUPABASE_ANON_KEY
        self.timeout = settings.STORE_TIMEOUT_SECONDS

        if not self.base_url:
            raise ValueError("SUPABASE_URL environment variable not set")
        if not self.api_key:
            raise ValueError("SUPABASE_ANON_KEY environment variable not set")

    def _headers(self) -> dict:
        return {
            'Authorization': f'Bearer {self.api_key}',
            'apikey': self.api_key,
            'Content-Type': 'application/json',
        }

    async def insert(self, record: FeedbackRecord) -> None:
        url = f"{self.base_url}/rest/v1/{FEEDBACK_TABLE}"
        headers = {**self._headers(), 'Prefer': 'return=minimal'}

        async with httpx.AsyncClient() as client:
            try:
                response = await client.post(
                    url,
                    json=record.to_row(),
                    headers=headers,
                    timeout=self.timeout
                )
            except httpx.HTTPError as e:
                raise RecordStoreError(f"Record store request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise RecordStoreError(
                f"Record store returned {response.status_code}",
                details={"status_code": response.status_code}
            )

    async def get_author(self, user_id: str) -> Optional[AuthorProfile]:
        """
        Fetch id, branch and semester of the student linked to user_id.

        Returns:
            The profile, or None when the user has no student row

        Raises:
            RecordStoreError: If the lookup fails
        """
        url = f"{self.base_url}/rest/v1/{STUDENTS_TABLE}"
        params = {
            'select': 'id,branch,semester',
            'user_id': f'eq.{user_id}',
            'limit': '1',
        }

        async with httpx.AsyncClient() as client:
            try:
                response = await client.get(
                    url,
                    params=params,
                    headers=self._headers(),
                    timeout=self.timeout
                )
            except httpx.HTTPError as e:
                raise RecordStoreError(f"Student lookup failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise RecordStoreError(f"Student lookup returned {response.status_code}")

        try:
            rows = response.json()
            if not rows:
                return None
            row = rows[0]
            return AuthorProfile(id=str(row['id']), branch=row['branch'], semester=row['semester'])
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise RecordStoreError(f"Student lookup returned an unexpected body: {e}") from e


class SqlRecordStore(RecordStore):
    """Record store backed by SQLAlchemy (SQLite by default)."""

    def __init__(self, db_config: Optional[DatabaseConfig] = None):
        self.db_config = db_config or DatabaseConfig()
        self.db_config.create_tables()

    def _insert(self, record: FeedbackRecord) -> None:
        with self.db_config.get_session() as session:
            try:
                session.add(Feedback(**record.to_row()))
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                raise RecordStoreError(f"Failed to insert feedback: {e}") from e

    def _get_author(self, user_id: str) -> Optional[AuthorProfile]:
        with self.db_config.get_session() as session:
            try:
                student = session.scalars(
                    select(Student).where(Student.user_id == user_id)
                ).first()
            except SQLAlchemyError as e:
                raise RecordStoreError(f"Student lookup failed: {e}") from e

            if student is None:
                return None
            return AuthorProfile(id=student.id, branch=student.branch, semester=student.semester)

    def add_student(
        self,
        user_id: str,
        branch: str,
        semester: int,
        roll_number: Optional[str] = None
    ) -> AuthorProfile:
        """
        Register a student profile (local database only).

        Raises:
            RecordStoreError: If the student cannot be stored, e.g. a duplicate user id
        """
        with self.db_config.get_session() as session:
            student = Student(
                user_id=user_id,
                branch=branch,
                semester=semester,
                roll_number=roll_number
            )
            try:
                session.add(student)
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                raise RecordStoreError(f"Failed to register student: {e}") from e
            return AuthorProfile(id=student.id, branch=student.branch, semester=student.semester)

    async def insert(self, record: FeedbackRecord) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._insert, record)

    async def get_author(self, user_id: str) -> Optional[AuthorProfile]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._get_author, user_id)


def build_record_store(settings: Optional[Settings] = None) -> RecordStore:
    """Build the record store selected by RECORD_STORE."""
    settings = settings or Settings()

    if settings.RECORD_STORE == "supabase":
        return SupabaseRecordStore(settings)
    if settings.RECORD_STORE == "sql":
        return SqlRecordStore(DatabaseConfig(settings))
    raise ValueError(f"Invalid record store: {settings.RECORD_STORE}")
