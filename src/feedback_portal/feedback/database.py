"""
SQLAlchemy ORM models and engine management for the local feedback database.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
from uuid import uuid4

from sqlalchemy import (
    Column, DateTime, ForeignKey, Index, Integer, String, Text,
    create_engine
)
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, relationship, sessionmaker
from sqlalchemy.pool import StaticPool

from feedback_portal.config.settings import Settings

# SQLAlchemy base class for ORM models
Base = declarative_base()


def _new_id() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Student(Base):
    """Student profiles, keyed by auth user id."""
    __tablename__ = "students"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), nullable=False, unique=True)
    roll_number = Column(String(32))
    branch = Column(String(100), nullable=False)
    semester = Column(Integer, nullable=False)

    __table_args__ = (
        Index('idx_students_user_id', 'user_id'),
    )

    feedback = relationship("Feedback", back_populates="student")

    def __repr__(self):
        return f"<Student(id='{self.id}', branch='{self.branch}', semester={self.semester})>"


class Feedback(Base):
    """Submitted feedback with its sentiment label."""
    __tablename__ = "feedback"

    id = Column(String(36), primary_key=True, default=_new_id)
    student_id = Column(String(36), ForeignKey("students.id"), nullable=False)
    subject = Column(String(100), nullable=False)
    category = Column(String(100), nullable=False)
    feedback_text = Column(Text, nullable=False)
    sentiment = Column(String(16), nullable=False)  # Positive, Neutral, Negative
    # Denormalized from the student at submission time
    branch = Column(String(100), nullable=False)
    semester = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        Index('idx_feedback_student_id', 'student_id'),
        Index('idx_feedback_sentiment', 'sentiment'),
    )

    student = relationship("Student", back_populates="feedback")

    def __repr__(self):
        return f"<Feedback(id='{self.id}', subject='{self.subject}', sentiment='{self.sentiment}')>"


class DatabaseConfig:
    """Database configuration and engine management."""

    def __init__(self, settings: Optional[Settings] = None, database_url: Optional[str] = None):
        self.settings = settings or Settings()
        self.database_url = database_url or self.settings.get_database_url()
        self.engine = None
        self.SessionLocal = None
        self._initialize_engine()

    def _initialize_engine(self):
        """Initialize the database engine based on configuration."""
        url = make_url(self.database_url)

        if url.get_backend_name() == "sqlite":
            if url.database and url.database != ":memory:":
                Path(url.database).parent.mkdir(parents=True, exist_ok=True)
            self.engine = create_engine(
                self.database_url,
                echo=self.settings.DATABASE_ECHO,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            self.engine = create_engine(
                self.database_url,
                echo=self.settings.DATABASE_ECHO,
                pool_pre_ping=True,  # Verify connections before use
            )

        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

    def get_session(self):
        """Get a new database session."""
        return self.SessionLocal()

    def create_tables(self):
        """Create all tables defined in the models."""
        Base.metadata.create_all(bind=self.engine)
