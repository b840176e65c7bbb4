"""Command-line interface for classifying and submitting feedback."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import click

from feedback_portal.config.constants import CATEGORIES, SUBJECTS
from feedback_portal.config.settings import Settings
from feedback_portal.feedback.classifier import KeywordSentimentClassifier, build_classifier
from feedback_portal.feedback.database import DatabaseConfig
from feedback_portal.feedback.models import FeedbackSubmission
from feedback_portal.feedback.pipeline import FeedbackSubmissionPipeline
from feedback_portal.feedback.store import SqlRecordStore, build_record_store
from feedback_portal.lib.exceptions import RecordStoreError, SubmissionError

LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def _configure_logging(verbose: int, quiet: bool) -> None:
    level_index = min(verbose, len(LOG_LEVELS) - 1)
    level = LOG_LEVELS[level_index]
    if quiet:
        level = logging.ERROR
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )


@click.group()
@click.option("--verbose", "-v", count=True, help="Increase verbosity (use up to -vv)")
@click.option("--quiet", "-q", is_flag=True, help="Only show errors")
@click.pass_context
def cli(ctx: click.Context, verbose: int, quiet: bool) -> None:
    """Classify and submit student feedback."""
    _configure_logging(verbose, quiet)
    ctx.obj = {"verbose": verbose, "quiet": quiet}


@cli.command()
@click.argument("text")
@click.option("--offline", is_flag=True, help="Use the keyword heuristic only")
def classify(text: str, offline: bool) -> None:
    """Print the sentiment label for TEXT."""
    classifier = KeywordSentimentClassifier() if offline else build_classifier()
    label = asyncio.run(classifier.classify(text))
    click.echo(label.value)


@cli.command(name="init-db")
@click.option("--database-url", default=None, help="Override DATABASE_URL")
def init_db(database_url: Optional[str]) -> None:
    """Create the local feedback tables."""
    db_config = DatabaseConfig(database_url=database_url)
    db_config.create_tables()
    click.echo(f"Tables ready at {db_config.database_url}")


@cli.command(name="add-student")
@click.option("--user-id", required=True)
@click.option("--branch", required=True)
@click.option("--semester", type=click.IntRange(1, 12), required=True)
@click.option("--roll-number", default=None)
@click.option("--database-url", default=None, help="Override DATABASE_URL")
def add_student(
    user_id: str,
    branch: str,
    semester: int,
    roll_number: Optional[str],
    database_url: Optional[str]
) -> None:
    """Register a student profile in the local database."""
    store = SqlRecordStore(DatabaseConfig(database_url=database_url))
    try:
        author = store.add_student(user_id, branch, semester, roll_number)
    except RecordStoreError as e:
        raise click.ClickException(e.message)
    click.echo(author.id)


@cli.command()
@click.option("--user-id", required=True, help="Auth user id of the student")
@click.option("--subject", type=click.Choice(SUBJECTS), required=True)
@click.option("--category", type=click.Choice(CATEGORIES), required=True)
@click.option("--text", required=True, help="Feedback text")
def submit(user_id: str, subject: str, category: str, text: str) -> None:
    """Classify and store one piece of feedback."""
    settings = Settings()
    store = build_record_store(settings)
    pipeline = FeedbackSubmissionPipeline(build_classifier(settings), store)

    async def _run():
        author = await store.get_author(user_id)
        submission = FeedbackSubmission(
            subject=subject,
            category=category,
            text=text,
            author=author
        )
        return await pipeline.submit(submission)

    try:
        sentiment = asyncio.run(_run())
    except (SubmissionError, RecordStoreError) as e:
        raise click.ClickException(e.message)

    click.echo(f"Your feedback was classified as {sentiment.value}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
