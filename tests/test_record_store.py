"""Tests for the SQL and Supabase record stores."""

import os
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from feedback_portal.config.settings import Settings
from feedback_portal.feedback.database import Feedback
from feedback_portal.feedback.models import FeedbackRecord, SentimentLabel
from feedback_portal.feedback.store import (
    SqlRecordStore,
    SupabaseRecordStore,
    build_record_store,
)
from feedback_portal.lib.exceptions import RecordStoreError


SUPABASE_ENV = {
    'SUPABASE_URL': 'https://project.supabase.co/',
    'SUPABASE_ANON_KEY': 'anon-key',
}


def _record(student_id="student-1"):
    return FeedbackRecord(
        student_id=student_id,
        subject="Algorithms",
        category="Assignments",
        feedback_text="Assignments were good practice",
        sentiment=SentimentLabel.POSITIVE,
        branch="CSE",
        semester=4,
    )


def _mock_http(method, response=None, side_effect=None):
    mock_client = AsyncMock()
    setattr(
        mock_client.__aenter__.return_value,
        method,
        AsyncMock(return_value=response, side_effect=side_effect),
    )
    return mock_client


def _response(status_code, body=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body
    return response


# SQL store

@pytest.mark.asyncio
async def test_sql_get_author(sql_store):
    author = await sql_store.get_author("user-1")

    assert author is not None
    assert author.branch == "ECE"
    assert author.semester == 3


@pytest.mark.asyncio
async def test_sql_get_author_unknown_user(sql_store):
    assert await sql_store.get_author("nobody") is None


@pytest.mark.asyncio
async def test_sql_insert(sql_store):
    author = await sql_store.get_author("user-1")

    await sql_store.insert(_record(author.id))

    with sql_store.db_config.get_session() as session:
        row = session.scalars(select(Feedback)).one()

    assert row.subject == "Algorithms"
    assert row.sentiment == "Positive"
    assert row.created_at is not None


@pytest.mark.asyncio
async def test_sql_insert_failure_raises_store_error(sql_store):
    with patch.object(sql_store.db_config, 'get_session') as get_session:
        session = get_session.return_value.__enter__.return_value
        session.commit.side_effect = OperationalError("INSERT", {}, Exception("disk I/O error"))

        with pytest.raises(RecordStoreError, match="Failed to insert feedback"):
            await sql_store.insert(_record())

        session.rollback.assert_called_once()


def test_build_record_store_sql(sqlite_url):
    with patch.dict(os.environ, {'RECORD_STORE': 'sql', 'DATABASE_URL': sqlite_url}, clear=True):
        store = build_record_store(Settings())

    assert isinstance(store, SqlRecordStore)


def test_build_record_store_invalid():
    with patch.dict(os.environ, {'RECORD_STORE': 'mongo'}, clear=True):
        with pytest.raises(ValueError, match="Invalid record store"):
            build_record_store(Settings())


# Supabase store

def test_supabase_store_missing_config():
    with patch.dict(os.environ, {}, clear=True):
        with pytest.raises(ValueError, match="SUPABASE_URL environment variable not set"):
            SupabaseRecordStore(Settings())


def test_build_record_store_supabase():
    with patch.dict(os.environ, {**SUPABASE_ENV, 'RECORD_STORE': 'supabase'}, clear=True):
        store = build_record_store(Settings())

    assert isinstance(store, SupabaseRecordStore)
    assert store.base_url == 'https://project.supabase.co'


@pytest.mark.asyncio
async def test_supabase_insert_success():
    with patch.dict(os.environ, SUPABASE_ENV, clear=True):
        store = SupabaseRecordStore(Settings())

    mock_client = _mock_http('post', _response(201))
    with patch('httpx.AsyncClient', return_value=mock_client):
        await store.insert(_record())

    post = mock_client.__aenter__.return_value.post
    post.assert_called_once()
    args, kwargs = post.call_args
    assert args[0] == 'https://project.supabase.co/rest/v1/feedback'
    assert kwargs['json'] == {
        'student_id': 'student-1',
        'subject': 'Algorithms',
        'category': 'Assignments',
        'feedback_text': 'Assignments were good practice',
        'sentiment': 'Positive',
        'branch': 'CSE',
        'semester': 4,
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [400, 401, 409, 500])
async def test_supabase_insert_rejected(status_code):
    with patch.dict(os.environ, SUPABASE_ENV, clear=True):
        store = SupabaseRecordStore(Settings())

    with patch('httpx.AsyncClient', return_value=_mock_http('post', _response(status_code))):
        with pytest.raises(RecordStoreError, match=f"Record store returned {status_code}"):
            await store.insert(_record())


@pytest.mark.asyncio
async def test_supabase_insert_transport_error():
    with patch.dict(os.environ, SUPABASE_ENV, clear=True):
        store = SupabaseRecordStore(Settings())

    mock_client = _mock_http('post', side_effect=httpx.ConnectError("no route"))
    with patch('httpx.AsyncClient', return_value=mock_client):
        with pytest.raises(RecordStoreError):
            await store.insert(_record())


@pytest.mark.asyncio
async def test_supabase_get_author():
    with patch.dict(os.environ, SUPABASE_ENV, clear=True):
        store = SupabaseRecordStore(Settings())

    body = [{'id': 'abc-123', 'branch': 'ME', 'semester': 7}]
    mock_client = _mock_http('get', _response(200, body))
    with patch('httpx.AsyncClient', return_value=mock_client):
        author = await store.get_author('user-9')

    assert author.id == 'abc-123'
    assert author.branch == 'ME'
    assert author.semester == 7
    params = mock_client.__aenter__.return_value.get.call_args.kwargs['params']
    assert params['user_id'] == 'eq.user-9'


@pytest.mark.asyncio
async def test_supabase_get_author_not_found():
    with patch.dict(os.environ, SUPABASE_ENV, clear=True):
        store = SupabaseRecordStore(Settings())

    with patch('httpx.AsyncClient', return_value=_mock_http('get', _response(200, []))):
        assert await store.get_author('user-9') is None


@pytest.mark.asyncio
async def test_sql_add_student_duplicate_user_raises_store_error(sql_store):
    with pytest.raises(RecordStoreError, match="Failed to register student"):
        sql_store.add_student("user-1", "ECE", 3)

    # Session was rolled back; the original student is still readable
    author = await sql_store.get_author("user-1")
    assert author.branch == "ECE"


@pytest.mark.asyncio
async def test_supabase_get_author_invalid_json():
    with patch.dict(os.environ, SUPABASE_ENV, clear=True):
        store = SupabaseRecordStore(Settings())

    response = _response(200)
    response.json.side_effect = ValueError("Expecting value")
    with patch('httpx.AsyncClient', return_value=_mock_http('get', response)):
        with pytest.raises(RecordStoreError, match="unexpected body"):
            await store.get_author('user-9')


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [
    [{'id': 'abc-123', 'semester': 7}],
    [{'id': 'abc-123', 'branch': 'ME', 'semester': None}],
    {'id': 'abc-123'},
    "not rows",
])
async def test_supabase_get_author_malformed_rows(body):
    with patch.dict(os.environ, SUPABASE_ENV, clear=True):
        store = SupabaseRecordStore(Settings())

    with patch('httpx.AsyncClient', return_value=_mock_http('get', _response(200, body))):
        with pytest.raises(RecordStoreError):
            await store.get_author('user-9')
