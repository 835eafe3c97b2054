"""Shared test fixtures."""

import sqlite3
from collections.abc import Iterator
from datetime import UTC, datetime

import pytest

from manuscript_vault.core.database.schema import connect, create_schema
from manuscript_vault.core.tree.documents import update_document
from manuscript_vault.core.tree.factory import create_work
from manuscript_vault.models.work import Work, WorkTemplate

NOW = datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)
LATER = datetime(2023, 11, 15, 9, 30, 0, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def standard_work() -> Work:
    """A standard-template work with text in content.md and outline.md."""
    work = create_work("The Long Winter", WorkTemplate.STANDARD, now=NOW)
    update_document(work, "content.md", "Chapter 1\nIt was cold.", now=NOW)
    update_document(work, "outline.md", "- arrival\n- storm", now=NOW)
    return work


@pytest.fixture
def db() -> Iterator[sqlite3.Connection]:
    """Return an in-memory DB with the vault schema."""
    conn = connect(":memory:")
    create_schema(conn)
    yield conn
    conn.close()
