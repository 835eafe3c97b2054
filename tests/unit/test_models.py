"""Tests for domain models."""

import uuid
from datetime import datetime

import pytest

from manuscript_vault.models.work import DocumentKind, NodeKind, Snapshot, SnapshotKind


@pytest.mark.parametrize("kind", list(DocumentKind))
def test_file_name_maps_back_to_kind(kind: DocumentKind) -> None:
    assert DocumentKind.from_file_name(kind.file_name) is kind


@pytest.mark.parametrize(
    ("file_name", "expected"),
    [
        ("content", DocumentKind.CONTENT),
        ("Content.MD", DocumentKind.CONTENT),
        ("  plot.md \n", DocumentKind.PLOT),
        ("CHARACTERS", DocumentKind.CHARACTERS),
    ],
)
def test_file_name_parsing_is_lenient(file_name: str, expected: DocumentKind) -> None:
    assert DocumentKind.from_file_name(file_name) is expected


@pytest.mark.parametrize("file_name", ["unknown.md", "content.txt", "", "notes", "content.md.md"])
def test_unknown_file_names_are_rejected(file_name: str) -> None:
    assert DocumentKind.from_file_name(file_name) is None


def test_stored_raw_values_fall_back_to_defaults() -> None:
    assert NodeKind.from_stored("symlink") is NodeKind.FILE
    assert DocumentKind.from_stored("notes") is DocumentKind.CONTENT
    assert SnapshotKind.from_stored("") is SnapshotKind.MANUAL
    assert SnapshotKind.from_stored("conflict") is SnapshotKind.CONFLICT


def test_snapshot_is_frozen() -> None:
    snap = Snapshot(
        id=uuid.uuid4(), title="draft", created_at=datetime(2024, 1, 1), manifest_json="{}"
    )
    with pytest.raises(AttributeError):
        snap.title = "changed"  # type: ignore[misc]
