"""Tests for snapshot creation."""

import uuid

import pytest

from manuscript_vault.core.snapshot.manifest import UnresolvedFileNamesError
from manuscript_vault.core.snapshot.snapshots import (
    create_snapshot,
    find_snapshot,
    latest_snapshot,
    snapshot_manifest,
)
from manuscript_vault.core.tree.documents import update_document
from manuscript_vault.models.work import SnapshotKind, Work
from tests.unit.conftest import LATER, NOW


def test_create_snapshot_attaches_encoded_manifest(standard_work: Work) -> None:
    snap = create_snapshot(
        standard_work,
        ["content.md"],
        title="first draft",
        memo="before rewrite",
        device_name="desk",
        now=NOW,
    )

    assert standard_work.snapshots == [snap]
    assert snap.kind is SnapshotKind.MANUAL
    assert snap.device_name == "desk"
    manifest = snapshot_manifest(snap)
    assert manifest.created_at == NOW
    assert [f.text for f in manifest.files] == ["Chapter 1\nIt was cold."]


def test_snapshot_keeps_text_at_creation_time(standard_work: Work) -> None:
    snap = create_snapshot(standard_work, ["content.md"], title="v1", now=NOW)
    update_document(standard_work, "content.md", "rewritten", now=LATER)

    assert snapshot_manifest(snap).files[0].text == "Chapter 1\nIt was cold."


def test_failed_build_creates_no_snapshot(standard_work: Work) -> None:
    with pytest.raises(UnresolvedFileNamesError):
        create_snapshot(standard_work, ["content.md", "unknown.md"], title="bad", now=NOW)

    assert standard_work.snapshots == []


def test_latest_and_find_snapshot(standard_work: Work) -> None:
    assert latest_snapshot(standard_work) is None

    late = create_snapshot(standard_work, ["outline.md"], title="late", now=LATER)
    early = create_snapshot(standard_work, ["content.md"], title="early", now=NOW)

    assert latest_snapshot(standard_work) is late
    assert find_snapshot(standard_work, early.id) is early
    assert find_snapshot(standard_work, uuid.uuid4()) is None


def test_latest_snapshot_on_equal_timestamps_is_the_later_added(standard_work: Work) -> None:
    create_snapshot(standard_work, ["content.md"], title="first", now=NOW)
    second = create_snapshot(standard_work, ["content.md"], title="second", now=NOW)

    assert latest_snapshot(standard_work) is second
