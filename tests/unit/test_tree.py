"""Tests for work creation, document lookup and updates."""

import uuid
from datetime import datetime, timedelta

from manuscript_vault.core.tree.documents import (
    find_document,
    find_work,
    find_work_document,
    update_document,
    update_work_document,
)
from manuscript_vault.core.tree.factory import add_file_node, add_folder_node, create_work
from manuscript_vault.models.work import DocumentKind, NodeKind, Work, WorkTemplate
from tests.unit.conftest import LATER, NOW


def test_standard_template_creates_five_files_and_snapshots_folder() -> None:
    work = create_work("Novel", WorkTemplate.STANDARD, now=NOW)

    files = [n for n in work.nodes.values() if n.kind is NodeKind.FILE]
    folders = [n for n in work.nodes.values() if n.kind is NodeKind.FOLDER]
    assert [n.name for n in files] == ["content", "outline", "plot", "characters", "info"]
    assert [n.name for n in folders] == ["snapshots"]
    assert folders[0].document_id is None
    assert {d.kind for d in work.documents.values()} == set(DocumentKind)
    assert all(d.text == "" for d in work.documents.values())


def test_template_timestamps_all_equal_now() -> None:
    work = create_work("Novel", now=NOW)

    assert work.created_at == work.updated_at == NOW
    assert all(n.created_at == n.updated_at == NOW for n in work.nodes.values())
    assert all(d.created_at == d.updated_at == NOW for d in work.documents.values())


def test_minimal_template_creates_only_content() -> None:
    work = create_work("Sketch", WorkTemplate.MINIMAL, now=NOW)

    assert len(work.nodes) == 1
    assert find_document(work, DocumentKind.CONTENT) is not None
    assert find_document(work, "outline.md") is None


def test_all_template_nodes_are_roots() -> None:
    work = create_work("Novel", now=NOW)
    assert len(work.root_nodes()) == 6


def test_document_links_back_to_its_node() -> None:
    work = create_work("Novel", now=NOW)
    document = find_document(work, "plot.md")

    assert document is not None
    node = work.nodes[document.node_id]
    assert work.document_of(node) is document


def test_nested_nodes_are_children_of_their_folder() -> None:
    work = create_work("Novel", WorkTemplate.MINIMAL, now=NOW)
    folder = add_folder_node(work, "drafts", now=NOW)
    child = add_file_node(work, DocumentKind.PLOT, now=NOW, parent_id=folder.id)

    assert work.children_of(folder.id) == [child]
    assert folder not in work.children_of(child.id)
    assert child not in work.root_nodes()


def test_find_document_by_kind_and_file_name(standard_work: Work) -> None:
    by_kind = find_document(standard_work, DocumentKind.CONTENT)
    by_name = find_document(standard_work, " CONTENT.md ")

    assert by_kind is not None
    assert by_kind is by_name
    assert by_kind.text == "Chapter 1\nIt was cold."


def test_find_document_unknown_file_name_returns_none(standard_work: Work) -> None:
    assert find_document(standard_work, "unknown.md") is None


def test_update_document_touches_document_node_and_work() -> None:
    work = create_work("Novel", now=NOW)

    assert update_document(work, "info.md", "genre: fantasy", now=LATER) is True

    document = find_document(work, DocumentKind.INFO)
    assert document is not None
    assert document.text == "genre: fantasy"
    assert document.updated_at == LATER
    assert work.nodes[document.node_id].updated_at == LATER
    assert work.updated_at == LATER
    assert work.created_at == NOW


def test_update_document_unknown_name_changes_nothing() -> None:
    work = create_work("Novel", now=NOW)

    assert update_document(work, "unknown.md", "text", now=LATER) is False
    assert work.updated_at == NOW
    assert all(d.text == "" for d in work.documents.values())


def test_update_document_missing_kind_in_minimal_work() -> None:
    work = create_work("Sketch", WorkTemplate.MINIMAL, now=NOW)
    assert update_document(work, DocumentKind.OUTLINE, "text", now=LATER) is False
    assert work.updated_at == NOW


def _same_titled_works() -> tuple[Work, Work]:
    return create_work("X", now=NOW), create_work("X", now=NOW)


def test_update_without_work_id_touches_no_work() -> None:
    w1, w2 = _same_titled_works()

    assert update_work_document([w1, w2], None, "content.md", "text", now=LATER) is False

    for work in (w1, w2):
        assert work.updated_at == NOW
        document = find_document(work, "content.md")
        assert document is not None
        assert document.text == ""


def test_update_with_work_id_touches_only_that_work() -> None:
    w1, w2 = _same_titled_works()

    assert update_work_document([w1, w2], w2.id, "content.md", "second", now=LATER) is True

    doc1 = find_document(w1, "content.md")
    doc2 = find_document(w2, "content.md")
    assert doc1 is not None and doc1.text == ""
    assert doc2 is not None and doc2.text == "second"
    assert w1.updated_at == NOW
    assert w2.updated_at == LATER


def test_update_with_unknown_work_id_fails() -> None:
    w1, w2 = _same_titled_works()
    assert update_work_document([w1, w2], uuid.uuid4(), "content.md", "t", now=LATER) is False


def test_find_work_and_document_by_id() -> None:
    w1, w2 = _same_titled_works()

    assert find_work([w1, w2], w2.id) is w2
    assert find_work([w1, w2], None) is None
    assert find_work_document([w1, w2], None, "content.md") is None
    assert find_work_document([w1, w2], w1.id, "content.md") is find_document(w1, "content.md")


def test_updated_at_never_precedes_created_at() -> None:
    work = create_work("Novel", now=NOW)
    stamps: list[datetime] = [NOW, LATER, NOW - timedelta(hours=1)]
    for stamp in stamps:
        update_document(work, "content.md", stamp.isoformat(), now=stamp)
        assert work.updated_at >= work.created_at


def test_earlier_clock_does_not_move_timestamps_back() -> None:
    work = create_work("Novel", now=NOW)
    document = find_document(work, "content.md")
    assert document is not None

    update_document(work, "content.md", "first", now=LATER)
    assert update_document(work, "content.md", "second", now=NOW - timedelta(days=1)) is True

    assert document.text == "second"
    assert document.updated_at == LATER
    assert work.nodes[document.node_id].updated_at == LATER
    assert work.updated_at == LATER
