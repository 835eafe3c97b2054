"""Document lookup and in-memory edits on a work's node tree."""

import uuid
from collections.abc import Iterable
from datetime import datetime

from loguru import logger

from manuscript_vault.models.work import Document, DocumentKind, Work


def _resolve_kind(kind_or_file_name: DocumentKind | str) -> DocumentKind | None:
    if isinstance(kind_or_file_name, DocumentKind):
        return kind_or_file_name
    return DocumentKind.from_file_name(kind_or_file_name)


def find_document(work: Work, kind_or_file_name: DocumentKind | str) -> Document | None:
    """Return the first document of the given kind (or file name) in the work.

    File names are parsed case-insensitively, with or without ".md".
    Unknown names never match.
    """
    kind = _resolve_kind(kind_or_file_name)
    if kind is None:
        return None
    for node in work.nodes.values():
        document = work.document_of(node)
        if document is not None and document.kind is kind:
            return document
    return None


def update_document(
    work: Work,
    kind_or_file_name: DocumentKind | str,
    text: str,
    *,
    now: datetime,
) -> bool:
    """Replace a document's text, stamping document, node and work with `now`.

    Returns False and changes nothing when no document matches.
    """
    document = find_document(work, kind_or_file_name)
    if document is None:
        logger.debug("No document {!r} in work {}", str(kind_or_file_name), work.id)
        return False

    # Timestamps never move backwards, even for an earlier `now`.
    document.text = text
    document.updated_at = max(document.updated_at, now)
    node = work.nodes.get(document.node_id)
    if node is not None:
        node.updated_at = max(node.updated_at, now)
    work.updated_at = max(work.updated_at, now)
    return True


def find_work(works: Iterable[Work], work_id: uuid.UUID | None) -> Work | None:
    """Find a work by identity. A missing id never matches."""
    if work_id is None:
        return None
    return next((w for w in works if w.id == work_id), None)


def find_work_document(
    works: Iterable[Work], work_id: uuid.UUID | None, file_name: str
) -> Document | None:
    work = find_work(works, work_id)
    if work is None:
        return None
    return find_document(work, file_name)


def update_work_document(
    works: Iterable[Work],
    work_id: uuid.UUID | None,
    file_name: str,
    text: str,
    *,
    now: datetime,
) -> bool:
    """Update a document in the work with the given id.

    Works are matched by id only, so a missing id updates nothing even
    when titles coincide.
    """
    work = find_work(works, work_id)
    if work is None:
        return False
    return update_document(work, file_name, text, now=now)
