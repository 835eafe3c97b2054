"""Create works from templates and grow their node trees."""

import uuid
from datetime import datetime

from manuscript_vault.models.work import (
    Document,
    DocumentKind,
    Node,
    NodeKind,
    Work,
    WorkTemplate,
)

SNAPSHOTS_FOLDER_NAME = "snapshots"

_STANDARD_FILES: tuple[DocumentKind, ...] = (
    DocumentKind.CONTENT,
    DocumentKind.OUTLINE,
    DocumentKind.PLOT,
    DocumentKind.CHARACTERS,
    DocumentKind.INFO,
)


def add_file_node(
    work: Work,
    kind: DocumentKind,
    *,
    now: datetime,
    text: str = "",
    parent_id: uuid.UUID | None = None,
) -> Node:
    """Add a file node carrying a new document of the given kind."""
    node = Node(
        id=uuid.uuid4(),
        name=kind.value,
        kind=NodeKind.FILE,
        created_at=now,
        updated_at=now,
        parent_id=parent_id,
    )
    document = Document(
        id=uuid.uuid4(),
        node_id=node.id,
        kind=kind,
        text=text,
        created_at=now,
        updated_at=now,
    )
    node.document_id = document.id
    work.nodes[node.id] = node
    work.documents[document.id] = document
    return node


def add_folder_node(
    work: Work,
    name: str,
    *,
    now: datetime,
    parent_id: uuid.UUID | None = None,
) -> Node:
    node = Node(
        id=uuid.uuid4(),
        name=name,
        kind=NodeKind.FOLDER,
        created_at=now,
        updated_at=now,
        parent_id=parent_id,
    )
    work.nodes[node.id] = node
    return node


def create_work(
    title: str,
    template: WorkTemplate = WorkTemplate.STANDARD,
    *,
    now: datetime,
) -> Work:
    """Build a new work and its template nodes, all stamped with `now`.

    The standard template has one file per document kind plus an empty
    snapshots folder. The minimal template has only the content file.
    """
    work = Work(id=uuid.uuid4(), title=title, created_at=now, updated_at=now)

    if template is WorkTemplate.STANDARD:
        for kind in _STANDARD_FILES:
            add_file_node(work, kind, now=now)
        add_folder_node(work, SNAPSHOTS_FOLDER_NAME, now=now)
    elif template is WorkTemplate.MINIMAL:
        add_file_node(work, DocumentKind.CONTENT, now=now)
    else:
        msg = f"Unknown work template: {template!r}"
        raise ValueError(msg)

    return work
