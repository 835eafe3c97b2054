"""Whole-entity persistence of works in SQLite.

All field changes happen in memory on a loaded Work; `save_work` writes the
entire aggregate back in one transaction.
"""

import sqlite3
import uuid
from datetime import datetime

from loguru import logger

from manuscript_vault.models.work import (
    Document,
    DocumentKind,
    Node,
    NodeKind,
    Snapshot,
    SnapshotKind,
    Work,
)


def _ts(value: datetime) -> str:
    return value.isoformat()


def _parse_ts(value: str) -> datetime:
    return datetime.fromisoformat(value)


def _parse_id(value: str | None) -> uuid.UUID | None:
    return uuid.UUID(value) if value else None


def save_work(conn: sqlite3.Connection, work: Work) -> None:
    """Insert or replace a work with its nodes and documents.

    Snapshots are only ever inserted; existing snapshot rows are left as they are.
    """
    try:
        conn.execute(
            """INSERT INTO works (id, title, created_at, updated_at)
               VALUES (?, ?, ?, ?)
               ON CONFLICT(id) DO UPDATE SET
                   title = excluded.title,
                   updated_at = excluded.updated_at""",
            (str(work.id), work.title, _ts(work.created_at), _ts(work.updated_at)),
        )

        # Nodes cascade to documents
        conn.execute("DELETE FROM nodes WHERE work_id = ?", (str(work.id),))
        conn.executemany(
            """INSERT INTO nodes
               (id, work_id, parent_id, name, kind, position, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            [
                (
                    str(n.id), str(work.id),
                    str(n.parent_id) if n.parent_id else None,
                    n.name, n.kind.value, position,
                    _ts(n.created_at), _ts(n.updated_at),
                )
                for position, n in enumerate(work.nodes.values())
            ],
        )
        conn.executemany(
            """INSERT INTO documents
               (id, work_id, node_id, kind, text, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            [
                (
                    str(d.id), str(work.id), str(d.node_id), d.kind.value, d.text,
                    _ts(d.created_at), _ts(d.updated_at),
                )
                for d in work.documents.values()
            ],
        )
        conn.executemany(
            """INSERT OR IGNORE INTO snapshots
               (id, work_id, title, memo, created_at, device_name, kind, manifest_json)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            [
                (
                    str(s.id), str(work.id), s.title, s.memo, _ts(s.created_at),
                    s.device_name, s.kind.value, s.manifest_json,
                )
                for s in work.snapshots
            ],
        )
        conn.commit()
    except Exception:
        conn.rollback()
        logger.exception("Failed to save work {}", work.id)
        raise

    logger.debug(
        "Saved work {} ({} nodes, {} snapshots)", work.id, len(work.nodes), len(work.snapshots)
    )


def load_work(conn: sqlite3.Connection, work_id: uuid.UUID) -> Work | None:
    """Load a work aggregate, or None if there is no such work."""
    row = conn.execute(
        "SELECT id, title, created_at, updated_at FROM works WHERE id = ?",
        (str(work_id),),
    ).fetchone()
    if row is None:
        return None

    work = Work(
        id=uuid.UUID(row[0]),
        title=row[1],
        created_at=_parse_ts(row[2]),
        updated_at=_parse_ts(row[3]),
    )

    for r in conn.execute(
        "SELECT id, parent_id, name, kind, created_at, updated_at "
        "FROM nodes WHERE work_id = ? ORDER BY position",
        (str(work_id),),
    ):
        node = Node(
            id=uuid.UUID(r[0]), name=r[2], kind=NodeKind.from_stored(r[3]),
            created_at=_parse_ts(r[4]), updated_at=_parse_ts(r[5]),
            parent_id=_parse_id(r[1]),
        )
        work.nodes[node.id] = node

    for r in conn.execute(
        "SELECT id, node_id, kind, text, created_at, updated_at "
        "FROM documents WHERE work_id = ?",
        (str(work_id),),
    ):
        document = Document(
            id=uuid.UUID(r[0]), node_id=uuid.UUID(r[1]), kind=DocumentKind.from_stored(r[2]),
            text=r[3], created_at=_parse_ts(r[4]), updated_at=_parse_ts(r[5]),
        )
        work.documents[document.id] = document
        node = work.nodes.get(document.node_id)
        if node is not None:
            node.document_id = document.id

    work.snapshots = [
        Snapshot(
            id=uuid.UUID(r[0]), title=r[1], memo=r[2], created_at=_parse_ts(r[3]),
            device_name=r[4], kind=SnapshotKind.from_stored(r[5]), manifest_json=r[6],
        )
        for r in conn.execute(
            "SELECT id, title, memo, created_at, device_name, kind, manifest_json "
            "FROM snapshots WHERE work_id = ? ORDER BY created_at, rowid",
            (str(work_id),),
        )
    ]
    return work


def list_works(conn: sqlite3.Connection) -> list[Work]:
    """Load every work, most recently updated first."""
    ids = [
        uuid.UUID(r[0])
        for r in conn.execute("SELECT id FROM works ORDER BY updated_at DESC, title")
    ]
    works = [load_work(conn, work_id) for work_id in ids]
    return [w for w in works if w is not None]


def delete_work(conn: sqlite3.Connection, work_id: uuid.UUID) -> bool:
    """Delete a work and, by cascade, its nodes, documents and snapshots."""
    cur = conn.execute("DELETE FROM works WHERE id = ?", (str(work_id),))
    conn.commit()
    deleted = cur.rowcount > 0
    if deleted:
        logger.info("Deleted work {}", work_id)
    return deleted
