"""Domain models for works, their node trees, documents and snapshots.

A Work owns its nodes and documents in flat dictionaries keyed by id.
Parent and document links are stored as ids and only used for lookup.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


class WorkTemplate(StrEnum):
    STANDARD = "standard"
    MINIMAL = "minimal"


class NodeKind(StrEnum):
    FILE = "file"
    FOLDER = "folder"

    @classmethod
    def from_stored(cls, raw: str) -> "NodeKind":
        """Parse a stored raw value, defaulting to FILE."""
        try:
            return cls(raw)
        except ValueError:
            return cls.FILE


class DocumentKind(StrEnum):
    CONTENT = "content"
    OUTLINE = "outline"
    PLOT = "plot"
    CHARACTERS = "characters"
    INFO = "info"

    @property
    def file_name(self) -> str:
        return f"{self.value}.md"

    @classmethod
    def from_file_name(cls, file_name: str) -> "DocumentKind | None":
        """Map "content", "Content.md", " plot.md " etc. back to a kind.

        Returns None for anything that is not a known kind.
        """
        normalized = file_name.strip().lower()
        normalized = normalized.removesuffix(".md")
        for kind in cls:
            if kind.value == normalized:
                return kind
        return None

    @classmethod
    def from_stored(cls, raw: str) -> "DocumentKind":
        """Parse a stored raw value, defaulting to CONTENT."""
        try:
            return cls(raw)
        except ValueError:
            return cls.CONTENT


class SnapshotKind(StrEnum):
    MANUAL = "manual"
    CONFLICT = "conflict"

    @classmethod
    def from_stored(cls, raw: str) -> "SnapshotKind":
        """Parse a stored raw value, defaulting to MANUAL."""
        try:
            return cls(raw)
        except ValueError:
            return cls.MANUAL


@dataclass
class Document:
    """Text content attached to a file node."""

    id: uuid.UUID
    node_id: uuid.UUID
    kind: DocumentKind
    text: str
    created_at: datetime
    updated_at: datetime


@dataclass
class Node:
    """A named entry in a work's tree, either a file or a folder."""

    id: uuid.UUID
    name: str
    kind: NodeKind
    created_at: datetime
    updated_at: datetime
    parent_id: uuid.UUID | None = None
    document_id: uuid.UUID | None = None


@dataclass(frozen=True)
class Snapshot:
    """An immutable record of selected files' text at a point in time."""

    id: uuid.UUID
    title: str
    created_at: datetime
    manifest_json: str
    memo: str = ""
    device_name: str = ""
    kind: SnapshotKind = SnapshotKind.MANUAL


@dataclass
class Work:
    """A writing project: the root aggregate owning nodes, documents and snapshots."""

    id: uuid.UUID
    title: str
    created_at: datetime
    updated_at: datetime
    nodes: dict[uuid.UUID, Node] = field(default_factory=dict)
    documents: dict[uuid.UUID, Document] = field(default_factory=dict)
    snapshots: list[Snapshot] = field(default_factory=list)

    def root_nodes(self) -> list[Node]:
        return [n for n in self.nodes.values() if n.parent_id is None]

    def children_of(self, node_id: uuid.UUID) -> list[Node]:
        return [n for n in self.nodes.values() if n.parent_id == node_id]

    def document_of(self, node: Node) -> Document | None:
        if node.document_id is None:
            return None
        return self.documents.get(node.document_id)
