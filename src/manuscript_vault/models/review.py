"""Value types produced by diffing, change review and snapshot staging."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class DiffLineKind(StrEnum):
    ADDED = "added"
    REMOVED = "removed"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class DiffLine:
    """One line of comparison output."""

    kind: DiffLineKind
    text: str


@dataclass(frozen=True)
class FileChangeSummary:
    """Per-file change counts and the diff they were tallied from."""

    file_name: str
    added_line_count: int
    removed_line_count: int
    lines: tuple[DiffLine, ...] = ()

    @property
    def has_changes(self) -> bool:
        return self.added_line_count + self.removed_line_count > 0


@dataclass(frozen=True)
class SnapshotManifestFile:
    file_name: str
    text: str


@dataclass(frozen=True)
class SnapshotManifest:
    """Serialized payload of a snapshot: version, timestamp and sorted files."""

    version: int
    created_at: datetime
    files: tuple[SnapshotManifestFile, ...]
