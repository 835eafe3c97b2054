"""Baseline text providers for change review."""

from loguru import logger

from manuscript_vault.core.snapshot.manifest import ManifestDecodeError, decode_manifest
from manuscript_vault.models.work import DocumentKind, Work


def canonical_file_name(file_name: str) -> str:
    """Return "<kind>.md" for names that parse as a document kind, else the name."""
    kind = DocumentKind.from_file_name(file_name)
    return kind.file_name if kind is not None else file_name


class EmptyBaseline:
    """No file has a baseline, so every line counts as added."""

    def baseline_for(self, file_name: str) -> str | None:
        return None


class SnapshotBaseline:
    """Baselines taken from a work's snapshots.

    Each file's baseline is its text in the most recent snapshot that
    contains it.
    """

    def __init__(self, work: Work) -> None:
        self._texts: dict[str, str] = {}
        # Newest first; among equal timestamps the later-added snapshot wins.
        for snapshot in reversed(sorted(work.snapshots, key=lambda s: s.created_at)):
            try:
                manifest = decode_manifest(snapshot.manifest_json)
            except ManifestDecodeError:
                logger.warning("Skipping unreadable manifest of snapshot {}", snapshot.id)
                continue
            for entry in manifest.files:
                self._texts.setdefault(canonical_file_name(entry.file_name), entry.text)

    def baseline_for(self, file_name: str) -> str | None:
        return self._texts.get(canonical_file_name(file_name))
