"""Build, encode and decode snapshot manifests."""

import json
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from loguru import logger

from manuscript_vault.config import MANIFEST_VERSION
from manuscript_vault.core.tree.documents import find_document
from manuscript_vault.models.review import SnapshotManifest, SnapshotManifestFile
from manuscript_vault.models.work import Work


class SnapshotManifestBuildError(ValueError):
    """A manifest could not be built from the requested selection."""


class EmptySelectionError(SnapshotManifestBuildError):
    def __init__(self) -> None:
        super().__init__("No files selected for the snapshot")


class UnresolvedFileNamesError(SnapshotManifestBuildError):
    """Some selected file names do not resolve to a document."""

    def __init__(self, file_names: list[str]) -> None:
        self.file_names = file_names
        super().__init__(f"Unresolved file names: {', '.join(file_names)}")


class ManifestDecodeError(ValueError):
    """A stored manifest payload is malformed or has an unsupported version."""


def build_manifest(
    work: Work,
    selected_file_names: Iterable[str],
    *,
    created_at: datetime,
) -> SnapshotManifest:
    """Resolve each selected file name to its current text.

    Names are processed in sorted order. Either every name resolves and a
    manifest is returned, or UnresolvedFileNamesError lists all the misses.

    Raises:
        EmptySelectionError: Nothing was selected.
        UnresolvedFileNamesError: At least one name has no document.
    """
    names = sorted(set(selected_file_names))
    if not names:
        raise EmptySelectionError

    files: list[SnapshotManifestFile] = []
    unresolved: list[str] = []
    for file_name in names:
        document = find_document(work, file_name)
        if document is None:
            unresolved.append(file_name)
            continue
        files.append(SnapshotManifestFile(file_name=file_name, text=document.text))

    if unresolved:
        logger.warning("Cannot build manifest for work {}: unresolved {}", work.id, unresolved)
        raise UnresolvedFileNamesError(unresolved)

    return SnapshotManifest(version=MANIFEST_VERSION, created_at=created_at, files=tuple(files))


def encode_manifest(manifest: SnapshotManifest) -> str:
    """Serialize a manifest as JSON with sorted keys and an ISO-8601 timestamp."""
    data = {
        "version": manifest.version,
        "created_at": manifest.created_at.isoformat(),
        "files": [{"file_name": f.file_name, "text": f.text} for f in manifest.files],
    }
    return json.dumps(data, sort_keys=True, indent=4, ensure_ascii=False)


def _require(data: dict[str, Any], key: str, expected: type) -> Any:
    value = data.get(key)
    if not isinstance(value, expected) or isinstance(value, bool):
        msg = f"Manifest field {key!r} must be {expected.__name__}, got {value!r}"
        raise ManifestDecodeError(msg)
    return value


def decode_manifest(payload: str) -> SnapshotManifest:
    """Parse a payload produced by encode_manifest.

    Raises:
        ManifestDecodeError: The payload is not a supported manifest.
    """
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        msg = f"Manifest is not valid JSON: {e}"
        raise ManifestDecodeError(msg) from e
    if not isinstance(data, dict):
        msg = "Manifest must be a JSON object"
        raise ManifestDecodeError(msg)

    version = _require(data, "version", int)
    if version > MANIFEST_VERSION or version < 1:
        msg = f"Unsupported manifest version: {version}"
        raise ManifestDecodeError(msg)

    created_raw = _require(data, "created_at", str)
    try:
        created_at = datetime.fromisoformat(created_raw)
    except ValueError as e:
        msg = f"Invalid manifest timestamp: {created_raw!r}"
        raise ManifestDecodeError(msg) from e

    files: list[SnapshotManifestFile] = []
    for entry in _require(data, "files", list):
        if not isinstance(entry, dict):
            msg = f"Manifest file entry must be an object, got {entry!r}"
            raise ManifestDecodeError(msg)
        files.append(
            SnapshotManifestFile(
                file_name=_require(entry, "file_name", str),
                text=_require(entry, "text", str),
            )
        )

    return SnapshotManifest(version=version, created_at=created_at, files=tuple(files))
