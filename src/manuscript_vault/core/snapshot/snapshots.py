"""Turn staged selections into snapshot entities."""

import uuid
from collections.abc import Iterable
from datetime import datetime

from loguru import logger

from manuscript_vault.config import DEFAULT_DEVICE_NAME
from manuscript_vault.core.snapshot.manifest import (
    build_manifest,
    decode_manifest,
    encode_manifest,
)
from manuscript_vault.models.review import SnapshotManifest
from manuscript_vault.models.work import Snapshot, SnapshotKind, Work


def create_snapshot(
    work: Work,
    selected_file_names: Iterable[str],
    *,
    title: str,
    now: datetime,
    memo: str = "",
    device_name: str = DEFAULT_DEVICE_NAME,
    kind: SnapshotKind = SnapshotKind.MANUAL,
) -> Snapshot:
    """Build a manifest for the selection and attach a new snapshot to the work.

    Build errors propagate and leave the work untouched.
    """
    manifest = build_manifest(work, selected_file_names, created_at=now)
    snapshot = Snapshot(
        id=uuid.uuid4(),
        title=title,
        created_at=now,
        manifest_json=encode_manifest(manifest),
        memo=memo,
        device_name=device_name,
        kind=kind,
    )
    work.snapshots.append(snapshot)
    logger.info(
        "Snapshot {!r} of work {} with {} file(s)", title, work.id, len(manifest.files)
    )
    return snapshot


def snapshot_manifest(snapshot: Snapshot) -> SnapshotManifest:
    return decode_manifest(snapshot.manifest_json)


def latest_snapshot(work: Work) -> Snapshot | None:
    if not work.snapshots:
        return None
    return max(reversed(work.snapshots), key=lambda s: s.created_at)


def find_snapshot(work: Work, snapshot_id: uuid.UUID) -> Snapshot | None:
    return next((s for s in work.snapshots if s.id == snapshot_id), None)
