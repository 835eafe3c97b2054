"""Version and change-review engine for hierarchical writing projects."""

from manuscript_vault.core.diff.lines import diff_lines
from manuscript_vault.core.review.selection import ChangeSelectionState, make_selection_state
from manuscript_vault.core.review.summary import build_summaries
from manuscript_vault.core.snapshot.manifest import build_manifest, decode_manifest, encode_manifest
from manuscript_vault.core.tree.factory import create_work
from manuscript_vault.models.work import Document, DocumentKind, Node, Snapshot, Work

__all__ = [
    "ChangeSelectionState",
    "Document",
    "DocumentKind",
    "Node",
    "Snapshot",
    "Work",
    "build_manifest",
    "build_summaries",
    "create_work",
    "decode_manifest",
    "diff_lines",
    "encode_manifest",
    "make_selection_state",
]
