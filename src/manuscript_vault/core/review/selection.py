"""Selection of changed files for staging into a snapshot.

State is immutable; `reduce_selection` returns a new state per action.
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace

from manuscript_vault.models.review import FileChangeSummary


@dataclass(frozen=True)
class SelectAll:
    pass


@dataclass(frozen=True)
class ClearAll:
    pass


@dataclass(frozen=True)
class ToggleFileSelection:
    file_name: str


@dataclass(frozen=True)
class OpenDiff:
    file_name: str


@dataclass(frozen=True)
class CloseDiff:
    pass


SelectionAction = SelectAll | ClearAll | ToggleFileSelection | OpenDiff | CloseDiff


@dataclass(frozen=True)
class ChangeSelectionState:
    """Changed files, the names selected for staging, and the file under inspection."""

    files: tuple[FileChangeSummary, ...]
    selected: frozenset[str]
    diff_target: str | None = None

    @property
    def selectable(self) -> frozenset[str]:
        return frozenset(f.file_name for f in self.files if f.has_changes)

    @property
    def can_save_selection(self) -> bool:
        return bool(self.selected & self.selectable)

    @property
    def diff_file(self) -> FileChangeSummary | None:
        if self.diff_target is None:
            return None
        return next((f for f in self.files if f.file_name == self.diff_target), None)

    def selected_in_order(self) -> list[str]:
        return [f.file_name for f in self.files if f.file_name in self.selected]


def make_selection_state(
    summaries: Iterable[FileChangeSummary],
    initial_selection: Iterable[str] | None = None,
) -> ChangeSelectionState:
    """Keep only changed files and select them all, or the still-valid part of
    `initial_selection` when one is given."""
    files = tuple(s for s in summaries if s.has_changes)
    selectable = frozenset(f.file_name for f in files)
    if initial_selection is None:
        selected = selectable
    else:
        selected = frozenset(initial_selection) & selectable
    return ChangeSelectionState(files=files, selected=selected)


def reduce_selection(
    state: ChangeSelectionState, action: SelectionAction
) -> ChangeSelectionState:
    if isinstance(action, SelectAll):
        return replace(state, selected=state.selectable)

    if isinstance(action, ClearAll):
        return replace(state, selected=frozenset())

    if isinstance(action, ToggleFileSelection):
        if action.file_name not in state.selectable:
            return state
        return replace(state, selected=state.selected ^ {action.file_name})

    if isinstance(action, OpenDiff):
        if not any(f.file_name == action.file_name for f in state.files):
            return state
        return replace(state, diff_target=action.file_name)

    if isinstance(action, CloseDiff):
        return replace(state, diff_target=None)

    msg = f"Unknown selection action: {action!r}"
    raise TypeError(msg)
