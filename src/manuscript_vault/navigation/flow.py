"""Screen flow between the work list, the editor and the history view."""

import uuid
from dataclasses import dataclass, field
from enum import StrEnum


class EditorPanel(StrEnum):
    EXPLORER = "explorer"
    BRANCH = "branch"
    GRAPH = "graph"
    CHANGES = "changes"

    @property
    def display_title(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class ListRoute:
    pass


@dataclass(frozen=True)
class EditorRoute:
    work_id: uuid.UUID | None
    file_name: str


@dataclass(frozen=True)
class HistoryRoute:
    work_id: uuid.UUID | None
    file_name: str


Route = ListRoute | EditorRoute | HistoryRoute


@dataclass(frozen=True)
class FlowState:
    route: Route = field(default_factory=ListRoute)
    active_panel: EditorPanel | None = None


@dataclass(frozen=True)
class OpenEditor:
    work_id: uuid.UUID | None
    file_name: str


@dataclass(frozen=True)
class BackToList:
    pass


@dataclass(frozen=True)
class OpenHistory:
    pass


@dataclass(frozen=True)
class BackToEditor:
    pass


@dataclass(frozen=True)
class TogglePanel:
    panel: EditorPanel


@dataclass(frozen=True)
class ClosePanel:
    pass


FlowAction = OpenEditor | BackToList | OpenHistory | BackToEditor | TogglePanel | ClosePanel


def reduce_flow(state: FlowState, action: FlowAction) -> FlowState:
    """Apply a navigation action. Actions invalid for the current route are no-ops."""
    if isinstance(action, OpenEditor):
        return FlowState(route=EditorRoute(action.work_id, action.file_name))

    if isinstance(action, BackToList):
        return FlowState(route=ListRoute())

    if isinstance(action, OpenHistory):
        if not isinstance(state.route, EditorRoute):
            return state
        return FlowState(route=HistoryRoute(state.route.work_id, state.route.file_name))

    if isinstance(action, BackToEditor):
        if not isinstance(state.route, HistoryRoute):
            return state
        return FlowState(route=EditorRoute(state.route.work_id, state.route.file_name))

    if isinstance(action, TogglePanel):
        if not isinstance(state.route, EditorRoute):
            return state
        panel = None if state.active_panel is action.panel else action.panel
        return FlowState(route=state.route, active_panel=panel)

    if isinstance(action, ClosePanel):
        if state.active_panel is None:
            return state
        return FlowState(route=state.route)

    msg = f"Unknown flow action: {action!r}"
    raise TypeError(msg)
