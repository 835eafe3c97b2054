"""Map the cloud account status to sync state, destination and status row."""

from enum import StrEnum


class AccountStatus(StrEnum):
    AVAILABLE = "available"
    NO_ACCOUNT = "no_account"
    RESTRICTED = "restricted"
    CAN_NOT_DETERMINE = "can_not_determine"
    TEMPORARILY_UNAVAILABLE = "temporarily_unavailable"


class SyncState(StrEnum):
    SYNC_ENABLED = "sync_enabled"
    REQUIRES_ICLOUD_SIGN_IN = "requires_icloud_sign_in"
    LOCAL_ONLY_BANNER = "local_only_banner"


class HomeDestination(StrEnum):
    HOME = "home"
    BLOCKED_BY_ICLOUD_SIGN_IN = "blocked_by_icloud_sign_in"


class StatusRowState(StrEnum):
    HIDDEN = "hidden"
    CHECKING = "checking"
    LOCAL_ONLY = "local_only"


def decide_sync_state(status: AccountStatus) -> SyncState:
    if status is AccountStatus.AVAILABLE:
        return SyncState.SYNC_ENABLED
    if status is AccountStatus.NO_ACCOUNT:
        return SyncState.REQUIRES_ICLOUD_SIGN_IN
    return SyncState.LOCAL_ONLY_BANNER


def decide_destination(sync_state: SyncState) -> HomeDestination:
    if sync_state is SyncState.REQUIRES_ICLOUD_SIGN_IN:
        return HomeDestination.BLOCKED_BY_ICLOUD_SIGN_IN
    return HomeDestination.HOME


def decide_status_row(sync_state: SyncState, *, is_checking: bool) -> StatusRowState:
    """A check in flight always shows the checking row."""
    if is_checking:
        return StatusRowState.CHECKING
    if sync_state is SyncState.LOCAL_ONLY_BANNER:
        return StatusRowState.LOCAL_ONLY
    return StatusRowState.HIDDEN
