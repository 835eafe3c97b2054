"""Async gates around identity verification and account status checks.

Only the most recent request may change state; results of superseded
requests are discarded.
"""

import asyncio

from loguru import logger

from manuscript_vault.config import (
    ACCOUNT_STATUS_TIMEOUT_SECONDS,
    VERIFICATION_TIMEOUT_SECONDS,
)
from manuscript_vault.navigation.entry import EntryScreen, Verification, decide_entry_screen
from manuscript_vault.navigation.icloud_gate import (
    AccountStatus,
    HomeDestination,
    StatusRowState,
    SyncState,
    decide_destination,
    decide_status_row,
    decide_sync_state,
)
from manuscript_vault.navigation.session import (
    SessionState,
    VerificationTaskKey,
    verification_task_key,
)
from manuscript_vault.protocols import AccountStatusProtocol, VerifierProtocol


class VerificationGate:
    """Tracks the stored identity and the verification of the latest request."""

    def __init__(
        self,
        verifier: VerifierProtocol,
        *,
        timeout: float = VERIFICATION_TIMEOUT_SECONDS,
    ) -> None:
        self._verifier = verifier
        self._timeout = timeout
        self._key: VerificationTaskKey | None = None
        self._token = 0
        self._task: asyncio.Task[None] | None = None
        self.user_id: str | None = None
        self.verification = Verification.UNKNOWN

    @property
    def entry_screen(self) -> EntryScreen:
        return decide_entry_screen(self.user_id, self.verification)

    def follow_session(self, state: SessionState) -> None:
        """Re-key the gate from the current sign-in session."""
        self.set_user(verification_task_key(state))

    def set_user(self, key: VerificationTaskKey) -> None:
        """Start verifying the key's user, superseding any verification in flight.

        Calling again with an equal key does nothing. Must be called from a
        running event loop.
        """
        if key == self._key:
            return
        self._key = key
        user_id = key.stored_user_id or None
        self.user_id = user_id

        if self._task is not None:
            self._task.cancel()
            self._task = None
        self._token += 1
        self.verification = Verification.UNKNOWN

        if user_id is None:
            return
        self._task = asyncio.create_task(self._verify(user_id, self._token))

    async def _verify(self, user_id: str, token: int) -> None:
        try:
            result = await asyncio.wait_for(self._verifier.verify(user_id), self._timeout)
        except TimeoutError:
            logger.warning("Verification of {!r} timed out", user_id)
            result = Verification.UNAUTHORIZED
        except Exception:
            logger.warning("Verification of {!r} failed", user_id, exc_info=True)
            result = Verification.UNAUTHORIZED

        if token != self._token:
            logger.debug("Discarding stale verification result for {!r}", user_id)
            return
        self.verification = result

    async def wait(self) -> None:
        """Wait until the latest verification request has finished."""
        if self._task is not None:
            await asyncio.wait({self._task})


class AccountStatusMonitor:
    """Tracks the cloud account status reported by the latest check."""

    def __init__(
        self,
        provider: AccountStatusProtocol,
        *,
        timeout: float = ACCOUNT_STATUS_TIMEOUT_SECONDS,
    ) -> None:
        self._provider = provider
        self._timeout = timeout
        self._request_counter = 0
        self.sync_state = SyncState.LOCAL_ONLY_BANNER
        self.is_checking = False

    @property
    def destination(self) -> HomeDestination:
        return decide_destination(self.sync_state)

    @property
    def status_row(self) -> StatusRowState:
        return decide_status_row(self.sync_state, is_checking=self.is_checking)

    async def refresh(self) -> SyncState | None:
        """Check the account status.

        Returns the applied sync state, or None if a newer check started
        while this one was in flight.
        """
        self._request_counter += 1
        tag = self._request_counter
        self.is_checking = True

        try:
            try:
                status = await asyncio.wait_for(self._provider.current_status(), self._timeout)
            except TimeoutError:
                logger.warning("Account status check timed out")
                status = AccountStatus.CAN_NOT_DETERMINE
            except Exception:
                logger.warning("Account status check failed", exc_info=True)
                status = AccountStatus.CAN_NOT_DETERMINE

            if tag != self._request_counter:
                logger.debug("Discarding stale account status {} (request {})", status, tag)
                return None

            self.sync_state = decide_sync_state(status)
            return self.sync_state
        finally:
            # Only the latest request may end the checking state, also when cancelled.
            if tag == self._request_counter:
                self.is_checking = False
