"""Protocols for the collaborators the engine depends on."""

from typing import Protocol, runtime_checkable

from manuscript_vault.navigation.entry import Verification
from manuscript_vault.navigation.icloud_gate import AccountStatus


@runtime_checkable
class BaselineProtocol(Protocol):
    """Source of the "previous" text each file is diffed against."""

    def baseline_for(self, file_name: str) -> str | None:
        """Return the baseline text for a file, or None when there is none."""
        ...


@runtime_checkable
class VerifierProtocol(Protocol):
    """Checks whether a stored user identity is still authorized."""

    async def verify(self, user_id: str) -> Verification:
        """Return AUTHORIZED or UNAUTHORIZED for the given user id."""
        ...


@runtime_checkable
class AccountStatusProtocol(Protocol):
    """Reports the availability of the cloud account."""

    async def current_status(self) -> AccountStatus:
        """Return the current account status."""
        ...
