"""Fake collaborators for testing the async gates."""

import asyncio

from manuscript_vault.navigation.entry import Verification
from manuscript_vault.navigation.icloud_gate import AccountStatus


class ControlledVerifier:
    """Verifier whose answers are released by the test.

    Each verify() call parks on a future until resolve() is called.
    """

    def __init__(self) -> None:
        self.calls: list[str] = []
        self._pending: list[asyncio.Future[Verification]] = []

    async def verify(self, user_id: str) -> Verification:
        self.calls.append(user_id)
        future: asyncio.Future[Verification] = asyncio.get_running_loop().create_future()
        self._pending.append(future)
        return await future

    def resolve(self, result: Verification, *, index: int = -1) -> None:
        future = self._pending[index]
        if not future.done():
            future.set_result(result)

    def is_cancelled(self, index: int) -> bool:
        return self._pending[index].cancelled()


class FailingVerifier:
    async def verify(self, user_id: str) -> Verification:
        msg = "credential service unavailable"
        raise RuntimeError(msg)


class ControlledAccountStatusProvider:
    """Account status provider whose answers are released by the test."""

    def __init__(self) -> None:
        self._pending: list[asyncio.Future[AccountStatus]] = []

    @property
    def call_count(self) -> int:
        return len(self._pending)

    async def current_status(self) -> AccountStatus:
        future: asyncio.Future[AccountStatus] = asyncio.get_running_loop().create_future()
        self._pending.append(future)
        return await future

    def resolve(self, status: AccountStatus, *, index: int = -1) -> None:
        self._pending[index].set_result(status)


class FailingAccountStatusProvider:
    async def current_status(self) -> AccountStatus:
        msg = "account service unavailable"
        raise RuntimeError(msg)


class FixedBaseline:
    """Baseline provider backed by a plain dict."""

    def __init__(self, texts: dict[str, str]) -> None:
        self.texts = texts

    def baseline_for(self, file_name: str) -> str | None:
        return self.texts.get(file_name)


async def settle() -> None:
    """Give scheduled tasks a few loop iterations to run."""
    for _ in range(5):
        await asyncio.sleep(0)
