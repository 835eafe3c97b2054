"""Decide which entry screen to show for the stored identity."""

from enum import StrEnum


class EntryScreen(StrEnum):
    SIGN_IN = "sign_in"
    VERIFYING = "verifying"
    HOME = "home"


class Verification(StrEnum):
    UNKNOWN = "unknown"
    AUTHORIZED = "authorized"
    UNAUTHORIZED = "unauthorized"


def decide_entry_screen(user_id: str | None, verification: Verification) -> EntryScreen:
    """Home is reachable only with a stored identity that verified as authorized."""
    if not user_id:
        return EntryScreen.SIGN_IN
    if verification is Verification.UNKNOWN:
        return EntryScreen.VERIFYING
    if verification is Verification.AUTHORIZED:
        return EntryScreen.HOME
    return EntryScreen.SIGN_IN
