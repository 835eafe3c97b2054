"""Sign-in session state and its reducer."""

from dataclasses import dataclass

from manuscript_vault.config import SIGN_IN_FAILED_MESSAGE


@dataclass(frozen=True)
class SessionState:
    stored_user_id: str = ""
    error_message: str | None = None
    verification_revision: int = 0


@dataclass(frozen=True)
class SignInSucceeded:
    user_id: str


@dataclass(frozen=True)
class SignInFailed:
    pass


@dataclass(frozen=True)
class SignOut:
    pass


SessionAction = SignInSucceeded | SignInFailed | SignOut


@dataclass(frozen=True)
class VerificationTaskKey:
    """Changes whenever a new verification has to run."""

    stored_user_id: str
    verification_revision: int


def verification_task_key(state: SessionState) -> VerificationTaskKey:
    return VerificationTaskKey(state.stored_user_id, state.verification_revision)


def reduce_session(state: SessionState, action: SessionAction) -> SessionState:
    """Apply a sign-in event.

    Every successful sign-in bumps the revision, even for the same user id,
    so that the identity is verified again.
    """
    if isinstance(action, SignInSucceeded):
        return SessionState(
            stored_user_id=action.user_id,
            error_message=None,
            verification_revision=state.verification_revision + 1,
        )

    if isinstance(action, SignInFailed):
        return SessionState(
            stored_user_id=state.stored_user_id,
            error_message=SIGN_IN_FAILED_MESSAGE,
            verification_revision=state.verification_revision,
        )

    if isinstance(action, SignOut):
        return SessionState(
            stored_user_id="",
            error_message=None,
            verification_revision=state.verification_revision,
        )

    msg = f"Unknown session action: {action!r}"
    raise TypeError(msg)
