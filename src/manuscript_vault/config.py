"""Configuration constants for the manuscript vault."""

import os
import socket
from pathlib import Path

# Directory holding the vault database. First directory which is found is used.
DATA_DIRECTORIES: list[Path] = [
    Path("~/.local/share/manuscript-vault").expanduser(),
    Path("~/.manuscript-vault").expanduser(),
    Path("~/.config/manuscript-vault").expanduser(),
]

DATA_DIRECTORY_ENV = "MANUSCRIPT_VAULT_DIR"

DATABASE_FILENAME = "vault.db"

# Version written into every snapshot manifest.
MANIFEST_VERSION = 1

# Text of the single unchanged line emitted when both sides are empty.
NO_CHANGES_MARKER = "(no changes)"

# Upper bounds for external collaborator calls, in seconds.
VERIFICATION_TIMEOUT_SECONDS: float = 10.0
ACCOUNT_STATUS_TIMEOUT_SECONDS: float = 10.0

DEFAULT_DEVICE_NAME: str = socket.gethostname()

SIGN_IN_FAILED_MESSAGE = "Sign-in failed"


def resolve_data_directory() -> Path:
    """Return the vault data directory.

    The environment override wins, then the first existing candidate,
    then the first candidate.
    """
    override = os.environ.get(DATA_DIRECTORY_ENV)
    if override:
        return Path(override).expanduser()
    for candidate in DATA_DIRECTORIES:
        if candidate.is_dir():
            return candidate
    return DATA_DIRECTORIES[0]
