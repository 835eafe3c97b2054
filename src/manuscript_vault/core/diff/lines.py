"""Line-level diff based on the longest common subsequence."""

from manuscript_vault.config import NO_CHANGES_MARKER
from manuscript_vault.models.review import DiffLine, DiffLineKind


def split_lines(text: str) -> list[str]:
    """Split on newlines, keeping empty trailing segments.

    An empty string has no lines at all.
    """
    if text == "":
        return []
    return text.split("\n")


def _lcs_table(previous: list[str], current: list[str]) -> list[list[int]]:
    # table[i][j] is the LCS length of previous[i:] and current[j:]
    m, n = len(previous), len(current)
    table = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m - 1, -1, -1):
        row, below = table[i], table[i + 1]
        for j in range(n - 1, -1, -1):
            if previous[i] == current[j]:
                row[j] = below[j + 1] + 1
            else:
                row[j] = max(below[j], row[j + 1])
    return table


def diff_lines(previous_text: str, current_text: str) -> list[DiffLine]:
    """Compute the ordered line edits turning previous_text into current_text.

    When the two sides compete, removals are emitted before additions.
    If neither side has any lines, a single unchanged marker line is returned.
    """
    previous = split_lines(previous_text)
    current = split_lines(current_text)

    if not previous and not current:
        return [DiffLine(DiffLineKind.UNCHANGED, NO_CHANGES_MARKER)]

    table = _lcs_table(previous, current)
    out: list[DiffLine] = []
    i = j = 0
    while i < len(previous) and j < len(current):
        if previous[i] == current[j]:
            out.append(DiffLine(DiffLineKind.UNCHANGED, previous[i]))
            i += 1
            j += 1
        elif table[i + 1][j] >= table[i][j + 1]:
            out.append(DiffLine(DiffLineKind.REMOVED, previous[i]))
            i += 1
        else:
            out.append(DiffLine(DiffLineKind.ADDED, current[j]))
            j += 1

    out.extend(DiffLine(DiffLineKind.REMOVED, line) for line in previous[i:])
    out.extend(DiffLine(DiffLineKind.ADDED, line) for line in current[j:])
    return out


def count_changes(lines: list[DiffLine]) -> tuple[int, int]:
    """Return (added, removed) tallies for a diff."""
    added = sum(1 for line in lines if line.kind is DiffLineKind.ADDED)
    removed = sum(1 for line in lines if line.kind is DiffLineKind.REMOVED)
    return added, removed


def render_diff(lines: list[DiffLine]) -> str:
    """Render a diff with "+", "-" and " " prefixes, one line per entry."""
    prefixes = {
        DiffLineKind.ADDED: "+",
        DiffLineKind.REMOVED: "-",
        DiffLineKind.UNCHANGED: " ",
    }
    return "\n".join(f"{prefixes[line.kind]}{line.text}" for line in lines)
