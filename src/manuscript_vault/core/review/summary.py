"""Per-file change summaries for a work."""

from manuscript_vault.core.diff.lines import count_changes, diff_lines
from manuscript_vault.models.review import FileChangeSummary
from manuscript_vault.models.work import NodeKind, Work
from manuscript_vault.protocols import BaselineProtocol


def summarize_file(file_name: str, previous_text: str, current_text: str) -> FileChangeSummary:
    lines = diff_lines(previous_text, current_text)
    added, removed = count_changes(lines)
    return FileChangeSummary(
        file_name=file_name,
        added_line_count=added,
        removed_line_count=removed,
        lines=tuple(lines),
    )


def build_summaries(
    work: Work,
    baseline: BaselineProtocol,
    *,
    display_name: str | None = None,
) -> list[FileChangeSummary]:
    """Diff every file document of the work against its baseline.

    Results are sorted by file name. A missing baseline counts as empty
    text. A work without documents yields one empty summary named
    `display_name` (the work title by default).
    """
    summaries: list[FileChangeSummary] = []
    for node in work.nodes.values():
        if node.kind is not NodeKind.FILE:
            continue
        document = work.document_of(node)
        if document is None:
            continue
        file_name = document.kind.file_name
        previous = baseline.baseline_for(file_name) or ""
        summaries.append(summarize_file(file_name, previous, document.text))

    if not summaries:
        return [summarize_file(display_name or work.title, "", "")]

    summaries.sort(key=lambda s: s.file_name)
    return summaries
