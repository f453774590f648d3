"""Working tree status parsing and classification.

Reads ``git status --porcelain=v2 -z`` output. Each changed entry carries
two single-letter codes: ``X`` for the HEAD to index view and ``Y`` for the
index to working tree view (``.`` meaning unchanged).
"""

from dataclasses import dataclass

from repo_hygiene.core.models.report import PendingLabel

STATUS_ARGS = (
    "status",
    "--porcelain=v2",
    "-z",
    "--untracked-files=normal",
    "--ignored=no",
    "--find-renames",
)

UNTRACKED = "?"

# Codes in the HEAD -> index view
_HEAD_TO_INDEX = {
    "A": PendingLabel.ADDED_FILES,
    "M": PendingLabel.UNCOMMITTED_CHANGES,
    "D": PendingLabel.DELETED_FILES,
    "R": PendingLabel.RENAMED_FILES,
}

# Codes in the index -> working tree view
_INDEX_TO_WORKDIR = {
    UNTRACKED: PendingLabel.UNTRACKED_FILES,
    "M": PendingLabel.UNCOMMITTED_CHANGES,
    "D": PendingLabel.DELETED_FILES,
    "R": PendingLabel.RENAMED_FILES,
}


@dataclass(frozen=True)
class StatusEntry:
    """One path reported by git status."""

    path: str
    head_to_index: str | None = None
    index_to_workdir: str | None = None


def parse_porcelain_v2(output: str) -> list[StatusEntry]:
    """Parse NUL-separated porcelain v2 status output.

    Header lines (``#``), ignored entries (``!``) and unmerged entries
    (``u``) are skipped.
    """
    entries: list[StatusEntry] = []
    fields = iter(output.split("\0"))
    for record in fields:
        if not record:
            continue
        kind = record[0]
        if kind == UNTRACKED:
            entries.append(StatusEntry(path=record[2:], index_to_workdir=UNTRACKED))
        elif kind in ("1", "2"):
            parts = record.split(" ", 9 if kind == "2" else 8)
            x, y = parts[1][0], parts[1][1]
            entries.append(
                StatusEntry(
                    path=parts[-1],
                    head_to_index=None if x == "." else x,
                    index_to_workdir=None if y == "." else y,
                )
            )
            if kind == "2":
                # The rename source follows as its own field
                next(fields, None)
    return entries


def classify_entries(
    entries: list[StatusEntry], ignore_untracked: bool = False
) -> list[PendingLabel]:
    """Map status entries to pending labels, without duplicates.

    Labels keep the order in which they were first seen.
    """
    labels: dict[PendingLabel, None] = {}
    for entry in entries:
        for label in _labels_for(entry):
            if label is PendingLabel.UNTRACKED_FILES and ignore_untracked:
                continue
            labels.setdefault(label)
    return list(labels)


def _labels_for(entry: StatusEntry) -> list[PendingLabel]:
    labels = []
    if entry.index_to_workdir in _INDEX_TO_WORKDIR:
        labels.append(_INDEX_TO_WORKDIR[entry.index_to_workdir])
    if entry.head_to_index in _HEAD_TO_INDEX:
        labels.append(_HEAD_TO_INDEX[entry.head_to_index])
    return labels
