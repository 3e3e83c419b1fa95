import re
from collections import deque
from dataclasses import dataclass, field
from unidiff import PatchSet

from ai_line_review.models.pull_request import PRFile


# New-file start is the only value the line counter needs.
HUNK_HEADER_RE = re.compile(r"@@ -(\d+),?\d* \+(?P<new_start>\d+),?\d* @@")

CONTEXT_WINDOW = 3


@dataclass(frozen=True)
class AddedLine:
    line_number: int
    content: str


@dataclass(frozen=True)
class ModifiedLine:
    line_number: int
    content: str
    context: str


@dataclass(frozen=True)
class FileAnalysis:
    filename: str
    patch: str
    added_lines: tuple[AddedLine, ...] = field(default_factory=tuple)
    modified_lines: tuple[ModifiedLine, ...] = field(default_factory=tuple)

    @property
    def has_changes(self) -> bool:
        return bool(self.added_lines or self.modified_lines)


ADDED = "+"
REMOVED = "-"
CONTEXT = " "


def line_prefix(line: str, in_hunk: bool) -> str | None:
    """Return the +, - or space prefix of a hunk body line.

    Before the first hunk header every line is file-header material
    (``---``, ``+++``, ``diff --git``), so nothing is classified there.
    Inside a hunk the first character alone decides.
    """
    if not in_hunk:
        return None
    prefix = line[:1]
    if prefix in (ADDED, REMOVED, CONTEXT):
        return prefix
    return None


def hunk_new_start(line: str) -> int | None:
    """Return the new-file start of a hunk header, or None if it has none."""
    match = HUNK_HEADER_RE.search(line)
    if match is None:
        return None
    return int(match.group("new_start"))


def parse_diff_for_analysis(filename: str, patch: str) -> FileAnalysis:
    """Index the added and changed-in-place lines of a single-file patch.

    Line numbers are positions in the new file: added and context lines
    advance the counter, removed lines do not, and every hunk header resets
    it. A header without a usable start leaves the counter where it was.
    """
    added_lines: list[AddedLine] = []
    modified_lines: list[ModifiedLine] = []

    current_line = 0
    context: deque[str] = deque(maxlen=CONTEXT_WINDOW)
    previous_removed = False
    in_hunk = False

    for line in (patch or "").split("\n"):
        if line.startswith("@@"):
            in_hunk = True
            new_start = hunk_new_start(line)
            if new_start is not None:
                current_line = new_start
            previous_removed = False
            continue

        prefix = line_prefix(line, in_hunk)
        if prefix == ADDED:
            content = line[1:]
            added_lines.append(AddedLine(line_number=current_line, content=content))
            if previous_removed:
                modified_lines.append(ModifiedLine(
                    line_number=current_line,
                    content=content,
                    context="\n".join(context),
                ))
            current_line += 1
        elif prefix == CONTEXT:
            context.append(line[1:])
            current_line += 1

        previous_removed = prefix == REMOVED

    return FileAnalysis(
        filename=filename,
        patch=patch,
        added_lines=tuple(added_lines),
        modified_lines=tuple(modified_lines),
    )


def split_diff(diff_text: str) -> list[PRFile]:
    """Split a multi-file unified diff into per-file patches.

    Each patch keeps only its hunks, the same shape a pull-request file
    API returns in its ``patch`` field.
    """
    patch = PatchSet(diff_text)
    files = []

    for patched_file in patch:
        if patched_file.is_added_file:
            status = "added"
        elif patched_file.is_removed_file:
            status = "removed"
        else:
            status = "modified"

        hunks = "".join(str(hunk) for hunk in patched_file)
        files.append(PRFile(
            filename=patched_file.path,
            patch=hunks.rstrip("\n"),
            status=status,
        ))

    return files
