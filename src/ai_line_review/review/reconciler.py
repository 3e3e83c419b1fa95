import uuid

from ai_line_review.models.review import LineType, ReviewComment
from .extractor import LineMatch, LooseMatch
from .parser import ADDED, CONTEXT, REMOVED, FileAnalysis, hunk_new_start, line_prefix


PREFIX_TYPES = {
    ADDED: LineType.ADDED,
    REMOVED: LineType.REMOVED,
    CONTEXT: LineType.CONTEXT,
}


def new_comment_id(file_path: str, line_number: int) -> str:
    return f"{file_path}-{line_number}-{uuid.uuid4().hex}"


def format_comment_body(issue: str, suggestion: str) -> str:
    return f"**{issue.strip()}**\n\n{suggestion.strip()}"


def locate_line(patch: str, line_number: int) -> tuple[str, LineType] | None:
    """Find what the patch shows at a new-file line number.

    Walks the patch with the same counting as the diff parser and returns
    the content and type of the first ``+``, ``-`` or context line sitting
    at that position, or None when the position never comes up.
    """
    current_line = 0
    in_hunk = False

    for line in (patch or "").split("\n"):
        if line.startswith("@@"):
            in_hunk = True
            new_start = hunk_new_start(line)
            if new_start is not None:
                current_line = new_start
            continue

        prefix = line_prefix(line, in_hunk)
        if prefix is not None and current_line == line_number:
            return line[1:], PREFIX_TYPES[prefix]

        if prefix in (ADDED, CONTEXT):
            current_line += 1

    return None


def resolve_line(analysis: FileAnalysis, line_number: int) -> tuple[str, LineType]:
    for added in analysis.added_lines:
        if added.line_number == line_number:
            return added.content, LineType.ADDED

    # Changed-in-place lines show up as new content in the diff.
    for modified in analysis.modified_lines:
        if modified.line_number == line_number:
            return modified.content, LineType.ADDED

    located = locate_line(analysis.patch, line_number)
    if located is not None:
        return located

    return "", LineType.CONTEXT


def reconcile(match: LineMatch, analysis: FileAnalysis, provider: str) -> ReviewComment:
    """Turn an extracted finding into a comment anchored on the file's diff."""
    line_content, line_type = resolve_line(analysis, match.line_number)
    body = format_comment_body(match.issue, match.suggestion)

    return ReviewComment(
        id=new_comment_id(analysis.filename, match.line_number),
        file_path=analysis.filename,
        start_line=match.line_number,
        content=body,
        original_content=body,
        provider=provider,
        line_content=line_content,
        line_type=line_type,
    )


def comment_from_loose_match(match: LooseMatch, provider: str, patch: str | None = None) -> ReviewComment:
    """Build a comment from a loose-mode finding, locating it when the patch is known."""
    line_content = ""
    line_type = None
    if patch:
        located = locate_line(patch, match.line_number)
        if located is not None:
            line_content, line_type = located

    return ReviewComment(
        id=new_comment_id(match.file_path, match.line_number),
        file_path=match.file_path,
        start_line=match.line_number,
        content=match.comment,
        original_content=match.comment,
        provider=provider,
        line_content=line_content,
        line_type=line_type,
    )
