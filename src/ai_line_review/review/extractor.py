"""Recover review findings from free-text model output.

Two grammars are understood. The strict one is the line-comment format the
line review prompt asks for::

    LINE:<n>|ISSUE:<text without "|">|SUGGESTION:<text>

The loose one covers the ``file:line - comment`` style answers of the
single-shot pull request review, where the model is only nudged towards a
format. Lines that fit neither grammar are dropped; nothing is guessed from
unparseable text.
"""
import re
from dataclasses import dataclass


NO_ISSUES_FOUND = "NO_ISSUES_FOUND"

LINE_COMMENT_RE = re.compile(r"^LINE:(\d+)\|ISSUE:([^|]+)\|SUGGESTION:(.+)$")


@dataclass(frozen=True)
class LineMatch:
    line_number: int
    issue: str
    suggestion: str


@dataclass(frozen=True)
class LooseMatch:
    file_path: str
    line_number: int
    comment: str
    pattern: str


@dataclass(frozen=True)
class LoosePattern:
    """A named loose grammar capturing (file, line, comment) in groups 1-3."""
    name: str
    regex: re.Pattern

    def extract(self, line: str) -> LooseMatch | None:
        match = self.regex.match(line)
        if match is None:
            return None

        file_path, line_number, comment = match.groups()
        return LooseMatch(
            file_path=file_path.strip(),
            # Models occasionally number from zero.
            line_number=int(line_number) or 1,
            comment=comment.strip(),
            pattern=self.name,
        )


LOOSE_PATTERNS: tuple[LoosePattern, ...] = (
    LoosePattern("colon", re.compile(r"^([^:]+):(\d+)\s*-\s*(.+)$")),
    LoosePattern("labelled", re.compile(r"^File:\s*([^,]+),?\s*Line:\s*(\d+)\s*-?\s*(.+)$", re.IGNORECASE)),
    LoosePattern("parenthesised", re.compile(r"^([^:]+)\s*\(line\s*(\d+)\)\s*:\s*(.+)$", re.IGNORECASE)),
)


def is_no_issues(response: str | None) -> bool:
    return not response or response.strip() == NO_ISSUES_FOUND


def extract_line_matches(response: str | None) -> list[LineMatch]:
    """Parse strict ``LINE:|ISSUE:|SUGGESTION:`` lines in emission order."""
    if is_no_issues(response):
        return []

    matches = []
    for line in response.splitlines():
        match = LINE_COMMENT_RE.match(line.strip())
        if match is None:
            continue

        line_number, issue, suggestion = match.groups()
        matches.append(LineMatch(
            line_number=int(line_number),
            issue=issue.strip(),
            suggestion=suggestion.strip(),
        ))

    return matches


def extract_loose_matches(
    response: str | None,
    patterns: tuple[LoosePattern, ...] = LOOSE_PATTERNS,
) -> list[LooseMatch]:
    """Parse loose ``file:line - comment`` lines; first matching pattern wins.

    An empty response or the ``NO_ISSUES_FOUND`` sentinel yields ``[]``,
    the same as in strict mode.
    """
    if is_no_issues(response):
        return []

    matches = []
    for line in response.splitlines():
        line = line.strip()
        for pattern in patterns:
            match = pattern.extract(line)
            if match is not None:
                matches.append(match)
                break

    return matches
