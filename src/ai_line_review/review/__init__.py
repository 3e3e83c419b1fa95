from .parser import parse_diff_for_analysis, split_diff, FileAnalysis, AddedLine, ModifiedLine
from .prompts import build_line_review_prompt, build_summary_prompt
from .extractor import (
    NO_ISSUES_FOUND,
    LOOSE_PATTERNS,
    LineMatch,
    LooseMatch,
    LoosePattern,
    extract_line_matches,
    extract_loose_matches,
)
from .reconciler import reconcile, locate_line, comment_from_loose_match
from .cache import ResponseCache
from .engine import ReviewEngine, review

__all__ = [
    "parse_diff_for_analysis",
    "split_diff",
    "FileAnalysis",
    "AddedLine",
    "ModifiedLine",
    "build_line_review_prompt",
    "build_summary_prompt",
    "NO_ISSUES_FOUND",
    "LOOSE_PATTERNS",
    "LineMatch",
    "LooseMatch",
    "LoosePattern",
    "extract_line_matches",
    "extract_loose_matches",
    "reconcile",
    "locate_line",
    "comment_from_loose_match",
    "ResponseCache",
    "ReviewEngine",
    "review",
]
