from ai_line_review.models.config import RepoConfig, CHECK_DESCRIPTIONS
from ai_line_review.models.pull_request import PullRequestInfo
from .extractor import NO_ISSUES_FOUND
from .parser import FileAnalysis


LINE_REVIEW_PROMPT = """You are an expert code reviewer. Analyze the following code changes and provide specific, actionable line-by-line feedback.

File: {file_path}

IMPORTANT: Only comment on issues you find. Respond in this EXACT format for each issue, one issue per line:
LINE:<line_number>|ISSUE:<brief_issue_description>|SUGGESTION:<specific_fix_or_improvement>

Example:
LINE:15|ISSUE:Missing null check|SUGGESTION:Add null check: if (user?.email)
LINE:23|ISSUE:Potential memory leak|SUGGESTION:Add cleanup: return () => {{ clearInterval(timer); }}

Do not use the "|" character inside ISSUE.
Write ISSUE and SUGGESTION text in language: {language}.

Added/Modified Lines to Review:
{numbered_lines}
{context_block}
Focus on:
{focus}

Only provide comments for actual issues found. Do not add praise, summaries or filler.
If no issues, respond with "{sentinel}"."""


SUMMARY_PROMPT = """Review this pull request and provide specific code improvement suggestions:
Title: {title}
Description: {description}
Files changed: {changed_files}
Additions: {additions}
Deletions: {deletions}
{file_list}
Please provide detailed code review comments focusing on:
{focus}

Write comments in language: {language}.
Format each comment as: {{file}}:{{line}} - {{comment}}"""


def _focus_lines(config: RepoConfig, numbered: bool = False) -> str:
    descriptions = [CHECK_DESCRIPTIONS[check] for check in config.checks]
    if numbered:
        return "\n".join(f"{i + 1}. {text}" for i, text in enumerate(descriptions))
    return "\n".join(f"- {text}" for text in descriptions)


def _numbered_lines(file: FileAnalysis, limit: int) -> str:
    """Render each reviewable line once, ascending by new-file line number."""
    lines: dict[int, str] = {}
    for line in file.added_lines:
        lines.setdefault(line.line_number, line.content)
    for line in file.modified_lines:
        lines.setdefault(line.line_number, line.content)

    ordered = sorted(lines.items())
    rendered = [f"Line {number}: {content}" for number, content in ordered[:limit]]
    omitted = len(ordered) - limit
    if omitted > 0:
        rendered.append(f"({omitted} more changed lines omitted)")
    return "\n".join(rendered)


def _context_block(file: FileAnalysis, limit: int) -> str:
    """Show what preceded each changed-in-place line."""
    blocks = []
    for line in file.modified_lines[:limit]:
        if not line.context:
            continue
        blocks.append(f"Line {line.line_number} replaces removed code after:\n{line.context}")

    if not blocks:
        return ""
    return "\nContext for modified lines:\n" + "\n\n".join(blocks) + "\n"


def build_line_review_prompt(file: FileAnalysis, config: RepoConfig | None = None) -> str:
    """Build the line-comment prompt for one file."""
    config = config or RepoConfig()

    return LINE_REVIEW_PROMPT.format(
        file_path=file.filename,
        language=config.language,
        numbered_lines=_numbered_lines(file, config.max_lines_per_file),
        context_block=_context_block(file, config.max_lines_per_file),
        focus=_focus_lines(config),
        sentinel=NO_ISSUES_FOUND,
    )


def build_summary_prompt(pr: PullRequestInfo, config: RepoConfig | None = None) -> str:
    """Build the single-shot prompt used when no per-line index is available."""
    config = config or RepoConfig()

    file_list = ""
    if pr.files:
        names = "\n".join(f"- {f.filename}" for f in pr.files)
        file_list = f"Changed files:\n{names}\n"

    description = pr.body.strip() if pr.body and pr.body.strip() else "No description provided"

    return SUMMARY_PROMPT.format(
        title=pr.title,
        description=description,
        changed_files=pr.changed_files,
        additions=pr.additions,
        deletions=pr.deletions,
        file_list=file_list,
        focus=_focus_lines(config, numbered=True),
        language=config.language,
    )
