# tests/unit/test_engine.py
import asyncio
import pytest
from unittest.mock import AsyncMock
from ai_line_review.config import Settings
from ai_line_review.models.config import RepoConfig
from ai_line_review.models.pull_request import PRFile, PullRequestInfo
from ai_line_review.models.review import LineType
from ai_line_review.review.cache import ResponseCache
from ai_line_review.review.engine import ReviewEngine, review


A_PATCH = "@@ -1,2 +1,3 @@\n line1\n+line2\n line3"
B_PATCH = "@@ -10,2 +10,2 @@\n keep\n-old()\n+new()"


@pytest.fixture
def files():
    return [
        {"filename": "a.ts", "patch": A_PATCH},
        {"filename": "b.py", "patch": B_PATCH},
    ]


def _generate_by_file(responses):
    """Answer with the response registered for the file named in the prompt."""
    async def generate(prompt):
        for filename, response in responses.items():
            if f"File: {filename}\n" in prompt:
                if isinstance(response, Exception):
                    raise response
                return response
        return "NO_ISSUES_FOUND"
    return AsyncMock(side_effect=generate)


@pytest.mark.asyncio
async def test_end_to_end_single_file():
    generate = AsyncMock(return_value="LINE:2|ISSUE:unused var|SUGGESTION:remove it")

    comments = await review([{"filename": "a.ts", "patch": A_PATCH}], generate)

    assert len(comments) == 1
    comment = comments[0]
    assert comment.file_path == "a.ts"
    assert comment.start_line == 2
    assert comment.line_type == LineType.ADDED
    assert comment.line_content == "line2"
    assert "unused var" in comment.content
    assert "remove it" in comment.content
    generate.assert_called_once()


@pytest.mark.asyncio
async def test_failed_file_does_not_abort_run(files):
    generate = _generate_by_file({
        "a.ts": RuntimeError("provider down"),
        "b.py": "LINE:11|ISSUE:Unchecked call|SUGGESTION:Handle errors",
    })

    comments = await review(files, generate)

    assert [(c.file_path, c.start_line) for c in comments] == [("b.py", 11)]
    assert comments[0].line_content == "new()"
    assert comments[0].line_type == LineType.ADDED


@pytest.mark.asyncio
async def test_comments_follow_input_order(files):
    generate = _generate_by_file({
        "a.ts": "LINE:2|ISSUE:a|SUGGESTION:a",
        "b.py": "LINE:11|ISSUE:b|SUGGESTION:b",
    })

    comments = await review(files, generate)

    assert [c.file_path for c in comments] == ["a.ts", "b.py"]


@pytest.mark.asyncio
async def test_concurrent_run_restores_input_order(files):
    async def generate(prompt):
        # first file finishes last
        if "File: a.ts\n" in prompt:
            await asyncio.sleep(0.05)
            return "LINE:2|ISSUE:a|SUGGESTION:a"
        return "LINE:11|ISSUE:b|SUGGESTION:b"

    comments = await review(files, generate, max_concurrency=4)

    assert [c.file_path for c in comments] == ["a.ts", "b.py"]


@pytest.mark.asyncio
async def test_sequential_run_calls_generate_in_input_order(files):
    seen = []

    async def generate(prompt):
        seen.append("a.ts" if "File: a.ts\n" in prompt else "b.py")
        return "NO_ISSUES_FOUND"

    await review(files, generate)

    assert seen == ["a.ts", "b.py"]


@pytest.mark.asyncio
async def test_blank_and_removal_only_files_are_skipped():
    generate = AsyncMock(return_value="NO_ISSUES_FOUND")

    comments = await review(
        [
            {"filename": "blank.py", "patch": "   \n"},
            {"filename": "binary.png"},
            {"filename": "gone.py", "patch": "@@ -1,2 +0,0 @@\n-a\n-b"},
        ],
        generate,
    )

    assert comments == []
    generate.assert_not_called()


@pytest.mark.asyncio
async def test_excluded_files_are_skipped():
    generate = AsyncMock(return_value="LINE:2|ISSUE:x|SUGGESTION:y")
    engine = ReviewEngine(generate=generate, config=RepoConfig(exclude=["*.ts"]))

    comments = await engine.review_files([PRFile(filename="a.ts", patch=A_PATCH)])

    assert comments == []
    generate.assert_not_called()


@pytest.mark.asyncio
async def test_malformed_response_yields_no_comments():
    generate = AsyncMock(return_value=12345)

    comments = await review([{"filename": "a.ts", "patch": A_PATCH}], generate)

    assert comments == []


@pytest.mark.asyncio
async def test_timeout_returns_completed_files_only(files):
    calls = []

    async def generate(prompt):
        if "File: a.ts\n" in prompt:
            calls.append("a.ts")
            return "LINE:2|ISSUE:a|SUGGESTION:a"
        calls.append("b.py")
        await asyncio.sleep(10)
        return "LINE:11|ISSUE:b|SUGGESTION:b"

    comments = await review(files, generate, timeout=0.2)

    assert [c.file_path for c in comments] == ["a.ts"]
    assert calls == ["a.ts", "b.py"]


@pytest.mark.asyncio
async def test_timeout_stops_issuing_calls():
    calls = []

    async def generate(prompt):
        calls.append(prompt)
        await asyncio.sleep(10)
        return "NO_ISSUES_FOUND"

    files = [{"filename": f"f{i}.py", "patch": A_PATCH} for i in range(3)]
    comments = await review(files, generate, timeout=0.1)

    assert comments == []
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_cache_reuses_responses():
    generate = AsyncMock(return_value="LINE:2|ISSUE:x|SUGGESTION:y")
    cache = ResponseCache(ttl_seconds=60)
    engine = ReviewEngine(generate=generate, provider="openai", cache=cache)
    files = [{"filename": "a.ts", "patch": A_PATCH}]

    first = await engine.review_files(files)
    second = await engine.review_files(files)

    generate.assert_called_once()
    assert len(cache) == 1
    assert len(first) == len(second) == 1
    assert first[0].id != second[0].id


@pytest.mark.asyncio
async def test_failed_generate_is_not_cached():
    generate = AsyncMock(side_effect=[RuntimeError("boom"), "NO_ISSUES_FOUND"])
    cache = ResponseCache()
    engine = ReviewEngine(generate=generate, cache=cache)
    files = [{"filename": "a.ts", "patch": A_PATCH}]

    await engine.review_files(files)
    await engine.review_files(files)

    assert generate.call_count == 2


def test_invalid_concurrency():
    with pytest.raises(ValueError):
        ReviewEngine(generate=AsyncMock(), max_concurrency=0)


def test_from_settings_uses_configured_provider():
    settings = Settings(
        _env_file=None,
        default_provider="ollama",
        max_concurrency=3,
        cache_ttl_seconds=10,
        review_timeout=30,
    )

    engine = ReviewEngine.from_settings(settings)

    assert engine.provider == "ollama"
    assert engine.max_concurrency == 3
    assert engine.cache.ttl_seconds == 10
    assert engine.timeout == 30


def test_from_settings_without_provider():
    settings = Settings(_env_file=None, default_provider="gemini", gemini_api_key=None)

    with pytest.raises(ValueError):
        ReviewEngine.from_settings(settings)


@pytest.mark.asyncio
async def test_review_pull_request_loose_mode():
    generate = AsyncMock(return_value=(
        "Here is my review:\n"
        "src/a.ts:2 - Name this better\n"
        "File: docs/readme.md, Line: 8 - Typo\n"
    ))
    engine = ReviewEngine(generate=generate, provider="gemini")
    pr = PullRequestInfo(
        title="Add feature",
        changed_files=2,
        additions=3,
        deletions=1,
        files=[PRFile(filename="src/a.ts", patch=A_PATCH)],
    )

    comments = await engine.review_pull_request(pr)

    assert [(c.file_path, c.start_line) for c in comments] == [("src/a.ts", 2), ("docs/readme.md", 8)]
    assert comments[0].line_type == LineType.ADDED
    assert comments[0].line_content == "line2"
    assert comments[1].line_type is None
    assert "Add feature" in generate.call_args.args[0]


@pytest.mark.asyncio
async def test_review_pull_request_failure():
    generate = AsyncMock(side_effect=TimeoutError("slow"))
    engine = ReviewEngine(generate=generate)

    comments = await engine.review_pull_request(PullRequestInfo(title="x"))

    assert comments == []
