# src/ai_line_review/review/engine.py
import asyncio
import fnmatch
import logging
from typing import Any, Awaitable, Callable, Iterable, Mapping

from ai_line_review.config import Settings
from ai_line_review.models.config import RepoConfig
from ai_line_review.models.pull_request import PRFile, PullRequestInfo
from ai_line_review.models.review import ReviewComment
from ai_line_review.providers import get_provider
from .cache import ResponseCache
from .extractor import extract_line_matches, extract_loose_matches
from .parser import FileAnalysis, parse_diff_for_analysis
from .prompts import build_line_review_prompt, build_summary_prompt
from .reconciler import comment_from_loose_match, reconcile


logger = logging.getLogger(__name__)

Generate = Callable[[str], Awaitable[str]]


class ReviewEngine:
    def __init__(
        self,
        generate: Generate,
        provider: str = "custom",
        config: RepoConfig | None = None,
        max_concurrency: int = 1,
        cache: ResponseCache | None = None,
        timeout: float | None = None,
    ):
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.generate = generate
        self.provider = provider
        self.config = config or RepoConfig()
        self.max_concurrency = max_concurrency
        self.cache = cache
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings, config: RepoConfig | None = None) -> "ReviewEngine":
        provider = get_provider(settings)
        if provider is None:
            raise ValueError(f"No LLM provider configured for '{settings.default_provider}'")

        return cls(
            generate=provider.generate,
            provider=provider.name,
            config=config,
            max_concurrency=settings.max_concurrency,
            cache=ResponseCache(ttl_seconds=settings.cache_ttl_seconds),
            timeout=settings.review_timeout,
        )

    async def review_files(
        self,
        files: Iterable[PRFile | Mapping[str, Any]],
        timeout: float | None = None,
    ) -> list[ReviewComment]:
        """Review every changed file and return the comments in input order.

        When ``timeout`` (or the engine default) expires, files that have not
        finished are cancelled and only comments from completed files are
        returned.
        """
        if timeout is None:
            timeout = self.timeout

        analyses = [a for a in self.analyze(files) if a.has_changes]
        if not analyses:
            return []

        logger.info(f"Reviewing {len(analyses)} file(s) with {self.provider}")
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def review_with_limit(analysis: FileAnalysis) -> list[ReviewComment]:
            async with semaphore:
                return await self.review_file(analysis)

        tasks = [asyncio.create_task(review_with_limit(a)) for a in analyses]
        try:
            done, pending = await asyncio.wait(tasks, timeout=timeout)
        except asyncio.CancelledError:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        if pending:
            logger.warning(f"Review timed out, cancelling {len(pending)} unfinished file(s)")
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        comments: list[ReviewComment] = []
        for task in tasks:
            if task in done and not task.cancelled():
                comments.extend(task.result())

        logger.info(f"Review produced {len(comments)} comment(s)")
        return comments

    def analyze(self, files: Iterable[PRFile | Mapping[str, Any]]) -> list[FileAnalysis]:
        """Parse the reviewable files; blank patches and excluded paths are dropped."""
        pr_files = [f if isinstance(f, PRFile) else PRFile.model_validate(f) for f in files]

        analyses = []
        for pr_file in pr_files:
            if not pr_file.patch or not pr_file.patch.strip():
                logger.debug(f"Skipping {pr_file.filename}: empty patch")
                continue
            if self._is_excluded(pr_file.filename):
                logger.debug(f"Skipping {pr_file.filename}: excluded by config")
                continue
            analyses.append(parse_diff_for_analysis(pr_file.filename, pr_file.patch))
        return analyses

    async def review_file(self, analysis: FileAnalysis) -> list[ReviewComment]:
        """Review one file; failures yield no comments instead of raising."""
        if not analysis.has_changes:
            return []

        prompt = build_line_review_prompt(analysis, self.config)

        try:
            response = await self._generate(prompt)
        except Exception as e:
            logger.error(f"LLM review failed for {analysis.filename}: {e}")
            return []

        try:
            matches = extract_line_matches(response)
            return [reconcile(match, analysis, self.provider) for match in matches]
        except Exception:
            logger.exception(f"Could not process LLM response for {analysis.filename}")
            return []

    async def review_pull_request(self, pr: PullRequestInfo) -> list[ReviewComment]:
        """Single-shot review of a whole pull request in the loose comment format.

        Line numbers are whatever the model reported; they are only located
        in a patch when the pull request carries that file's patch.
        """
        prompt = build_summary_prompt(pr, self.config)

        try:
            response = await self._generate(prompt)
        except Exception as e:
            logger.error(f"LLM review failed for pull request '{pr.title}': {e}")
            return []

        patches = {f.filename: f.patch for f in pr.files}
        try:
            return [
                comment_from_loose_match(match, self.provider, patches.get(match.file_path))
                for match in extract_loose_matches(response)
            ]
        except Exception:
            logger.exception(f"Could not process LLM response for pull request '{pr.title}'")
            return []

    async def _generate(self, prompt: str) -> str:
        if self.cache is None:
            return await self.generate(prompt)

        key = ResponseCache.make_key(self.provider, prompt)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit for {key}")
            return cached

        response = await self.generate(prompt)
        self.cache.set(key, response)
        return response

    def _is_excluded(self, file_path: str) -> bool:
        """Check if file matches any exclude pattern."""
        for pattern in self.config.exclude:
            if fnmatch.fnmatch(file_path, pattern):
                return True
        return False


async def review(
    files: Iterable[PRFile | Mapping[str, Any]],
    generate: Generate,
    *,
    provider: str = "custom",
    config: RepoConfig | None = None,
    max_concurrency: int = 1,
    cache: ResponseCache | None = None,
    timeout: float | None = None,
) -> list[ReviewComment]:
    """Review the changed files of a pull request with the given generate callable."""
    engine = ReviewEngine(
        generate=generate,
        provider=provider,
        config=config,
        max_concurrency=max_concurrency,
        cache=cache,
    )
    return await engine.review_files(files, timeout=timeout)
