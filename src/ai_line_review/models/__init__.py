from .config import RepoConfig, CheckType
from .pull_request import PRFile, PullRequestInfo
from .review import ReviewComment, CommentStatus, LineType

__all__ = [
    "RepoConfig",
    "CheckType",
    "PRFile",
    "PullRequestInfo",
    "ReviewComment",
    "CommentStatus",
    "LineType",
]
