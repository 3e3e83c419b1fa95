from datetime import datetime, timezone
from enum import Enum
from pydantic import BaseModel, Field


class LineType(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    CONTEXT = "context"


class CommentStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    SUBMITTED = "submitted"


class ReviewComment(BaseModel):
    id: str
    file_path: str
    start_line: int
    content: str
    provider: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    status: CommentStatus = CommentStatus.PENDING
    is_editing: bool = False
    original_content: str = ""
    line_content: str = ""
    # None only when a loose-mode comment could not be located in any patch
    line_type: LineType | None = None
