from pydantic import BaseModel, Field


class PRFile(BaseModel):
    """One changed file as listed by a pull-request file API."""
    filename: str
    patch: str = ""
    status: str | None = None


class PullRequestInfo(BaseModel):
    title: str
    body: str | None = None
    changed_files: int = 0
    additions: int = 0
    deletions: int = 0
    files: list[PRFile] = Field(default_factory=list)
