from pydantic import BaseModel, Field
from typing import List, Literal, Optional

from diffpatterns.core.change_types import ChangeKind
from diffpatterns.core.config import DEFAULT_SIMILARITY_THRESHOLD

ReportFormat = Literal["markdown", "json", "csv"]


class FileDiffIn(BaseModel):
    path: str = Field(..., min_length=1, description="Changed file path")
    kind: ChangeKind = "Modify"
    diff: str = Field("", description="Unified diff text for this file")


class AnalyzeRequest(BaseModel):
    files: List[FileDiffIn] = []
    similarity_threshold: float = Field(DEFAULT_SIMILARITY_THRESHOLD, ge=0.0, le=1.0)
    markup_aware: bool = False
    include: Optional[str] = Field(None, description="Comma separated include globs (e.g. *.xml,*.cs)")
    exclude: Optional[str] = Field(None, description="Comma separated exclude globs")
    repository: str = ""
    commits: List[str] = []


class ReportResponse(BaseModel):
    format: ReportFormat
    content: str
