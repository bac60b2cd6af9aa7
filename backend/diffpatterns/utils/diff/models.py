from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from diffpatterns.core.change_types import ChangeCategory, ChangeKind


class FileDiff(BaseModel):
    """git이 만든 파일 하나의 unified diff (이미 include/exclude 필터링된 상태)"""

    filePath: str
    kind: ChangeKind = "Modify"
    diffText: str = ""


class LineRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    # hunk header 기준 (start, start + count - 1), 파싱 실패 시 0
    startOld: int = 0
    endOld: int = 0
    startNew: int = 0
    endNew: int = 0


class ChangeUnit(BaseModel):
    model_config = ConfigDict(frozen=True)

    filePath: str
    kind: ChangeKind
    hunkHeader: str
    lineRange: LineRange = LineRange()
    rawText: str

    # 진단용. 매칭에는 쓰지 않는다
    contextPreview: List[str] = []

    canonicalForm: str = ""
    hunkIndex: int = 0


class ChangeGroup(BaseModel):
    patternId: str
    members: List[ChangeUnit] = Field(min_length=1)
    affectedFiles: List[str] = []
    similarityScore: float = 1.0

    # classifier가 한 번만 채운다
    category: ChangeCategory = "Other"
    description: str = ""

    @property
    def size(self) -> int:
        return len(self.members)


class AnalysisSummary(BaseModel):
    totalFiles: int = 0
    totalGroups: int = 0
    uniquePatterns: int = 0
    totalChanges: int = 0
    categoryCounts: Dict[str, int] = {}


class AnalysisMetadata(BaseModel):
    timestamp: Optional[datetime] = None
    repositoryPath: str = ""
    gitRange: str = ""
    commitHashes: List[str] = []


class AnalysisResult(BaseModel):
    metadata: AnalysisMetadata = Field(default_factory=AnalysisMetadata)
    groups: List[ChangeGroup] = []
    summary: AnalysisSummary = Field(default_factory=AnalysisSummary)
