from datetime import datetime

from fastapi import APIRouter, HTTPException, Query

from diffpatterns.analysis.analyzer import ChangeAnalyzer
from diffpatterns.core.errors import InvalidOptionsError
from diffpatterns.core.presets import build_options
from diffpatterns.schemas.analyze import AnalyzeRequest, ReportFormat, ReportResponse
from diffpatterns.services.path_filter import PathFilter
from diffpatterns.services.report_service import render_report
from diffpatterns.utils.diff.models import AnalysisMetadata, AnalysisResult, FileDiff


router = APIRouter(prefix="/analyze", tags=["analyze"])


def _run_analysis(req: AnalyzeRequest) -> AnalysisResult:
    try:
        opts = build_options(similarity_threshold=req.similarity_threshold, markup_aware=req.markup_aware)
    except InvalidOptionsError as e:
        raise HTTPException(status_code=400, detail=str(e))

    file_diffs = [FileDiff(filePath=f.path, kind=f.kind, diffText=f.diff) for f in req.files]
    file_diffs = PathFilter(req.include, req.exclude).filter(file_diffs)

    result = ChangeAnalyzer(opts).analyze(file_diffs)

    # core 결과는 그대로, metadata만 채운다
    result.metadata = AnalysisMetadata(
        timestamp=datetime.now(),
        repositoryPath=req.repository,
        commitHashes=req.commits,
        gitRange="..".join(req.commits),
    )
    return result


@router.post("", response_model=AnalysisResult)
def api_analyze(req: AnalyzeRequest):
    return _run_analysis(req)


@router.post("/report", response_model=ReportResponse)
def api_analyze_report(req: AnalyzeRequest, format: ReportFormat = Query("markdown")):
    result = _run_analysis(req)
    return ReportResponse(format=format, content=render_report(result, format))
