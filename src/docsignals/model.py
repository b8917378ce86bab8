# src/docsignals/model.py (Application Layer)
from typing import List

from pydantic import Field

from analyzer.model import AnalysisResult, Interpretation, ResultModel
from fetcher.model import FetchResult


class AnalysisReport(ResultModel):
    """Everything one CLI run produces: the analysis, its interpretations and any failed fetches."""
    url: str
    fetch_count: int = Field(ge=1, description="Number of fetches requested.")
    samples_used: int = Field(ge=1, description="Number of successful samples the analysis is based on.")
    result: AnalysisResult
    interpretations: List[Interpretation] = Field(default_factory=list)
    failures: List[FetchResult] = Field(default_factory=list)
