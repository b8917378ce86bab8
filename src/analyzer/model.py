# src/analyzer/model.py (Analysis Layer)
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ResultModel(BaseModel):
    """
    Base for all analysis results: immutable once built, snake_case in Python,
    camelCase (`model_dump(by_alias=True)`) for export.
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


StructureClassification = Literal["deterministic", "mostly-deterministic", "unstable"]
SemanticClassification = Literal["explicit", "partial", "opaque"]


class NormalizedNode(ResultModel):
    """Shallow shape fingerprint: a tag plus the ordered tags of its direct children."""
    tag: str
    child_tags: List[str] = Field(default_factory=list)


class DomMetrics(ResultModel):
    dom_nodes: int = Field(default=0, ge=0)
    max_depth: int = Field(default=0, ge=0)
    top_level_sections: int = Field(default=0, ge=0)
    custom_elements: int = Field(default=0, ge=0)


class StructureResult(ResultModel):
    classification: StructureClassification
    difference_count: int = Field(ge=0)
    dom_nodes: int = Field(ge=0)
    max_depth: int = Field(ge=0)
    top_level_sections: int = Field(ge=0)
    custom_elements: int = Field(default=0, ge=0)


class HeadingSignals(ResultModel):
    h1_count: int = 0
    has_skips: bool = False


class LandmarkSignals(ResultModel):
    found: List[str] = Field(default_factory=list)
    coverage_percent: int = Field(default=0, ge=0, le=100)


class TimeSignals(ResultModel):
    total: int = 0
    with_datetime: int = 0


class ListSignals(ResultModel):
    total: int = 0
    ordered: int = 0
    unordered: int = 0
    description: int = 0


class TableSignals(ResultModel):
    total: int = 0
    with_headers: int = 0


class ImageResult(ResultModel):
    total: int = 0
    with_alt: int = 0
    empty_alt: int = 0
    missing_alt: int = 0
    in_figure: int = 0
    with_dimensions: int = 0
    with_srcset: int = 0
    with_lazy_loading: int = 0


class SemanticResult(ResultModel):
    classification: SemanticClassification
    headings: HeadingSignals
    landmarks: LandmarkSignals
    div_ratio: float = Field(ge=0.0, lt=1.0)
    link_issues: int = Field(ge=0)
    time_elements: TimeSignals
    lists: ListSignals
    tables: TableSignals
    lang_attribute: bool
    images: ImageResult


class AnalysisResult(ResultModel):
    url: str
    structure: StructureResult
    semantics: SemanticResult


class Interpretation(ResultModel):
    category: str
    finding: str
    implication: str
