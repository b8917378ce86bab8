# src/analyzer/semantics.py
"""
Semantic signal extraction for a single document snapshot.

Every helper reads the shared element tree produced by the DOMBuilder and
returns one independent signal; `check_semantics` composes them and applies
the fixed score rubric from `analyzer.constants`.
"""
import logging
import math
from typing import List, Union

from analyzer.constants import (
    DIV_RATIO_THRESHOLD,
    EXPLICIT_THRESHOLD,
    GENERIC_CONTAINER_TAGS,
    HEADING_TAGS,
    LANDMARK_COVERAGE_THRESHOLD,
    LANDMARK_TAGS,
    LIST_TAGS,
    PARTIAL_THRESHOLD,
    SCORE_DIV_RATIO,
    SCORE_HEADINGS,
    SCORE_LANDMARKS,
    SCORE_LINKS,
    SEMANTIC_TAGS,
)
from analyzer.dom.builder import as_document
from analyzer.dom.core import ElementBase
from analyzer.dom.elements.heading import HeadingElement
from analyzer.dom.elements.image import ImageElement
from analyzer.dom.elements.table import TableElement
from analyzer.dom.models import HTMLDocument
from analyzer.dom.registry import DOMRegistry
from analyzer.model import (
    HeadingSignals,
    ImageResult,
    LandmarkSignals,
    ListSignals,
    SemanticResult,
    TableSignals,
    TimeSignals,
)

logger = logging.getLogger(__name__)


# -------- Headings --------

def analyze_headings(doc: HTMLDocument) -> HeadingSignals:
    """Counts h1 elements and detects forward jumps of more than one level."""
    headings: List[HeadingElement] = doc.root.find_all(HEADING_TAGS)
    levels = [node.level for node in headings]

    has_skips = False
    for previous, current in zip(levels, levels[1:]):
        if current > previous + 1:
            has_skips = True
            break

    return HeadingSignals(h1_count=levels.count(1), has_skips=has_skips)


# -------- Landmarks --------

def _topmost_landmark_text_length(scope: ElementBase) -> int:
    """Text length of landmarks that are not nested inside another landmark."""
    landmark_tags = set(LANDMARK_TAGS)
    total = 0
    stack = list(reversed(scope.children))
    while stack:
        node = stack.pop()
        if node.tag in landmark_tags:
            total += len(node.text)
            continue
        stack.extend(reversed(node.children))
    return total


def analyze_landmarks(doc: HTMLDocument) -> LandmarkSignals:
    """
    Reports which landmark elements exist and which share of the body text
    sits inside them.
    """
    present = {node.tag for node in doc.root.iter()}
    found = [tag for tag in LANDMARK_TAGS if tag in present]

    scope = doc.scope
    total_text = max(len(scope.text), 1)
    landmark_text = _topmost_landmark_text_length(scope)

    # Half-up rounding, then clamp to a percentage
    coverage = math.floor(landmark_text / total_text * 100 + 0.5)
    coverage = min(max(coverage, 0), 100)

    return LandmarkSignals(found=found, coverage_percent=coverage)


# -------- Generic containers --------

def calculate_div_ratio(doc: HTMLDocument) -> float:
    """
    Share of generic containers (div/span) among generic plus semantic elements.
    The +1 in the denominator keeps the ratio defined (and below 1) for any document.
    """
    div_count = len(doc.root.find_all(GENERIC_CONTAINER_TAGS))
    semantic_count = len(doc.root.find_all(SEMANTIC_TAGS))
    return div_count / (div_count + semantic_count + 1)


# -------- Links --------

def count_link_issues(doc: HTMLDocument) -> int:
    """Number of anchors flagged by at least one registered link check."""
    return sum(1 for node in doc.root.find_all(["a"]) if DOMRegistry.run_checks(node))


# -------- Time / Lists / Tables / Language --------

def analyze_time_elements(doc: HTMLDocument) -> TimeSignals:
    times = doc.root.find_all(["time"])
    return TimeSignals(
        total=len(times),
        with_datetime=sum(1 for node in times if node.has_attr("datetime"))
    )


def analyze_lists(doc: HTMLDocument) -> ListSignals:
    counts = {kind: 0 for kind in LIST_TAGS.values()}
    for node in doc.root.find_all(list(LIST_TAGS)):
        counts[LIST_TAGS[node.tag]] += 1
    return ListSignals(total=sum(counts.values()), **counts)


def analyze_tables(doc: HTMLDocument) -> TableSignals:
    tables: List[TableElement] = doc.root.find_all(["table"])
    return TableSignals(
        total=len(tables),
        with_headers=sum(1 for table in tables if table.has_headers)
    )


def has_lang_attribute(doc: HTMLDocument) -> bool:
    """True when the root <html> element declares a language."""
    return doc.html is not None and doc.html.has_attr("lang")


# -------- Images --------

def analyze_images(doc: HTMLDocument) -> ImageResult:
    """Classifies every <img> by alt state and counts its loading/markup hints."""
    images: List[ImageElement] = doc.root.find_all(["img"])

    by_status = {"present": 0, "empty": 0, "missing": 0}
    for img in images:
        by_status[img.alt_status] += 1

    return ImageResult(
        total=len(images),
        with_alt=by_status["present"],
        empty_alt=by_status["empty"],
        missing_alt=by_status["missing"],
        in_figure=sum(1 for img in images if img.in_figure),
        with_dimensions=sum(1 for img in images if img.has_dimensions),
        with_srcset=sum(1 for img in images if img.has_srcset),
        with_lazy_loading=sum(1 for img in images if img.is_lazy),
    )


# -------- Classification --------

def score_semantics(
        headings: HeadingSignals,
        landmarks: LandmarkSignals,
        div_ratio: float,
        link_issues: int
) -> int:
    """Accumulates the 0-100 score from the four independent gates."""
    score = 0
    if headings.h1_count == 1 and not headings.has_skips:
        score += SCORE_HEADINGS
    if landmarks.coverage_percent >= LANDMARK_COVERAGE_THRESHOLD:
        score += SCORE_LANDMARKS
    if div_ratio < DIV_RATIO_THRESHOLD:
        score += SCORE_DIV_RATIO
    if link_issues == 0:
        score += SCORE_LINKS
    return score


def classify_semantics(score: int) -> str:
    if score >= EXPLICIT_THRESHOLD:
        return "explicit"
    if score >= PARTIAL_THRESHOLD:
        return "partial"
    return "opaque"


def check_semantics(source: Union[str, HTMLDocument]) -> SemanticResult:
    """
    Extracts all semantic signals from one HTML sample.

    Args:
        source: Raw HTML or a document already parsed by the DOMBuilder.

    Returns:
        SemanticResult: measured signals plus the rubric classification.
    """
    doc = as_document(source)

    headings = analyze_headings(doc)
    landmarks = analyze_landmarks(doc)
    div_ratio = calculate_div_ratio(doc)
    link_issues = count_link_issues(doc)

    score = score_semantics(headings, landmarks, div_ratio, link_issues)
    classification = classify_semantics(score)
    logger.debug("Semantic score %d -> %s", score, classification)

    return SemanticResult(
        classification=classification,
        headings=headings,
        landmarks=landmarks,
        div_ratio=div_ratio,
        link_issues=link_issues,
        time_elements=analyze_time_elements(doc),
        lists=analyze_lists(doc),
        tables=analyze_tables(doc),
        lang_attribute=has_lang_attribute(doc),
        images=analyze_images(doc),
    )
