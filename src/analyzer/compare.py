# src/analyzer/compare.py
from itertools import combinations
from typing import Sequence

from analyzer.constants import DETERMINISM_LEVELS, UNSTABLE
from analyzer.model import DomMetrics, NormalizedNode, StructureResult


def trees_equal(a: NormalizedNode, b: NormalizedNode) -> bool:
    """Shallow equality: same tag and the same child tags in the same order."""
    if a.tag != b.tag:
        return False
    if len(a.child_tags) != len(b.child_tags):
        return False
    return all(x == y for x, y in zip(a.child_tags, b.child_tags))


def count_differences(fingerprints: Sequence[NormalizedNode]) -> int:
    """Number of unordered fingerprint pairs that are not structurally equal."""
    return sum(1 for a, b in combinations(fingerprints, 2) if not trees_equal(a, b))


def classify_structure(difference_count: int) -> str:
    return DETERMINISM_LEVELS.get(difference_count, UNSTABLE)


def compare(fingerprints: Sequence[NormalizedNode], dom_metrics: DomMetrics) -> StructureResult:
    """
    Compares the fingerprints of repeated fetches and merges the result with
    the metrics of the first sample.

    With fewer than two fingerprints there is nothing to compare, so the
    result is always 'deterministic'.
    """
    differences = count_differences(fingerprints)

    return StructureResult(
        classification=classify_structure(differences),
        difference_count=differences,
        dom_nodes=dom_metrics.dom_nodes,
        max_depth=dom_metrics.max_depth,
        top_level_sections=dom_metrics.top_level_sections,
        custom_elements=dom_metrics.custom_elements,
    )
