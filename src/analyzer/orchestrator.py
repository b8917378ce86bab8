# src/analyzer/orchestrator.py
import logging
from typing import Sequence

from analyzer.compare import compare
from analyzer.dom.builder import DOMBuilder
from analyzer.metrics import compute_dom_metrics
from analyzer.model import AnalysisResult
from analyzer.normalizer import normalize
from analyzer.semantics import check_semantics

logger = logging.getLogger(__name__)


def analyze(html_samples: Sequence[str], url: str) -> AnalysisResult:
    """
    Runs the full analysis over the HTML of N fetches of the same URL.

    Every sample is fingerprinted for the structural comparison; DOM metrics
    and semantic signals are taken from the first sample only.

    Args:
        html_samples: Non-empty, ordered HTML texts (fetch order).
        url: The analyzed URL, copied into the result.

    Raises:
        ValueError: If no sample is supplied.
    """
    if not html_samples:
        raise ValueError("analyze() requires at least one HTML sample.")

    builder = DOMBuilder()
    documents = [builder.parse_doc(html) for html in html_samples]

    fingerprints = [normalize(doc) for doc in documents]
    structure = compare(fingerprints, compute_dom_metrics(documents[0]))
    semantics = check_semantics(documents[0])

    logger.debug(
        "Analyzed %s over %d sample(s): structure=%s semantics=%s",
        url, len(documents), structure.classification, semantics.classification
    )
    return AnalysisResult(url=url, structure=structure, semantics=semantics)
