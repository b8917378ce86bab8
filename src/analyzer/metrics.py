# src/analyzer/metrics.py
import logging
from typing import Union

from analyzer.constants import SECTION_TAGS, SHADOW_ROOT_ATTRS, SKIP_TAGS
from analyzer.dom.builder import as_document
from analyzer.dom.core import ElementBase
from analyzer.dom.models import HTMLDocument
from analyzer.model import DomMetrics

logger = logging.getLogger(__name__)


def is_shadow_host(node: ElementBase) -> bool:
    """
    An element counts as a shadow DOM host when it is an autonomous custom
    element (hyphenated tag name) or carries a declarative shadow root.
    """
    if "-" in node.tag:
        return True
    return any(
        child.tag == "template" and any(child.has_attr(a) for a in SHADOW_ROOT_ATTRS)
        for child in node.children
    )


def compute_dom_metrics(source: Union[str, HTMLDocument]) -> DomMetrics:
    """
    Counts visible element nodes, maximum nesting depth, top-level sections and
    shadow DOM hosts below <body>.

    Subtrees rooted at a skip tag (script, style, svg, ...) are never entered.
    A document without a body yields all-zero metrics.
    """
    doc = as_document(source)
    body = doc.body
    if body is None:
        return DomMetrics()

    dom_nodes = 0
    max_depth = 0
    custom_elements = 0

    stack = [(body, 1)]
    while stack:
        node, depth = stack.pop()
        if node.tag in SKIP_TAGS:
            continue

        dom_nodes += 1
        max_depth = max(max_depth, depth)
        if is_shadow_host(node):
            custom_elements += 1

        stack.extend((child, depth + 1) for child in node.children)

    top_level_sections = sum(1 for child in body.children if child.tag in SECTION_TAGS)

    logger.debug(
        "DOM metrics: nodes=%d depth=%d sections=%d hosts=%d",
        dom_nodes, max_depth, top_level_sections, custom_elements
    )
    return DomMetrics(
        dom_nodes=dom_nodes,
        max_depth=max_depth,
        top_level_sections=top_level_sections,
        custom_elements=custom_elements,
    )
