# src/analyzer/normalizer.py
from typing import Union

from analyzer.dom.builder import as_document
from analyzer.dom.models import HTMLDocument
from analyzer.model import NormalizedNode


def normalize(source: Union[str, HTMLDocument]) -> NormalizedNode:
    """
    Reduces a document to its body fingerprint: the body tag and the ordered
    tag names of the body's direct children.

    A sample without a body yields a body fingerprint with no children.
    """
    doc = as_document(source)
    if doc.body is None:
        return NormalizedNode(tag="body", child_tags=[])

    return NormalizedNode(
        tag=doc.body.tag,
        child_tags=[child.tag for child in doc.body.children]
    )
