# src/analyzer/dom/builder.py
import logging
from typing import List, Union
from bs4 import BeautifulSoup, Tag

from analyzer.constants import TEXT_TAGS
from .models import HTMLDocument
from .core import ElementBase, text_content
from .registry import DOMRegistry

logger = logging.getLogger(__name__)

DOCUMENT_TAG = "#document"


class DOMBuilder:
    """
    Builder responsible for parsing raw HTML into a structured HTMLDocument model.
    Each fetched sample is parsed exactly once; analyzers share the resulting tree.
    """

    def __init__(self):
        """Initializes the builder and ensures the DOMRegistry is populated."""
        DOMRegistry.discover()

    def parse_doc(self, html: str) -> HTMLDocument:
        """
        Parses raw HTML content into an HTMLDocument.

        Args:
            html (str): The raw HTML string.

        Returns:
            HTMLDocument: The simplified tree. Empty input yields an empty root without body.
        """
        if not html or not html.strip():
            return HTMLDocument(root=ElementBase(tag=DOCUMENT_TAG))

        # Basic cleanup of potentially dirty HTML (e.g., BOM)
        clean_html = html.replace('\ufeff', '').strip()
        # html5lib builds the tree the way browsers do: implied <body>, implicitly closed <p>/<li>
        soup = BeautifulSoup(clean_html, "html5lib")

        root = self._build_tree(soup)
        root.tag = DOCUMENT_TAG
        root.text = text_content(soup)

        doc = HTMLDocument(
            root=root,
            html=root.find('html'),
            body=root.find('body'),
        )
        logger.debug(
            "Parsed document: %d chars, body=%s",
            len(clean_html), doc.body is not None
        )
        return doc

    def _build_tree(self, top: Tag) -> ElementBase:
        """
        Builds a simplified element tree from a BeautifulSoup Tag.

        Runs as an explicit post-order walk: unclosed tags in real-world markup
        can nest deeper than Python's recursion limit.
        """
        stack = [(top, iter(top.children), [])]
        while True:
            tag, pending, children = stack[-1]
            child = next((c for c in pending if isinstance(c, Tag)), None)
            if child is not None:
                stack.append((child, iter(child.children), []))
                continue

            stack.pop()
            element = self._make_element(tag, children)
            if not stack:
                return element
            stack[-1][2].append(element)

    @staticmethod
    def _make_element(tag: Tag, children: List[ElementBase]) -> ElementBase:
        # Retrieve specific parser from registry if available
        parser = DOMRegistry.get_parser(tag.name)
        if parser:
            return parser(tag, children)

        # Fallback for generic elements
        text = text_content(tag) if tag.name in TEXT_TAGS else ""
        return ElementBase(tag=tag.name, attrs=tag.attrs, text=text, children=children)


def as_document(source: Union[str, HTMLDocument]) -> HTMLDocument:
    """Accepts raw HTML or an already parsed document."""
    if isinstance(source, HTMLDocument):
        return source
    return DOMBuilder().parse_doc(source)
