from typing import Optional, List
from bs4 import Tag
from ..core import ElementBase, ElementDefinition, CheckResult, signal_spec, text_content
from analyzer.constants import GENERIC_LINK_TEXT, JAVASCRIPT_HREF_PREFIX


class LinkElement(ElementBase):
    """
    Data model for anchor (<a>) tags.
    """
    tag: str = "a"

    @property
    def href(self) -> Optional[str]:
        """Convenience property to access the href attribute."""
        return self.attrs.get('href')

    @property
    def label(self) -> str:
        """Link text, trimmed and lowercased. Inner whitespace is kept as written."""
        return self.text.strip().lower()

    @property
    def has_described_image(self) -> bool:
        """True if the link wraps an <img> carrying an alt attribute."""
        return any(node.tag == 'img' and node.has_attr('alt') for node in self.iter_descendants())


def parse_link(tag: Tag, children: List[ElementBase]) -> LinkElement:
    """Parses a <a> tag into the LinkElement model."""
    return LinkElement(
        tag="a",
        attrs=tag.attrs,
        text=text_content(tag),
        children=children
    )


# --- CHECKS ---


@signal_spec(codes=["LINK_EMPTY_TEXT", "LINK_GENERIC_TEXT", "LINK_JAVASCRIPT_HREF"])
def check_link_text(node: LinkElement) -> CheckResult:
    """
    Flags links whose purpose cannot be read from the link itself.
    Returns at most one code per link; the first matching condition wins.
    """
    label = node.label
    if not label and not node.has_described_image:
        return ["LINK_EMPTY_TEXT"]
    if label in GENERIC_LINK_TEXT:
        return ["LINK_GENERIC_TEXT"]
    if (node.href or "").startswith(JAVASCRIPT_HREF_PREFIX):
        return ["LINK_JAVASCRIPT_HREF"]
    return []


# --- ELEMENT DEFINITION ---

DEFINITION = ElementDefinition(
    tag_names=["a"],
    model=LinkElement,
    parser=parse_link,
    checks=[check_link_text]
)
