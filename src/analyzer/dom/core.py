from typing import Dict, Any, List, Callable, Type, Optional, Iterator, Sequence
from pydantic import BaseModel, Field
from bs4 import NavigableString, Tag
from bs4.element import PreformattedString


def signal_spec(codes: List[str]):
    """
    Decorator to declare which signal codes a specific element check returns.
    Facilitates auto-discovery by the DOMRegistry.
    """
    def decorator(func):
        func.defined_codes = codes
        return func
    return decorator


def text_content(tag: Tag) -> str:
    """
    Text of a subtree as the DOM's `textContent` reports it: every text node,
    script/style/template text included. Comments, doctypes and other
    preformatted strings are left out.
    """
    return "".join(
        s for s in tag.descendants
        if isinstance(s, NavigableString) and not isinstance(s, PreformattedString)
    )


class ElementBase(BaseModel):
    """
    Base data model representing a generic DOM element in the simplified tree.
    `text` is only filled in for elements whose text is measured.
    """
    tag: str
    attrs: Dict[str, Any] = Field(default_factory=dict)
    text: str = ""
    children: List['ElementBase'] = Field(default_factory=list)

    def has_attr(self, name: str) -> bool:
        return name in self.attrs

    def get_attr(self, name: str, default: str = "") -> str:
        """Returns an attribute as a string (multi-valued attributes are joined)."""
        value = self.attrs.get(name)
        if value is None:
            return default
        if isinstance(value, (list, tuple)):
            return " ".join(value)
        return str(value)

    def iter(self) -> Iterator['ElementBase']:
        """Yields this element and all descendants in document order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def iter_descendants(self) -> Iterator['ElementBase']:
        for child in self.children:
            yield from child.iter()

    def find(self, tag: str) -> Optional['ElementBase']:
        """Returns the first element (self included) with the given tag."""
        for node in self.iter():
            if node.tag == tag:
                return node
        return None

    def find_all(self, tags: Sequence[str]) -> List['ElementBase']:
        """Returns all elements (self included) whose tag is in `tags`, in document order."""
        wanted = set(tags)
        return [node for node in self.iter() if node.tag in wanted]


# Type alias for check findings: list of signal codes
CheckResult = List[str]


class ElementDefinition:
    """
    Configuration object binding one or more HTML tags to a model, parser, and checks.
    """

    def __init__(
            self,
            tag_names: Sequence[str],
            model: Type[ElementBase],
            parser: Callable[[Tag, List[ElementBase]], ElementBase],
            checks: Optional[List[Callable[[Any], CheckResult]]] = None,
            possible_codes: Optional[List[str]] = None
    ):
        self.tag_names = list(tag_names)
        self.model = model
        self.parser = parser
        self.checks = checks or []

        # --- Auto-Discovery of Signal Codes ---
        final_codes = set(possible_codes or [])

        for check in self.checks:
            if hasattr(check, 'defined_codes'):
                final_codes.update(check.defined_codes)

        self.codes = sorted(final_codes)
