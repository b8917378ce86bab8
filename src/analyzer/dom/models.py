# src/analyzer/dom/models.py
from typing import Optional
from pydantic import BaseModel
from .core import ElementBase


class HTMLDocument(BaseModel):
    """
    Represents one parsed HTML sample.

    The `root` element is a synthetic '#document' node holding the whole tree;
    `html` and `body` point into that tree when the markup contains them.
    """
    root: ElementBase
    html: Optional[ElementBase] = None
    body: Optional[ElementBase] = None

    @property
    def scope(self) -> ElementBase:
        """The body when present, otherwise the whole document."""
        return self.body if self.body is not None else self.root
