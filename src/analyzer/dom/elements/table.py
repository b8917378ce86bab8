from typing import List
from bs4 import Tag
from ..core import ElementBase, ElementDefinition


class TableElement(ElementBase):
    """<table> model; `has_headers` is set when a <thead> or any <th> is present."""
    tag: str = "table"
    has_headers: bool = False


def parse_table(tag: Tag, children: List[ElementBase]) -> TableElement:
    return TableElement(
        tag="table",
        attrs=tag.attrs,
        children=children,
        has_headers=tag.find(['thead', 'th']) is not None
    )


DEFINITION = ElementDefinition(
    tag_names=["table"],
    model=TableElement,
    parser=parse_table,
)
