from typing import List, Optional
from bs4 import Tag
from ..core import ElementBase, ElementDefinition


class ImageElement(ElementBase):
    tag: str = "img"
    in_figure: bool = False

    @property
    def src(self) -> str: return self.get_attr('src')

    @property
    def alt(self) -> Optional[str]:
        # alt=None means the attribute is missing
        return self.attrs.get('alt')

    @property
    def alt_status(self) -> str:
        """'missing' (no attribute), 'empty' (alt="", decorative) or 'present'."""
        if self.alt is None:
            return "missing"
        if self.alt == "":
            return "empty"
        return "present"

    @property
    def has_dimensions(self) -> bool:
        return self.has_attr('width') and self.has_attr('height')

    @property
    def has_srcset(self) -> bool:
        return self.has_attr('srcset')

    @property
    def is_lazy(self) -> bool:
        return self.get_attr('loading').strip().lower() == "lazy"


def parse_image(tag: Tag, children: List[ElementBase]) -> ImageElement:
    return ImageElement(
        tag="img",
        attrs=tag.attrs,
        children=children,
        in_figure=tag.find_parent('figure') is not None
    )


# --- DEFINITION ---
DEFINITION = ElementDefinition(
    tag_names=["img"],
    model=ImageElement,
    parser=parse_image,
)
