# src/analyzer/interpretation.py
"""
Maps measured results to cautious statements about what they may mean for
machine readers. Reads only fields of StructureResult / SemanticResult; never
measures anything and never tells the reader what to change.
"""
import math
from typing import List

from analyzer.model import ImageResult, Interpretation, SemanticResult, StructureResult


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def _round(value: float) -> int:
    """Half-up rounding (Python's round() rounds halves to even)."""
    return math.floor(value + 0.5)


def _percent(part: int, total: int) -> int:
    return _round(part / total * 100) if total else 0


# -------- Structure --------

def interpret_consistency(structure: StructureResult, fetch_count: int) -> Interpretation:
    category = "Structure Consistency"
    if structure.classification == "deterministic":
        if fetch_count == 1:
            return Interpretation(
                category=category,
                finding="Single fetch completed",
                implication="Baseline captured; multiple fetches are required to verify consistency across visits.",
            )
        return Interpretation(
            category=category,
            finding=f"Identical across {fetch_count} fetches",
            implication="Machines can expect consistent content representation on each visit.",
        )
    if structure.classification == "mostly-deterministic":
        return Interpretation(
            category=category,
            finding=f"{structure.difference_count} minor variation(s) detected",
            implication="Structure is largely stable but machines may encounter small differences between visits.",
        )
    return Interpretation(
        category=category,
        finding=f"{structure.difference_count} structural difference(s) detected",
        implication=(
            "Machines may encounter varying content representations, "
            "which can complicate parsing and indexing."
        ),
    )


def interpret_depth(structure: StructureResult) -> List[Interpretation]:
    finding = f"{structure.max_depth} levels of nesting"
    if structure.max_depth >= 15:
        implication = "Deep nesting may require machines to traverse multiple layers to infer context."
    elif structure.max_depth >= 10:
        implication = "Moderate nesting depth; machines may need to traverse several layers to infer context."
    else:
        return []
    return [Interpretation(category="Structure Depth", finding=finding, implication=implication)]


def interpret_sections(structure: StructureResult) -> Interpretation:
    category = "Structure Sections"
    sections = structure.top_level_sections
    if sections >= 3:
        return Interpretation(
            category=category,
            finding=f"{sections} top-level sections",
            implication=(
                "Clear top-level segmentation allows machines to identify major content regions "
                "early during parsing."
            ),
        )
    if sections > 0:
        return Interpretation(
            category=category,
            finding=_plural(sections, "top-level section"),
            implication=(
                "Limited top-level segmentation; machines may need to infer content region boundaries "
                "from other cues."
            ),
        )
    return Interpretation(
        category=category,
        finding="No top-level sections",
        implication=(
            "Without explicit top-level segmentation, machines must infer content region boundaries "
            "from context."
        ),
    )


def interpret_shadow_dom(structure: StructureResult) -> List[Interpretation]:
    if structure.custom_elements <= 0:
        return []
    return [Interpretation(
        category="Structure Shadow DOM",
        finding=_plural(structure.custom_elements, "shadow DOM host"),
        implication="Content inside shadow DOM boundaries is not visible to standard document traversal methods.",
    )]


# -------- Semantics --------

def interpret_headings(semantics: SemanticResult) -> Interpretation:
    category = "Semantic Headings"
    headings = semantics.headings
    if headings.h1_count == 1 and not headings.has_skips:
        finding = "1 H1, sequential hierarchy"
        implication = "Document outline can be reliably parsed for topic identification and navigation."
    elif headings.h1_count == 0:
        finding = "No H1 element present"
        implication = (
            "Machines cannot identify the primary topic from markup and may rely on heuristics "
            "or content analysis."
        )
    elif headings.h1_count > 1:
        finding = f"{headings.h1_count} H1 elements present"
        implication = "Multiple primary headings can create ambiguity about document structure and topic hierarchy."
    else:
        finding = "Heading hierarchy has gaps"
        implication = "Automated tools may need to reconstruct the intended outline structure from context."
    return Interpretation(category=category, finding=finding, implication=implication)


def interpret_landmarks(semantics: SemanticResult) -> Interpretation:
    coverage = semantics.landmarks.coverage_percent
    if coverage >= 80:
        implication = "Content regions are explicitly defined, enabling reliable navigation and content extraction."
    elif coverage >= 50:
        implication = "Some content areas are explicitly defined; others may require contextual interpretation."
    else:
        implication = "Machines often need to infer content boundaries from visual cues or surrounding context."
    return Interpretation(
        category="Semantic Landmarks",
        finding=f"{coverage}% within semantic regions",
        implication=implication,
    )


def interpret_markup(semantics: SemanticResult) -> Interpretation:
    div_percent = _round(semantics.div_ratio * 100)
    if semantics.div_ratio > 0.6:
        implication = (
            "Structural meaning often relies on class names or visual presentation rather than semantic markup."
        )
    elif semantics.div_ratio > 0.4:
        implication = "Balance between semantic and presentational markup; some interpretation may be needed."
    else:
        implication = "Semantic elements predominate, providing clear structural cues for automated parsing."
    return Interpretation(
        category="Semantic Markup",
        finding=f"{div_percent}% generic containers",
        implication=implication,
    )


def interpret_links(semantics: SemanticResult) -> Interpretation:
    if semantics.link_issues > 0:
        return Interpretation(
            category="Semantic Links",
            finding=f"{semantics.link_issues} non-descriptive link(s)",
            implication="Link purpose may need to be inferred from surrounding text or context.",
        )
    return Interpretation(
        category="Semantic Links",
        finding="All links have descriptive text",
        implication="Link destinations can be understood without additional context.",
    )


def interpret_time(semantics: SemanticResult) -> List[Interpretation]:
    total = semantics.time_elements.total
    with_datetime = semantics.time_elements.with_datetime
    if total == 0:
        return []

    if with_datetime == total:
        finding = f"{_plural(total, 'time element')} with datetime"
        implication = "Machine-readable timestamps allow unambiguous date extraction without parsing natural language."
    elif with_datetime > 0:
        finding = f"{with_datetime}/{total} time elements with datetime"
        implication = "Some timestamps are machine-readable; others require natural language date parsing."
    else:
        finding = f"{_plural(total, 'time element')} without datetime"
        implication = (
            "Time elements lack machine-readable datetime attributes, requiring natural language date parsing."
        )
    return [Interpretation(category="Semantic Time", finding=finding, implication=implication)]


def interpret_lists(semantics: SemanticResult) -> List[Interpretation]:
    if semantics.lists.total == 0:
        return []
    return [Interpretation(
        category="Semantic Lists",
        finding=_plural(semantics.lists.total, "list structure"),
        implication=(
            "List markup signals enumerable content, allowing machines to identify item boundaries "
            "without heuristics."
        ),
    )]


def interpret_tables(semantics: SemanticResult) -> List[Interpretation]:
    without_headers = semantics.tables.total - semantics.tables.with_headers
    if without_headers <= 0:
        return []
    return [Interpretation(
        category="Semantic Tables",
        finding=f"{_plural(without_headers, 'table')} without header markup",
        implication="Tables without header markup require machines to infer which cells are labels versus data.",
    )]


def interpret_language(semantics: SemanticResult) -> Interpretation:
    if semantics.lang_attribute:
        return Interpretation(
            category="Semantic Language",
            finding="Language declared",
            implication=(
                "Language declaration allows machines to apply appropriate text processing "
                "and tokenization rules."
            ),
        )
    return Interpretation(
        category="Semantic Language",
        finding="No language declared",
        implication="Without a lang attribute, machines must detect the document language through content analysis.",
    )


def interpret_images(images: ImageResult) -> List[Interpretation]:
    if images.total == 0:
        return []

    out: List[Interpretation] = []
    if images.missing_alt == 0:
        out.append(Interpretation(
            category="Image Accessibility",
            finding="All images have alt attributes",
            implication=(
                "Machines can distinguish between meaningful images (with descriptions) "
                "and decorative ones (empty alt)."
            ),
        ))
    else:
        percent = _percent(images.missing_alt, images.total)
        out.append(Interpretation(
            category="Image Accessibility",
            finding=f"{_plural(images.missing_alt, 'image')} missing alt attribute ({percent}%)",
            implication="Machines cannot determine whether these images convey meaning or are purely decorative.",
        ))

    if images.in_figure > 0:
        percent = _percent(images.in_figure, images.total)
        out.append(Interpretation(
            category="Image Context",
            finding=f"{_plural(images.in_figure, 'image')} in figure elements ({percent}%)",
            implication=(
                "Figure markup provides semantic grouping and potential caption association "
                "for machine understanding."
            ),
        ))

    if images.empty_alt > 0 and images.with_alt > 0:
        out.append(Interpretation(
            category="Image Classification",
            finding=f"{images.with_alt} meaningful, {_plural(images.empty_alt, 'decorative image')}",
            implication=(
                "Clear distinction between content images and decorative elements allows machines "
                "to prioritize relevant visuals."
            ),
        ))
    return out


def interpret(structure: StructureResult, semantics: SemanticResult, fetch_count: int) -> List[Interpretation]:
    """
    Builds the ordered list of interpretations for one analysis.

    Args:
        structure: Structural comparison result.
        semantics: Semantic signals of the first sample.
        fetch_count: Number of samples the structure result is based on.
    """
    interpretations: List[Interpretation] = [interpret_consistency(structure, fetch_count)]
    interpretations.append(interpret_headings(semantics))
    interpretations.append(interpret_landmarks(semantics))
    interpretations.extend(interpret_depth(structure))
    interpretations.append(interpret_sections(structure))
    interpretations.extend(interpret_shadow_dom(structure))
    interpretations.append(interpret_markup(semantics))
    interpretations.append(interpret_links(semantics))
    interpretations.extend(interpret_time(semantics))
    interpretations.extend(interpret_lists(semantics))
    interpretations.extend(interpret_tables(semantics))
    interpretations.append(interpret_language(semantics))
    interpretations.extend(interpret_images(semantics.images))
    return interpretations
