# src/analyzer/constants.py
"""
Fixed heuristic tables used by the analyzers.

These are part of the measurement rubric and are deliberately not read from
settings.json: changing them changes what a classification means.
"""
from typing import Dict, FrozenSet, Tuple

# --- DOM metrics ---
# Never descended into while counting nodes/depth.
SKIP_TAGS: FrozenSet[str] = frozenset({"script", "style", "noscript", "svg", "path"})

# Direct children of <body> that count as a top-level section.
SECTION_TAGS: FrozenSet[str] = frozenset({"header", "nav", "main", "section", "article", "aside", "footer"})

# Attributes marking a <template> as a declarative shadow root.
SHADOW_ROOT_ATTRS: Tuple[str, ...] = ("shadowrootmode", "shadowroot")

# --- Semantics ---
HEADING_TAGS: Tuple[str, ...] = ("h1", "h2", "h3", "h4", "h5", "h6")

# Order matters: `landmarks.found` is reported in this order.
LANDMARK_TAGS: Tuple[str, ...] = ("main", "nav", "header", "footer", "aside", "article")

SEMANTIC_TAGS: Tuple[str, ...] = ("main", "nav", "header", "footer", "aside", "article", "section", "figure")

# Elements whose text content is kept on the tree (everything else stores "").
TEXT_TAGS: FrozenSet[str] = frozenset(LANDMARK_TAGS) | {"body", "a", *HEADING_TAGS}

GENERIC_CONTAINER_TAGS: Tuple[str, ...] = ("div", "span")

GENERIC_LINK_TEXT: FrozenSet[str] = frozenset({"click here", "here", "read more", "more", "learn more", "link"})

JAVASCRIPT_HREF_PREFIX = "javascript:"

LIST_TAGS: Dict[str, str] = {"ol": "ordered", "ul": "unordered", "dl": "description"}

# --- Semantic score rubric ---
SCORE_HEADINGS = 25
SCORE_LANDMARKS = 30
SCORE_DIV_RATIO = 25
SCORE_LINKS = 20

LANDMARK_COVERAGE_THRESHOLD = 80
DIV_RATIO_THRESHOLD = 0.6

EXPLICIT_THRESHOLD = 75
PARTIAL_THRESHOLD = 40

# --- Structure comparison ---
# differenceCount -> classification; anything above the last key is 'unstable'.
DETERMINISM_LEVELS: Dict[int, str] = {0: "deterministic", 1: "mostly-deterministic"}
UNSTABLE = "unstable"
