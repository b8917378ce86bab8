# tests/analyzer/test_orchestrator.py
import pytest

from analyzer.orchestrator import analyze

PAGE = (
    '<html lang="en"><body><header><nav><a href="/">Home</a></nav></header>'
    "<main><h1>Title</h1><p>Content</p></main><footer>f</footer></body></html>"
)
PAGE_WITH_EXTRA_SECTION = PAGE.replace("<footer>", "<section>Promo</section><footer>")


def test_identical_fetches_are_deterministic():
    result = analyze([PAGE, PAGE, PAGE], "https://example.com/")

    assert result.url == "https://example.com/"
    assert result.structure.classification == "deterministic"
    assert result.structure.difference_count == 0


def test_one_divergent_fetch_makes_structure_unstable():
    """Fetch #2 heeft een extra sectie: 2 van de 3 paren verschillen."""
    result = analyze([PAGE, PAGE_WITH_EXTRA_SECTION, PAGE], "https://example.com/")

    assert result.structure.difference_count == 2
    assert result.structure.classification == "unstable"


def test_documents_without_body_tag_are_still_compared():
    """Zonder <body> tag vergelijken we de impliciete body; een afwijkende fetch valt op."""
    stable = "<title>T</title><main><h1>A</h1></main>"
    divergent = "<title>T</title><main><h1>A</h1></main><aside>Ad</aside>"
    result = analyze([stable, divergent, stable], "https://example.com/")

    assert result.structure.difference_count == 2
    assert result.structure.classification == "unstable"
    assert result.structure.dom_nodes == 3  # body, main, h1


def test_metrics_and_semantics_come_from_first_sample():
    result = analyze([PAGE_WITH_EXTRA_SECTION, PAGE], "https://example.com/")

    assert result.structure.classification == "mostly-deterministic"
    assert result.structure.top_level_sections == 4  # header, main, section, footer
    assert result.semantics.landmarks.found == ["main", "nav", "header", "footer"]
    # "Promo" sits outside the landmarks: 17 of 22 characters -> 77%
    assert result.semantics.landmarks.coverage_percent == 77
    assert result.semantics.classification == "partial"


def test_single_sample_is_deterministic():
    result = analyze([PAGE], "https://example.com/")
    assert result.structure.classification == "deterministic"
    assert result.structure.dom_nodes == 8


def test_analyze_requires_a_sample():
    with pytest.raises(ValueError):
        analyze([], "https://example.com/")


def test_result_exports_camel_case_keys():
    dumped = analyze([PAGE], "https://example.com/").model_dump(by_alias=True)

    assert "differenceCount" in dumped["structure"]
    assert "topLevelSections" in dumped["structure"]
    assert "coveragePercent" in dumped["semantics"]["landmarks"]
    assert "divRatio" in dumped["semantics"]
    assert "missingAlt" in dumped["semantics"]["images"]
