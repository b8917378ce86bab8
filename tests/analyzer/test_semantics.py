# tests/analyzer/test_semantics.py
import pytest

from analyzer.dom.builder import DOMBuilder
from analyzer.model import HeadingSignals, LandmarkSignals
from analyzer.semantics import (
    analyze_headings,
    analyze_images,
    analyze_landmarks,
    analyze_lists,
    analyze_tables,
    analyze_time_elements,
    calculate_div_ratio,
    check_semantics,
    classify_semantics,
    count_link_issues,
    has_lang_attribute,
    score_semantics,
)


@pytest.fixture
def parse():
    builder = DOMBuilder()
    return builder.parse_doc


# --- Volledige scenario's ---

def test_fully_explicit_document():
    """Eén h1, main omvat alle tekst, geen div/span en geen links: score 100."""
    html = '<html lang="en"><body><main><h1>Title</h1><p>Body text</p></main></body></html>'
    result = check_semantics(html)

    assert result.classification == "explicit"
    assert result.headings == HeadingSignals(h1_count=1, has_skips=False)
    assert result.landmarks == LandmarkSignals(found=["main"], coverage_percent=100)
    assert result.div_ratio == 0.0
    assert result.link_issues == 0
    assert result.lang_attribute is True


def test_div_soup_with_generic_links_is_opaque():
    """Geen headings, geen landmarks, alles in divs en drie 'click here' links: score 0."""
    html = (
        "<html><body><div><div>Some text <a href='/a'>click here</a></div>"
        "<div><a href='/b'>Click here</a><a href='/c'>click here</a></div></div></body></html>"
    )
    result = check_semantics(html)

    assert result.classification == "opaque"
    assert result.link_issues == 3
    assert result.headings.h1_count == 0
    assert result.landmarks.found == []
    assert result.landmarks.coverage_percent == 0
    assert result.div_ratio == pytest.approx(0.75)


def test_decorative_image_in_figure_counts_in_three_buckets():
    html = '<body><figure><img src="a.png" alt="" width="10" height="10"></figure></body>'
    images = check_semantics(html).images

    assert images.total == 1
    assert images.empty_alt == 1
    assert images.in_figure == 1
    assert images.with_dimensions == 1
    assert images.with_alt == 0
    assert images.missing_alt == 0


def test_partial_classification():
    # headings (25) + div ratio (25) + links (20), but no landmarks
    result = check_semantics("<body><h1>Title</h1><p>Text</p></body>")
    assert result.classification == "partial"


def test_empty_document_still_yields_valid_result():
    result = check_semantics("")
    assert result.headings.h1_count == 0
    assert result.landmarks.coverage_percent == 0
    assert result.div_ratio == 0.0
    assert result.lang_attribute is False
    assert result.images.total == 0


# --- Headings ---

@pytest.mark.parametrize("html,h1_count,has_skips", [
    ("<body><h1>a</h1><h2>b</h2><h3>c</h3></body>", 1, False),
    ("<body><h1>a</h1><h3>b</h3></body>", 1, True),
    ("<body><h2>a</h2><h4>b</h4></body>", 0, True),
    ("<body><h1>a</h1><h3>b</h3><h2>c</h2></body>", 1, True),
    ("<body><h3>a</h3><h2>b</h2><h1>c</h1><h1>d</h1></body>", 2, False),
    ("<body><p>no headings</p></body>", 0, False),
])
def test_analyze_headings(parse, html, h1_count, has_skips):
    assert analyze_headings(parse(html)) == HeadingSignals(h1_count=h1_count, has_skips=has_skips)


# --- Landmarks ---

def test_landmarks_found_in_fixed_order(parse):
    signals = analyze_landmarks(parse("<body><footer>f</footer><header>h</header></body>"))
    assert signals.found == ["header", "footer"]


def test_landmark_coverage_rounds_half_up(parse):
    # 1 of 8 characters -> 12.5% -> 13
    signals = analyze_landmarks(parse("<body><main>a</main>bcdefgh</body>"))
    assert signals.coverage_percent == 13


def test_nested_landmarks_are_not_counted_twice(parse):
    signals = analyze_landmarks(parse("<body><main><nav>ab</nav>cd</main></body>"))
    assert signals.found == ["main", "nav"]
    assert signals.coverage_percent == 100


def test_landmark_coverage_without_text(parse):
    signals = analyze_landmarks(parse("<body><main></main></body>"))
    assert signals.found == ["main"]
    assert signals.coverage_percent == 0


def test_landmark_coverage_counts_script_text_in_body(parse):
    """Script-tekst buiten main telt mee in de body-tekst: 50 van 450 tekens -> 11%."""
    html = "<body><main>" + "a" * 50 + "</main><script>" + "x" * 400 + "</script><!-- skipped --></body>"
    signals = analyze_landmarks(parse(html))
    assert signals.coverage_percent == 11


# --- Generic containers ---

def test_div_ratio(parse):
    assert calculate_div_ratio(parse("<body><div></div><span></span><main></main></body>")) == pytest.approx(0.5)
    assert calculate_div_ratio(parse("<body><p>x</p></body>")) == 0.0


def test_div_ratio_stays_below_one(parse):
    html = "<body>" + "<div>" * 200 + "</div>" * 200 + "</body>"
    ratio = calculate_div_ratio(parse(html))
    assert 0.0 <= ratio < 1.0


# --- Links ---

@pytest.mark.parametrize("anchor,is_issue", [
    ('<a href="/docs">Documentation</a>', False),
    ('<a href="/x"></a>', True),
    ('<a href="/x">   </a>', True),
    ('<a href="/x"><img src="logo.png" alt="Logo"></a>', False),
    ('<a href="/x"><img src="logo.png"></a>', True),
    ('<a href="/x">  Read More </a>', True),
    ('<a href="/x">Read   more</a>', False),
    ('<a href="/x">read\n   more</a>', False),
    ('<a href="/x">HERE</a>', True),
    ('<a href="javascript:void(0)">Open menu</a>', True),
    ('<a href=" JavaScript:void(0)">Open menu</a>', False),
    ('<a>Anchor without href</a>', False),
])
def test_count_link_issues(parse, anchor, is_issue):
    assert count_link_issues(parse(f"<body>{anchor}</body>")) == (1 if is_issue else 0)


def test_link_with_several_problems_counts_once(parse):
    # generic text and a javascript: href on the same anchor
    assert count_link_issues(parse('<body><a href="javascript:go()">click here</a></body>')) == 1


# --- Time / Lists / Tables / Language ---

def test_analyze_time_elements(parse):
    signals = analyze_time_elements(parse(
        '<body><time datetime="2024-01-01">Jan 1</time><time>yesterday</time></body>'
    ))
    assert (signals.total, signals.with_datetime) == (2, 1)


def test_analyze_lists(parse):
    signals = analyze_lists(parse(
        "<body><ol><li>a</li></ol><ul><li>b</li></ul><ul><li>c</li></ul>"
        "<dl><dt>d</dt><dd>e</dd></dl></body>"
    ))
    assert signals.total == 4
    assert (signals.ordered, signals.unordered, signals.description) == (1, 2, 1)


def test_analyze_tables(parse):
    signals = analyze_tables(parse(
        "<body><table><thead><tr><td>h</td></tr></thead></table>"
        "<table><tr><th>h</th></tr><tr><td>1</td></tr></table>"
        "<table><tr><td>1</td></tr></table></body>"
    ))
    assert (signals.total, signals.with_headers) == (3, 2)


@pytest.mark.parametrize("html,expected", [
    ('<html lang="nl"><body></body></html>', True),
    ('<html lang=""><body></body></html>', True),
    ("<html><body></body></html>", False),
    ('<body><div lang="en"></div></body>', False),
])
def test_has_lang_attribute(parse, html, expected):
    assert has_lang_attribute(parse(html)) is expected


# --- Images ---

def test_analyze_images_counts_hints(parse):
    images = analyze_images(parse(
        '<body><img src="a.png" alt="Cat">'
        '<img src="b.png">'
        '<img src="c.png" alt="" loading="LAZY" srcset="c2.png 2x">'
        '<img src="d.png" alt=" " width="5"></body>'
    ))

    assert images.total == 4
    assert images.with_alt == 2
    assert images.empty_alt == 1
    assert images.missing_alt == 1
    assert images.with_alt + images.empty_alt + images.missing_alt == images.total
    assert images.with_lazy_loading == 1
    assert images.with_srcset == 1
    assert images.with_dimensions == 0
    assert images.in_figure == 0


# --- Scoring ---

def test_score_semantics_gates():
    good_headings = HeadingSignals(h1_count=1, has_skips=False)
    full_landmarks = LandmarkSignals(found=["main"], coverage_percent=80)

    assert score_semantics(good_headings, full_landmarks, 0.59, 0) == 100
    assert score_semantics(good_headings, full_landmarks, 0.6, 0) == 75
    assert score_semantics(HeadingSignals(h1_count=1, has_skips=True), full_landmarks, 0.0, 1) == 55
    assert score_semantics(HeadingSignals(), LandmarkSignals(coverage_percent=79), 0.9, 2) == 0


@pytest.mark.parametrize("score,expected", [
    (100, "explicit"),
    (75, "explicit"),
    (74, "partial"),
    (40, "partial"),
    (39, "opaque"),
    (0, "opaque"),
])
def test_classify_semantics(score, expected):
    assert classify_semantics(score) == expected
