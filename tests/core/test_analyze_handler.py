# tests/core/test_analyze_handler.py
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from analyzer.interpretation import interpret
from analyzer.orchestrator import analyze
from docsignals.app import main
from docsignals.core.controllers.analysis_controller import AnalysisError
from docsignals.core.handlers.analyze_handler import format_report, handle_analyze
from docsignals.core.managers.config_manager import config_manager
from docsignals.model import AnalysisReport
from fetcher.model import FetchErrorType, FetchResult
from fetcher.utils.url_utils import InvalidUrlError

URL = "https://example.com/"
PAGE = (
    '<html lang="en"><body><main><h1>Title</h1>'
    '<figure><img src="a.png" alt=""></figure><a href="/more">Read more</a></main></body></html>'
)


@pytest.fixture(autouse=True)
def restore_config():
    yield
    config_manager.reset()


@pytest.fixture
def report():
    result = analyze([PAGE, PAGE], URL)
    return AnalysisReport(
        url=URL,
        fetch_count=3,
        samples_used=2,
        result=result,
        interpretations=interpret(result.structure, result.semantics, 2),
        failures=[FetchResult.failure(URL, "Request timed out", FetchErrorType.TIMEOUT)],
    )


@pytest.fixture
def controller(report):
    mock_controller = MagicMock()
    mock_controller.run = AsyncMock(return_value=report)
    return mock_controller


def test_handle_analyze_prints_text_report(controller, capsys):
    code = handle_analyze(["example.com", "-n", "3"], controller=controller)
    out = capsys.readouterr().out

    assert code == 0
    controller.run.assert_awaited_once_with("example.com", 3)
    assert "DocSignals report for https://example.com/" in out
    assert "Samples: 2 of 3 fetch(es) succeeded" in out
    assert "[Structure Consistency] Identical across 2 fetches" in out
    assert "[Semantic Links] 1 non-descriptive link(s)" in out
    assert "timeout: Request timed out" in out


def test_handle_analyze_json_output(controller, capsys):
    """De JSON-uitvoer gebruikt camelCase sleutels."""
    code = handle_analyze(["example.com", "--json"], controller=controller)
    data = json.loads(capsys.readouterr().out)

    assert code == 0
    assert data["url"] == URL
    assert data["samplesUsed"] == 2
    assert data["result"]["structure"]["differenceCount"] == 0
    assert data["result"]["semantics"]["images"]["emptyAlt"] == 1
    assert data["interpretations"][0]["category"] == "Structure Consistency"


def test_handle_analyze_uses_configured_default_fetch_count(controller):
    config_manager.set_nested("analysis.default_fetch_count", 5)
    handle_analyze(["example.com"], controller=controller)
    controller.run.assert_awaited_once_with("example.com", 5)


def test_handle_analyze_invalid_url(controller, capsys):
    controller.run = AsyncMock(side_effect=InvalidUrlError("HTTP(S) only"))
    code = handle_analyze(["ftp://example.com"], controller=controller)

    assert code == 1
    assert "❌ HTTP(S) only" in capsys.readouterr().out


def test_handle_analyze_all_fetches_failed(controller, capsys):
    controller.run = AsyncMock(side_effect=AnalysisError("Unable to connect"))
    code = handle_analyze(["example.com"], controller=controller)

    assert code == 1
    assert "❌ Analysis failed: Unable to connect" in capsys.readouterr().out


def test_handle_analyze_applies_overrides(controller):
    code = handle_analyze(["example.com", "--set", "analysis.fetch_delay_ms=0"], controller=controller)
    assert code == 0
    assert config_manager.get_nested("analysis.fetch_delay_ms") == 0


def test_handle_analyze_rejects_malformed_override(controller, capsys):
    code = handle_analyze(["example.com", "--set", "no-equals-sign"], controller=controller)

    assert code == 1
    assert "Expected KEY=VALUE" in capsys.readouterr().out
    controller.run.assert_not_called()


def test_handle_analyze_rejects_uncastable_override(controller, capsys):
    """'abc' past niet in een int-instelling: exit 1 en de analyse start niet."""
    code = handle_analyze(["example.com", "--set", "analysis.fetch_delay_ms=abc"], controller=controller)

    assert code == 1
    assert "❌" in capsys.readouterr().out
    assert config_manager.get_nested("analysis.fetch_delay_ms") != "abc"
    controller.run.assert_not_called()


def test_handle_analyze_default_fetch_count_override_applies(controller):
    code = handle_analyze(["example.com", "--set", "analysis.default_fetch_count=7"], controller=controller)

    assert code == 0
    controller.run.assert_awaited_once_with("example.com", 7)


def test_handle_analyze_explicit_fetches_beat_override(controller):
    handle_analyze(["example.com", "-n", "2", "--set", "analysis.default_fetch_count=7"], controller=controller)
    controller.run.assert_awaited_once_with("example.com", 2)


def test_handle_analyze_invalid_settings_exit_cleanly(capsys):
    """Een controller die de instellingen afkeurt geeft exit 1 in plaats van een traceback."""
    with patch(
        "docsignals.core.handlers.analyze_handler.AnalysisController",
        side_effect=ValueError("fetch_delay_ms must be >= 0"),
    ):
        code = handle_analyze(["example.com", "--no-progress"])

    assert code == 1
    assert "❌ Invalid configuration: fetch_delay_ms must be >= 0" in capsys.readouterr().out


def test_handle_analyze_usage_error(controller):
    assert handle_analyze([], controller=controller) == 2
    assert handle_analyze(["example.com", "-n", "three"], controller=controller) == 2


def test_handle_analyze_help(controller, capsys):
    assert handle_analyze(["--help"], controller=controller) == 0
    assert "--fetches" in capsys.readouterr().out


def test_format_report_without_failures(report):
    text = format_report(report.model_copy(update={"failures": []}))
    assert "FAILED FETCHES" not in text
    assert "Landmarks:           main" in text


def test_main_delegates_to_handler():
    with patch("docsignals.app.handle_analyze", return_value=0) as mock_handler:
        assert main(["example.com", "--json"]) == 0
    mock_handler.assert_called_once_with(["example.com", "--json"])
