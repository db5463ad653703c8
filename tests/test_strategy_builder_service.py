"""Tests for StrategyBuilderService orchestration."""

import asyncio
import json

import pytest

from src.service.strategy_builder_service import (
    BuildStatus,
    StrategyBuilderService,
    create_strategy_builder_service,
)
from src.translator.errors import TranslationError
from src.translator.ir import IntermediateRepresentation, SignalNodeIR, StrategySettingsIR
from src.translator.llm_translator import LLMTranslator
from tests.conftest import FakeTranslator, close, make_ir, parametric, sma


class ExplodingValidator:
    def validate(self, ir):
        raise RuntimeError("validator blew up")


def build(service: StrategyBuilderService, text: str = "Buy when Close > 200 SMA"):
    return asyncio.run(service.build_strategy(text))


def test_success_compiles_entry_and_exit(catalog):
    """A valid IR is compiled and settings pass through."""
    settings = StrategySettingsIR(symbol="AAPL", timeframe="1D", start_date="2020-01-01")
    ir = make_ir(entry=[parametric()], exit=[sma(50)], settings=settings)
    translator = FakeTranslator(ir)
    service = StrategyBuilderService(catalog, translator)

    result = build(service, "text")

    assert translator.calls == ["text"]
    assert result.success
    assert result.status == BuildStatus.SUCCESS
    assert [s.key for s in result.entry_signals] == ["Parametric"]
    assert [s.key for s in result.exit_signals] == ["SMA_50"]
    assert result.settings == settings
    assert result.ir is ir
    assert result.error_message is None


def test_clarification_short_circuits(catalog):
    """Clarification requests skip validation and compilation."""
    ir = make_ir(
        entry=[SignalNodeIR(catalog_id="not-a-signal")],
        clarification_request="What symbol should this strategy trade?",
    )
    service = StrategyBuilderService(catalog, FakeTranslator(ir))

    result = build(service)

    assert not result.success
    assert result.status == BuildStatus.NEEDS_CLARIFICATION
    assert result.clarification_request == "What symbol should this strategy trade?"
    assert result.validation_errors is None
    assert result.entry_signals is None


def test_empty_clarification_is_ignored(catalog):
    """An empty clarification string does not stop the pipeline."""
    ir = make_ir(entry=[sma(10)], clarification_request="")
    service = StrategyBuilderService(catalog, FakeTranslator(ir))

    assert build(service).success


def test_validation_failure_reports_all_errors(catalog):
    """Invalid IR returns the full error list and is not compiled."""
    ir = make_ir(entry=[SignalNodeIR(catalog_id="sma", args={}, children=[close()])], exit=[sma(0)])
    service = StrategyBuilderService(catalog, FakeTranslator(ir))

    result = build(service)

    assert result.status == BuildStatus.VALIDATION_FAILED
    assert [e.path for e in result.validation_errors] == [
        "EntrySignals.Args",
        "ExitSignals.Args.Length",
    ]
    assert result.error_message.startswith("Validation failed:\n- EntrySignals.Args:")
    assert result.entry_signals is None


def test_translation_error_is_reported(catalog):
    """Translator failures become a failed result, not an exception."""
    error = TranslationError("OpenAI API error (500): boom")
    service = StrategyBuilderService(catalog, FakeTranslator(error=error))

    result = build(service)

    assert result.status == BuildStatus.FAILED
    assert result.error_message == "Error building strategy: OpenAI API error (500): boom"
    assert result.exception is error
    assert result.ir is None


def test_unexpected_error_is_caught(catalog):
    """Errors from any stage are converted to a failure result."""
    service = StrategyBuilderService(
        catalog, FakeTranslator(make_ir(entry=[sma(10)])), validator=ExplodingValidator()
    )

    result = build(service)

    assert result.status == BuildStatus.FAILED
    assert result.error_message == "Error building strategy: validator blew up"
    assert isinstance(result.exception, RuntimeError)


def test_missing_strategy_is_validation_failure(catalog):
    """An IR without Strategy fails validation instead of crashing."""
    service = StrategyBuilderService(catalog, FakeTranslator(IntermediateRepresentation()))

    result = build(service)

    assert result.status == BuildStatus.VALIDATION_FAILED
    assert result.validation_errors[0].path == "Strategy"


def test_no_translator_configured(catalog):
    """Building from text without a translator fails cleanly."""
    result = build(StrategyBuilderService(catalog))

    assert result.status == BuildStatus.FAILED
    assert result.error_message == "No translator configured"


def test_build_from_ir_skips_translation(catalog):
    """build_from_ir runs validation and compilation only."""
    service = StrategyBuilderService(catalog)

    result = service.build_from_ir(make_ir(entry=[sma(20)]))

    assert result.success
    assert result.exit_signals == []


def test_to_dict_uses_wire_keys(catalog):
    """The result document exposes wire field names."""
    settings = StrategySettingsIR(symbol="SPY")
    service = StrategyBuilderService(catalog)

    data = service.build_from_ir(make_ir(entry=[close()], settings=settings)).to_dict()

    assert data["Success"] is True
    assert data["Status"] == "success"
    assert data["EntrySignals"][0]["$type"] == "SignalValueRAW"
    assert data["ExitSignals"] == []
    assert data["Settings"]["Symbol"] == "SPY"
    assert data["ErrorMessage"] is None
    assert data["ClarificationRequest"] is None
    assert "ValidationErrors" not in data


def test_to_json_includes_validation_errors(catalog):
    """Validation failures serialize their errors."""
    service = StrategyBuilderService(catalog)

    data = json.loads(service.build_from_ir(make_ir(entry=[sma(0)])).to_json())

    assert data["Success"] is False
    assert data["Status"] == "validation_failed"
    assert data["ValidationErrors"] == [
        {
            "Path": "EntrySignals.Args.Length",
            "Message": "Argument 'Length' must be >= 1 for signal 'sma'",
            "Kind": "argument_bound",
        }
    ]
    assert data["EntrySignals"] is None


def test_create_service_from_env(monkeypatch):
    """Factory wires an LLM translator from environment settings."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-factory")

    service = create_strategy_builder_service()

    assert isinstance(service.translator, LLMTranslator)
    assert service.translator.api_key == "sk-factory"
    assert service.translator.catalog is service.catalog
    assert service.validator.catalog is service.catalog
    assert service.compiler.catalog is service.catalog


@pytest.mark.parametrize(
    "node",
    [
        SignalNodeIR(catalog_id="raw.close"),
        SignalNodeIR(catalog_id="sma", args={"Length": 200}, children=[close()]),
    ],
)
def test_end_to_end_scenarios(catalog, node):
    """Validated single-node strategies compile successfully."""
    service = StrategyBuilderService(catalog, FakeTranslator(make_ir(entry=[node])))

    result = build(service)

    assert result.success
    assert result.entry_signals[0].type_code == 2
