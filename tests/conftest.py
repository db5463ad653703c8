"""Shared test fixtures and helpers."""

import pytest

from src.translator.compiler import SignalCompiler
from src.translator.ir import IntermediateRepresentation, SignalNodeIR, StrategyIR
from src.translator.ir_validator import IRValidator
from src.translator.registries import CapabilityCatalog


class FakeTranslator:
    """Returns a canned IR (or raises) and records calls."""

    def __init__(self, ir: IntermediateRepresentation | None = None, error: Exception | None = None):
        self.ir = ir
        self.error = error
        self.calls: list[str] = []

    async def translate(self, natural_language: str) -> IntermediateRepresentation:
        self.calls.append(natural_language)
        if self.error is not None:
            raise self.error
        return self.ir


def close() -> SignalNodeIR:
    """A raw.close leaf."""
    return SignalNodeIR(catalog_id="raw.close")


def sma(length=200, source: SignalNodeIR | None = None) -> SignalNodeIR:
    """An SMA over source (default Close)."""
    return SignalNodeIR(catalog_id="sma", args={"Length": length}, children=[source or close()])


def parametric(
    left: SignalNodeIR | None = None,
    right: SignalNodeIR | None = None,
    **fields,
) -> SignalNodeIR:
    """A complete "left > right" parametric rule; override fields via kwargs."""
    node = {
        "catalog_id": "parametric",
        "args": {"Rule1 Base Offset": 0, "Rule1 Second Offset": 0},
        "children": [left or close(), right or sma()],
        "rule1_mode": "Signal",
        "rule1_operation": ">",
        "cross_op": "OFF",
    }
    node.update(fields)
    return SignalNodeIR(**node)


def make_ir(
    entry: list[SignalNodeIR] | None = None,
    exit: list[SignalNodeIR] | None = None,
    version: str = "1.0",
    **strategy_fields,
) -> IntermediateRepresentation:
    """Wrap signal lists into an IR document."""
    return IntermediateRepresentation(
        version=version,
        strategy=StrategyIR(
            entry_signals=entry or [],
            exit_signals=exit or [],
            **strategy_fields,
        ),
    )


@pytest.fixture
def catalog() -> CapabilityCatalog:
    return CapabilityCatalog()


@pytest.fixture
def validator(catalog) -> IRValidator:
    return IRValidator(catalog)


@pytest.fixture
def compiler(catalog) -> SignalCompiler:
    return SignalCompiler(catalog)
