"""Signal capability definitions.

Declares the curated set of signals the translator is allowed to use.
The entries here are the single source of truth for signal IDs, their
arguments, and how many child signals they need.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

PARAMETRIC_SIGNAL_TYPE = "SignalParametric"
RAW_SIGNAL_TYPE = "SignalValueRAW"


class ArgType(str, Enum):
    """Kinds of values a signal argument accepts."""

    NUMBER = "number"
    STRING = "string"
    ENUM = "enum"


@dataclass(frozen=True)
class ArgDefinition:
    """Definition of an argument for a signal."""

    key: str
    type: ArgType = ArgType.NUMBER
    min: float | None = None
    max: float | None = None
    optional: bool = False
    description: str = ""


@dataclass(frozen=True)
class SignalCapability:
    """A signal the downstream execution system knows how to run."""

    id: str
    name: str
    category: str
    description: str
    signal_type: str
    aliases: tuple[str, ...] = ()
    required_args: tuple[ArgDefinition, ...] = ()
    required_children: int = 0
    child_descriptions: tuple[str, ...] = ()

    @property
    def is_parametric(self) -> bool:
        """True for composite rule signals carrying operator/mode fields."""
        return self.signal_type == PARAMETRIC_SIGNAL_TYPE


def _raw(id: str, name: str, description: str) -> SignalCapability:
    return SignalCapability(
        id=id,
        name=name,
        category="Data",
        description=description,
        signal_type=RAW_SIGNAL_TYPE,
    )


def _length(description: str = "Period length") -> ArgDefinition:
    return ArgDefinition(key="Length", type=ArgType.NUMBER, min=1, description=description)


# Registration order matters: it is the search order and, for aliases shared
# by several signals, the first entry wins.
SIGNAL_CAPABILITIES: tuple[SignalCapability, ...] = (
    # Raw market data
    _raw("raw.close", "Close", "Closing price"),
    _raw("raw.open", "Open", "Opening price"),
    _raw("raw.high", "High", "High price"),
    _raw("raw.low", "Low", "Low price"),
    _raw("raw.volume", "Volume", "Trading volume"),
    _raw("raw.vix", "VIX", "VIX volatility index"),
    # Moving averages
    SignalCapability(
        id="sma",
        name="SMA",
        aliases=("Simple Moving Average", "Moving Average"),
        category="Indicator",
        description="Simple Moving Average - calculates average price over a period",
        signal_type="SignalValueSMA",
        required_args=(_length(),),
        required_children=1,
        child_descriptions=("Source signal (e.g., Close)",),
    ),
    SignalCapability(
        id="ema",
        name="EMA",
        aliases=("Exponential Moving Average",),
        category="Indicator",
        description="Exponential Moving Average - gives more weight to recent prices",
        signal_type="SignalValueEMA",
        required_args=(_length(),),
        required_children=1,
        child_descriptions=("Source signal (e.g., Close)",),
    ),
    # Technical indicators
    SignalCapability(
        id="rsi",
        name="RSI",
        aliases=("Relative Strength Index",),
        category="Indicator",
        description="Relative Strength Index - momentum oscillator (0-100)",
        signal_type="SignalValueRSI",
        required_args=(_length("Period length (typically 14)"),),
        required_children=1,
        child_descriptions=("Source signal (typically Close)",),
    ),
    SignalCapability(
        id="atr",
        name="ATR",
        aliases=("Average True Range",),
        category="Indicator",
        description="Average True Range - measures market volatility",
        signal_type="SignalValueRangeStochasticATR",
        required_args=(_length("Period length (typically 14)"),),
        required_children=2,
        child_descriptions=("High signal", "Low signal"),
    ),
    SignalCapability(
        id="highest",
        name="Highest",
        aliases=("Max", "High"),
        category="Indicator",
        description="Returns the highest value over a lookback period",
        signal_type="SignalValueHighest",
        required_args=(_length("Lookback period"),),
        required_children=1,
        child_descriptions=("Source signal",),
    ),
    SignalCapability(
        id="lowest",
        name="Lowest",
        aliases=("Min", "Low"),
        category="Indicator",
        description="Returns the lowest value over a lookback period",
        signal_type="SignalValueLowest",
        required_args=(_length("Lookback period"),),
        required_children=1,
        child_descriptions=("Source signal",),
    ),
    SignalCapability(
        id="percentchange",
        name="PercentChange",
        aliases=("Percent Change", "PctChange"),
        category="Indicator",
        description="Calculates percentage change over a specified depth (bars)",
        signal_type="SignalValuePercentChange",
        required_args=(
            ArgDefinition(
                key="Depth",
                type=ArgType.NUMBER,
                min=1,
                description="Number of bars back to compare",
            ),
        ),
        required_children=1,
        child_descriptions=("Source signal",),
    ),
    # Rules / comparisons
    SignalCapability(
        id="parametric",
        name="Parametric",
        aliases=("Rule", "Condition", "Comparison"),
        category="Logic",
        description=(
            "Composite signal that evaluates rules and combines them with "
            "logical operations (AND, OR, etc.)"
        ),
        signal_type=PARAMETRIC_SIGNAL_TYPE,
        required_args=(
            ArgDefinition(
                key="Rule1 Base Offset",
                description="Offset for first signal in Rule1 (bars)",
            ),
            ArgDefinition(
                key="Rule1 Second Offset",
                description="Offset for second signal in Rule1 (bars)",
            ),
            ArgDefinition(
                key="Rule1 Value",
                optional=True,
                description="Constant value for Rule1 if comparing to value",
            ),
        ),
        required_children=2,
        child_descriptions=(
            "First signal (Rule1 left side)",
            "Second signal or value (Rule1 right side)",
        ),
    ),
    SignalCapability(
        id="macd",
        name="MACD",
        category="Indicator",
        description="Moving Average Convergence Divergence",
        signal_type="SignalValueMACD",
        required_args=(_length("Signal smoothing length"),),
        required_children=2,
        child_descriptions=("Short EMA", "Long EMA"),
    ),
)
