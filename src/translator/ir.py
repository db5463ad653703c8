"""Intermediate Representation (IR) for strategy translation.

This module defines the typed IR that sits between the natural-language
translator and the signal compiler. It is optimized for the translator to
produce, not for execution.

Attributes are snake_case; the wire format (what the translator emits and
what the HTTP API accepts) uses the PascalCase aliases, e.g.:

    {
      "Version": "1.0",
      "Strategy": {
        "EntrySignals": [{"CatalogId": "sma", "Args": {"Length": 200}, "Children": [...]}],
        "ExitSignals": [],
        "Settings": null,
        "ClarificationRequest": null
      }
    }
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr

IR_VERSION = "1.0"

# Scalar argument value. Booleans and containers are rejected at parse time.
ArgValue = StrictInt | StrictFloat | StrictStr


class _WireModel(BaseModel):
    """Accepts both wire aliases and attribute names."""

    model_config = ConfigDict(populate_by_name=True)


# =============================================================================
# Signal tree
# =============================================================================


class SignalNodeIR(_WireModel):
    """A node in a signal tree.

    Children bind positionally to the capability's child descriptions.
    The rule fields are only meaningful for parametric signals.
    """

    catalog_id: str = Field(default="", alias="CatalogId")
    args: dict[str, ArgValue] = Field(default_factory=dict, alias="Args")
    children: list[SignalNodeIR] = Field(default_factory=list, alias="Children")

    rule1_mode: str | None = Field(default=None, alias="Rule1Mode")  # "Signal" or "Value"
    rule1_operation: str | None = Field(default=None, alias="Rule1Operation")
    cross_op: str | None = Field(default=None, alias="CrossOp")  # OFF, AND, OR, XOR, IF
    rule2_mode: str | None = Field(default=None, alias="Rule2Mode")
    rule2_operation: str | None = Field(default=None, alias="Rule2Operation")


SignalNodeIR.model_rebuild()


# =============================================================================
# Strategy
# =============================================================================


class StrategySettingsIR(_WireModel):
    """Strategy settings. Passed through to the caller unmodified."""

    symbol: str | None = Field(default=None, alias="Symbol")
    timeframe: str | None = Field(default=None, alias="Timeframe")
    start_date: str | None = Field(default=None, alias="StartDate")
    end_date: str | None = Field(default=None, alias="EndDate")
    position_size: float | None = Field(default=None, alias="PositionSize")
    max_positions: int | None = Field(default=None, alias="MaxPositions")
    max_hold_days: int | None = Field(default=None, alias="MaxHoldDays")
    entry_mode: str | None = Field(default=None, alias="EntryMode")  # "Market", "Limit"
    exit_mode: str | None = Field(default=None, alias="ExitMode")


class StrategyIR(_WireModel):
    """Entry and exit signal trees plus settings.

    A non-empty clarification_request means the translator could not build a
    complete strategy and is asking the user a question instead.
    """

    entry_signals: list[SignalNodeIR] = Field(default_factory=list, alias="EntrySignals")
    exit_signals: list[SignalNodeIR] = Field(default_factory=list, alias="ExitSignals")
    settings: StrategySettingsIR | None = Field(default=None, alias="Settings")
    clarification_request: str | None = Field(default=None, alias="ClarificationRequest")


class IntermediateRepresentation(_WireModel):
    """Versioned IR root.

    version is a free string so that unsupported versions reach the
    validator instead of failing at parse time.
    """

    version: str = Field(default=IR_VERSION, alias="Version")
    strategy: StrategyIR | None = Field(default=None, alias="Strategy")

    def to_wire(self) -> dict:
        """Serialize to a JSON-compatible dict using wire field names."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return self.model_dump_json(indent=indent, by_alias=True)

    @classmethod
    def from_json(cls, json_str: str | bytes) -> IntermediateRepresentation:
        """Deserialize from JSON string."""
        return cls.model_validate_json(json_str)


def format_arg_value(value: ArgValue | float) -> str:
    """Render an argument value the way it appears in keys and messages.

    Whole floats drop their fractional part (200.0 -> "200"). Very large whole
    floats therefore print every digit (1e20 -> "100000000000000000000");
    the result is only used in debug keys and messages.
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
