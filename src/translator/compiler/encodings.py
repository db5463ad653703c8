"""Numeric encodings used by the downstream signal format.

These values are part of the execution system's wire contract and must not
change.
"""

from src.translator.registries.signals import PARAMETRIC_SIGNAL_TYPE

DEFAULT_SIGNAL_TYPE_CODE = 2

# Signal implementation type -> "Type" code
SIGNAL_TYPE_CODES: dict[str, int] = {
    "SignalValueRAW": 2,
    "SignalValueSMA": 2,
    "SignalValueEMA": 2,
    "SignalValueRSI": 2,
    "SignalValueHighest": 2,
    "SignalValueLowest": 2,
    "SignalValuePercentChange": 2,
    PARAMETRIC_SIGNAL_TYPE: 7,
}

# Combination operator -> "CrOp" code
CROSS_OP_CODES: dict[str, int] = {
    "OFF": 0,
    "AND": 1,
    "OR": 2,
    "XOR": 3,
    "IF": 4,
}

RULE_MODE_SIGNAL = "Signal"
DEFAULT_RULE1_OPERATION = "="
DEFAULT_CROSS_OP = "OFF"

# Argument names that contribute to the generated signal key
KEY_ARGS = ("Length", "Depth")

DEFAULT_ARG_MIN = 0.0
DEFAULT_ARG_MAX = 1_000_000.0

# Placeholder instrument for every compiled signal; strategy settings are
# not threaded into per-signal output.
DEFAULT_SYMBOL_NAME = "@ES"
DEFAULT_SYMBOL_TIMEFRAME = "1D"


def signal_type_code(signal_type: str) -> int:
    return SIGNAL_TYPE_CODES.get(signal_type, DEFAULT_SIGNAL_TYPE_CODE)


def cross_op_code(cross_op: str) -> int:
    return CROSS_OP_CODES.get(cross_op, 0)


def rule_mode_code(mode: str | None) -> int:
    """0 for "Signal", 1 for anything else (including missing)."""
    return 0 if mode == RULE_MODE_SIGNAL else 1
