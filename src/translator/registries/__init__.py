"""Signal capability catalog and its curated entries."""

from .catalog import CapabilityCatalog, get_default_catalog
from .signals import (
    PARAMETRIC_SIGNAL_TYPE,
    SIGNAL_CAPABILITIES,
    ArgDefinition,
    ArgType,
    SignalCapability,
)

__all__ = [
    "CapabilityCatalog",
    "get_default_catalog",
    "PARAMETRIC_SIGNAL_TYPE",
    "SIGNAL_CAPABILITIES",
    "ArgDefinition",
    "ArgType",
    "SignalCapability",
]
