"""Natural language to signal translator.

The translation pipeline:
  1. Natural language → LLMTranslator → IntermediateRepresentation (pydantic models)
  2. IntermediateRepresentation → IRValidator (checked against the CapabilityCatalog)
  3. Validated IR → SignalCompiler → CompiledSignal trees for the execution system

The catalog is built once and shared read-only by the translator prompt,
the validator and the compiler.
"""

from .compiler import CompiledSignal, SignalCompiler
from .errors import StrategyBuilderError, TranslationError, UnknownCapabilityError
from .ir import (
    IR_VERSION,
    IntermediateRepresentation,
    SignalNodeIR,
    StrategyIR,
    StrategySettingsIR,
)
from .ir_validator import IRValidator, ValidationError, ValidationResult, validate_ir
from .llm_translator import LLMTranslator
from .registries import CapabilityCatalog, SignalCapability, get_default_catalog

__all__ = [
    "CapabilityCatalog",
    "CompiledSignal",
    "IntermediateRepresentation",
    "IR_VERSION",
    "IRValidator",
    "LLMTranslator",
    "SignalCapability",
    "SignalCompiler",
    "SignalNodeIR",
    "StrategyBuilderError",
    "StrategyIR",
    "StrategySettingsIR",
    "TranslationError",
    "UnknownCapabilityError",
    "ValidationError",
    "ValidationResult",
    "get_default_catalog",
    "validate_ir",
]
