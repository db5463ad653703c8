"""Compiler package for IR to signal compilation.

Modules:
- encodings        - type codes, operator codes and defaults of the signal format
- compiled         - output models (CompiledSignal, CompiledArg, SymbolRef)
- signal_compiler  - recursive IR node -> CompiledSignal transform
"""

from src.translator.compiler.compiled import CompiledArg, CompiledSignal, SymbolRef
from src.translator.compiler.signal_compiler import SignalCompiler, generate_signal_key

__all__ = [
    "CompiledArg",
    "CompiledSignal",
    "SignalCompiler",
    "SymbolRef",
    "generate_signal_key",
]
