"""Signal compiler.

Transforms validated IR signal trees into compiled signals. The input must
have passed IRValidator; the compiler does not re-check it and only fails
when a catalog ID cannot be resolved at all.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from src.translator.errors import UnknownCapabilityError
from src.translator.ir import SignalNodeIR, format_arg_value
from src.translator.registries import CapabilityCatalog, SignalCapability

from .compiled import CompiledArg, CompiledSignal, SymbolRef
from .encodings import (
    DEFAULT_ARG_MAX,
    DEFAULT_ARG_MIN,
    DEFAULT_CROSS_OP,
    DEFAULT_RULE1_OPERATION,
    KEY_ARGS,
    cross_op_code,
    rule_mode_code,
    signal_type_code,
)

logger = logging.getLogger(__name__)


def generate_signal_key(node: SignalNodeIR, capability: SignalCapability) -> str:
    """Generate a debugging key for a signal instance.

    Format: {name}[_{Depth}][_{Length}], e.g. "SMA_200". Not guaranteed
    unique.
    """
    parts = [capability.name]
    for key in sorted(node.args):
        if key in KEY_ARGS:
            parts.append(format_arg_value(node.args[key]))
    return "_".join(parts)


class SignalCompiler:
    """Compiles IR signal nodes into CompiledSignal trees."""

    def __init__(self, catalog: CapabilityCatalog):
        self.catalog = catalog

    def compile_signals(self, nodes: Iterable[SignalNodeIR]) -> list[CompiledSignal]:
        """Compile a list of root signal nodes, preserving order."""
        return [self.compile_node(node) for node in nodes]

    def compile_node(self, node: SignalNodeIR) -> CompiledSignal:
        """Compile one node and its subtree.

        Raises:
            UnknownCapabilityError: If the node's catalog ID does not resolve
        """
        capability = self.catalog.lookup(node.catalog_id)
        if capability is None:
            raise UnknownCapabilityError(node.catalog_id)

        signal = CompiledSignal(
            signal_type=capability.signal_type,
            key=generate_signal_key(node, capability),
            type_code=signal_type_code(capability.signal_type),
        )

        # Present when either side has arguments, even if no records result
        if node.args or capability.required_args:
            signal.args = self._compile_args(node, capability)

        if node.children:
            signal.children = [self.compile_node(child) for child in node.children]

        if capability.is_parametric:
            signal.r1_md = rule_mode_code(node.rule1_mode)
            signal.r1_op = node.rule1_operation or DEFAULT_RULE1_OPERATION
            signal.cr_op = cross_op_code(node.cross_op or DEFAULT_CROSS_OP)
            signal.r2_md = rule_mode_code(node.rule2_mode)
            signal.r2_op = node.rule2_operation
            # Exit-list signals get the same flags
            signal.entry = True
            signal.exit = False

        signal.mkt_n = 1
        signal.rqd = False
        signal.symbol_id = SymbolRef()

        logger.debug(f"Compiled {node.catalog_id} -> {signal.key}")
        return signal

    def _compile_args(self, node: SignalNodeIR, capability: SignalCapability) -> list[CompiledArg]:
        """One record per declared argument the node supplies, in catalog order."""
        args = []
        for arg in capability.required_args:
            if arg.key not in node.args:
                continue
            value = float(node.args[arg.key])
            args.append(
                CompiledArg(
                    key=arg.key,
                    value=value,
                    base_value=value,
                    base=value,
                    last=value,
                    min=arg.min if arg.min is not None else DEFAULT_ARG_MIN,
                    max=arg.max if arg.max is not None else DEFAULT_ARG_MAX,
                )
            )
        return args
