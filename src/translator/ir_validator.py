"""IR Validator - checks an IR tree against the capability catalog.

Walks every entry and exit signal tree and reports every problem it finds
as data. Validation never raises and never stops at the first error; the
only pruning is that a node whose catalog ID does not resolve is reported
once and its subtree is skipped, since nothing below it can be checked.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from .ir import IR_VERSION, IntermediateRepresentation, SignalNodeIR, format_arg_value
from .registries import ArgType, CapabilityCatalog, get_default_catalog

logger = logging.getLogger(__name__)

RULE_MODES = ("Signal", "Value")


class ValidationErrorKind(str, Enum):
    """Category of a validation error."""

    SCHEMA = "schema"
    UNKNOWN_CAPABILITY = "unknown_capability"
    MISSING_ARGUMENT = "missing_argument"
    ARGUMENT_TYPE = "argument_type"
    ARGUMENT_BOUND = "argument_bound"
    CHILD_COUNT = "child_count"
    PARAMETRIC_FIELD = "parametric_field"


@dataclass
class ValidationError:
    """A single validation error."""

    path: str  # Where in the IR the error occurred, e.g. EntrySignals.Children[0].Args
    message: str  # What's wrong
    kind: ValidationErrorKind = ValidationErrorKind.SCHEMA

    def to_dict(self) -> dict[str, str]:
        return {"Path": self.path, "Message": self.message, "Kind": self.kind.value}


@dataclass
class ValidationResult:
    """Result of validating an IR."""

    errors: list[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(
        self,
        path: str,
        message: str,
        kind: ValidationErrorKind = ValidationErrorKind.SCHEMA,
    ) -> None:
        self.errors.append(ValidationError(path=path, message=message, kind=kind))

    def error_message(self) -> str:
        """Human-readable summary, one line per error."""
        if self.is_valid:
            return "Validation passed"
        lines = [f"- {e.path}: {e.message}" for e in self.errors]
        return "Validation failed:\n" + "\n".join(lines)


def _is_number(value: object) -> bool:
    # bool is an int subclass but is not a number here
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class IRValidator:
    """Validates IR against a capability catalog."""

    def __init__(self, catalog: CapabilityCatalog):
        self.catalog = catalog

    def validate(self, ir: IntermediateRepresentation) -> ValidationResult:
        """Run all validations and return result."""
        result = ValidationResult()

        # A version mismatch does not stop the structural checks
        if ir.version != IR_VERSION:
            result.add_error("Version", "Unsupported IR version")

        if ir.strategy is None:
            result.add_error("Strategy", "Strategy is required")
            return result

        for node in ir.strategy.entry_signals:
            self._validate_node(node, "EntrySignals", result)

        for node in ir.strategy.exit_signals:
            self._validate_node(node, "ExitSignals", result)

        logger.debug(f"Validated IR: {len(result.errors)} error(s)")
        return result

    def _validate_node(self, node: SignalNodeIR, path: str, result: ValidationResult) -> None:
        """Validate a node and, recursively, its children."""
        capability = self.catalog.lookup(node.catalog_id)
        if capability is None:
            result.add_error(
                path,
                f"Unknown signal catalog ID: {node.catalog_id}",
                ValidationErrorKind.UNKNOWN_CAPABILITY,
            )
            return

        signal_id = node.catalog_id

        for arg in capability.required_args:
            if arg.optional:
                continue

            if arg.key not in node.args:
                result.add_error(
                    f"{path}.Args",
                    f"Missing required argument '{arg.key}' for signal '{signal_id}'",
                    ValidationErrorKind.MISSING_ARGUMENT,
                )
                continue

            if arg.type != ArgType.NUMBER:
                continue

            value = node.args[arg.key]
            arg_path = f"{path}.Args.{arg.key}"
            if not _is_number(value):
                result.add_error(
                    arg_path,
                    f"Argument '{arg.key}' must be a number for signal '{signal_id}'",
                    ValidationErrorKind.ARGUMENT_TYPE,
                )
                continue

            number = float(value)
            if arg.min is not None and number < arg.min:
                result.add_error(
                    arg_path,
                    f"Argument '{arg.key}' must be >= {format_arg_value(float(arg.min))} "
                    f"for signal '{signal_id}'",
                    ValidationErrorKind.ARGUMENT_BOUND,
                )
            if arg.max is not None and number > arg.max:
                result.add_error(
                    arg_path,
                    f"Argument '{arg.key}' must be <= {format_arg_value(float(arg.max))} "
                    f"for signal '{signal_id}'",
                    ValidationErrorKind.ARGUMENT_BOUND,
                )

        # Only a deficit is an error; extra children are allowed
        if len(node.children) < capability.required_children:
            result.add_error(
                f"{path}.Children",
                f"Signal '{signal_id}' requires {capability.required_children} children, "
                f"but {len(node.children)} provided",
                ValidationErrorKind.CHILD_COUNT,
            )

        if capability.is_parametric:
            self._validate_parametric(node, path, result)

        for i, child in enumerate(node.children):
            self._validate_node(child, f"{path}.Children[{i}]", result)

    def _validate_parametric(self, node: SignalNodeIR, path: str, result: ValidationResult) -> None:
        """Check the rule fields of a parametric signal.

        Rule2Mode and Rule2Operation are not checked.
        """
        signal_id = node.catalog_id

        if not node.rule1_mode:
            result.add_error(
                f"{path}.Rule1Mode",
                f"Parametric signal '{signal_id}' requires Rule1Mode",
                ValidationErrorKind.PARAMETRIC_FIELD,
            )
        elif node.rule1_mode not in RULE_MODES:
            result.add_error(
                f"{path}.Rule1Mode",
                f"Rule1Mode must be 'Signal' or 'Value' for signal '{signal_id}'",
                ValidationErrorKind.PARAMETRIC_FIELD,
            )

        if not node.rule1_operation:
            result.add_error(
                f"{path}.Rule1Operation",
                f"Parametric signal '{signal_id}' requires Rule1Operation",
                ValidationErrorKind.PARAMETRIC_FIELD,
            )

        if not node.cross_op:
            result.add_error(
                f"{path}.CrossOp",
                f"Parametric signal '{signal_id}' requires CrossOp",
                ValidationErrorKind.PARAMETRIC_FIELD,
            )


def validate_ir(
    ir: IntermediateRepresentation, catalog: CapabilityCatalog | None = None
) -> ValidationResult:
    """Convenience function to validate an IR."""
    if catalog is None:
        catalog = get_default_catalog()
    return IRValidator(catalog).validate(ir)
