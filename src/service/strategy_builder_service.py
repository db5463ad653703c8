"""Strategy builder service - orchestrates natural language to signals.

This service:
1. Translates natural language to IR via the external translator
2. Stops if the translator asked for clarification
3. Validates the IR against the capability catalog
4. Compiles entry and exit signal trees

Data Flow:
    Translator.translate(text) → IntermediateRepresentation
    IRValidator.validate(ir) → ValidationResult
    SignalCompiler.compile_signals(...) → list[CompiledSignal] (entry, exit)

Every outcome, including unexpected exceptions, is returned as a
StrategyBuildResult; nothing raised below this layer reaches the caller.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from src.translator.compiler import CompiledSignal, SignalCompiler
from src.translator.ir import IntermediateRepresentation, StrategySettingsIR
from src.translator.ir_validator import IRValidator, ValidationError
from src.translator.llm_translator import LLMTranslator
from src.translator.registries import CapabilityCatalog, get_default_catalog

logger = logging.getLogger(__name__)


class StrategyTranslator(Protocol):
    """Anything that turns natural language into IR.

    Implementations raise TranslationError on failure.
    """

    async def translate(self, natural_language: str) -> IntermediateRepresentation: ...


class BuildStatus(str, Enum):
    """Outcome of a build."""

    SUCCESS = "success"
    NEEDS_CLARIFICATION = "needs_clarification"
    VALIDATION_FAILED = "validation_failed"
    FAILED = "failed"


@dataclass
class StrategyBuildResult:
    """Result of building a strategy."""

    success: bool
    ir: IntermediateRepresentation | None = None
    entry_signals: list[CompiledSignal] | None = None
    exit_signals: list[CompiledSignal] | None = None
    settings: StrategySettingsIR | None = None
    validation_errors: list[ValidationError] | None = None
    error_message: str | None = None
    clarification_request: str | None = None
    exception: Exception | None = None

    @property
    def status(self) -> BuildStatus:
        if self.success:
            return BuildStatus.SUCCESS
        if self.clarification_request:
            return BuildStatus.NEEDS_CLARIFICATION
        if self.validation_errors:
            return BuildStatus.VALIDATION_FAILED
        return BuildStatus.FAILED

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible document using the wire field names."""

        def signals(items: list[CompiledSignal] | None) -> list[dict] | None:
            return [s.to_wire() for s in items] if items is not None else None

        data: dict[str, Any] = {
            "Success": self.success,
            "Status": self.status.value,
            "EntrySignals": signals(self.entry_signals),
            "ExitSignals": signals(self.exit_signals),
            "Settings": (
                self.settings.model_dump(mode="json", by_alias=True) if self.settings else None
            ),
            "ErrorMessage": self.error_message,
            "ClarificationRequest": self.clarification_request,
        }
        if self.validation_errors is not None:
            data["ValidationErrors"] = [e.to_dict() for e in self.validation_errors]
        return data

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


class StrategyBuilderService:
    """Runs the translate → validate → compile pipeline.

    The catalog is shared by the validator and compiler; pass the same
    instance the translator's prompt was built from.
    """

    def __init__(
        self,
        catalog: CapabilityCatalog,
        translator: StrategyTranslator | None = None,
        validator: IRValidator | None = None,
        compiler: SignalCompiler | None = None,
    ):
        self.catalog = catalog
        self.translator = translator
        self.validator = validator or IRValidator(catalog)
        self.compiler = compiler or SignalCompiler(catalog)

    async def build_strategy(self, natural_language: str) -> StrategyBuildResult:
        """Build a strategy from natural language."""
        try:
            if self.translator is None:
                return StrategyBuildResult(
                    success=False, error_message="No translator configured"
                )

            logger.info("Translating strategy description to IR...")
            ir = await self.translator.translate(natural_language)
        except Exception as e:
            return self._failure(e)

        return self.build_from_ir(ir)

    def build_from_ir(self, ir: IntermediateRepresentation) -> StrategyBuildResult:
        """Validate and compile an IR that is already available."""
        try:
            if ir.strategy is not None and ir.strategy.clarification_request:
                logger.info("Translator requested clarification")
                return StrategyBuildResult(
                    success=False,
                    ir=ir,
                    clarification_request=ir.strategy.clarification_request,
                )

            validation = self.validator.validate(ir)
            if not validation.is_valid:
                logger.info(f"IR failed validation with {len(validation.errors)} error(s)")
                return StrategyBuildResult(
                    success=False,
                    ir=ir,
                    validation_errors=validation.errors,
                    error_message=validation.error_message(),
                )

            entry_signals = self.compiler.compile_signals(ir.strategy.entry_signals)
            exit_signals = self.compiler.compile_signals(ir.strategy.exit_signals)
            logger.info(
                f"Compiled {len(entry_signals)} entry and {len(exit_signals)} exit signal(s)"
            )

            return StrategyBuildResult(
                success=True,
                ir=ir,
                entry_signals=entry_signals,
                exit_signals=exit_signals,
                settings=ir.strategy.settings,
            )
        except Exception as e:
            return self._failure(e, ir)

    def _failure(
        self, error: Exception, ir: IntermediateRepresentation | None = None
    ) -> StrategyBuildResult:
        logger.error(f"Strategy build failed - {error}", exc_info=True)
        return StrategyBuildResult(
            success=False,
            ir=ir,
            error_message=f"Error building strategy: {error}",
            exception=error,
        )


def create_strategy_builder_service(
    catalog: CapabilityCatalog | None = None,
) -> StrategyBuilderService:
    """Create a service wired to the environment-configured LLM translator."""
    if catalog is None:
        catalog = get_default_catalog()
    return StrategyBuilderService(catalog, translator=LLMTranslator.from_env(catalog))
