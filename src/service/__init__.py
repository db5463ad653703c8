"""Strategy builder service API."""

from src.service.strategy_builder_service import (
    BuildStatus,
    StrategyBuilderService,
    StrategyBuildResult,
    StrategyTranslator,
    create_strategy_builder_service,
)

__all__ = [
    "BuildStatus",
    "StrategyBuilderService",
    "StrategyBuildResult",
    "StrategyTranslator",
    "create_strategy_builder_service",
]
