"""Strategy routes: catalog browsing, validation, compilation and building."""

import logging
from functools import lru_cache
from typing import Any

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from src.service.strategy_builder_service import (
    StrategyBuilderService,
    create_strategy_builder_service,
)
from src.translator.ir import IntermediateRepresentation
from src.translator.registries import SignalCapability

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/strategies", tags=["strategies"])
catalog_router = APIRouter(prefix="/catalog", tags=["catalog"])


@lru_cache(maxsize=1)
def get_service() -> StrategyBuilderService:
    """Get the strategy builder service (cached)."""
    return create_strategy_builder_service()


class BuildRequestModel(BaseModel):
    """Request to build a strategy from a natural-language description."""

    text: str = Field(..., min_length=1, description="Strategy description")


class ValidationResponseModel(BaseModel):
    """Validation outcome for a submitted IR."""

    is_valid: bool
    errors: list[dict[str, str]]
    message: str


def _capability_to_dict(capability: SignalCapability) -> dict[str, Any]:
    return {
        "id": capability.id,
        "name": capability.name,
        "aliases": list(capability.aliases),
        "category": capability.category,
        "description": capability.description,
        "signal_type": capability.signal_type,
        "required_args": [
            {
                "key": arg.key,
                "type": arg.type.value,
                "min": arg.min,
                "max": arg.max,
                "optional": arg.optional,
                "description": arg.description,
            }
            for arg in capability.required_args
        ],
        "required_children": capability.required_children,
        "child_descriptions": list(capability.child_descriptions),
    }


@catalog_router.get("")
async def list_capabilities(
    q: str | None = Query(default=None, description="Name or alias substring"),
    service: StrategyBuilderService = Depends(get_service),
) -> list[dict[str, Any]]:
    """List catalog signals, optionally filtered by name/alias."""
    capabilities = (
        service.catalog.search_by_name(q) if q else service.catalog.list_all()
    )
    return [_capability_to_dict(c) for c in capabilities]


@catalog_router.get("/registry", response_class=PlainTextResponse)
async def compact_registry(service: StrategyBuilderService = Depends(get_service)) -> str:
    """Compact registry text as embedded in translator prompts."""
    return service.catalog.compact_registry()


@router.post("/validate", response_model=ValidationResponseModel)
async def validate_strategy(
    ir: IntermediateRepresentation,
    service: StrategyBuilderService = Depends(get_service),
) -> ValidationResponseModel:
    """Validate an IR document against the catalog."""
    result = service.validator.validate(ir)
    return ValidationResponseModel(
        is_valid=result.is_valid,
        errors=[e.to_dict() for e in result.errors],
        message=result.error_message(),
    )


@router.post("/compile")
async def compile_strategy(
    ir: IntermediateRepresentation,
    service: StrategyBuilderService = Depends(get_service),
) -> dict[str, Any]:
    """Validate and compile an IR document without calling the translator."""
    result = service.build_from_ir(ir)
    logger.info(f"Compile request finished with status {result.status.value}")
    return result.to_dict()


@router.post("/build")
async def build_strategy(
    request: BuildRequestModel,
    service: StrategyBuilderService = Depends(get_service),
) -> dict[str, Any]:
    """Build a strategy from natural language.

    Always returns 200 with the build document; check Success / Status.
    """
    result = await service.build_strategy(request.text)
    logger.info(f"Build request finished with status {result.status.value}")
    return result.to_dict()
