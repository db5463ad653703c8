"""Compiled signal models.

Output of the signal compiler, in the JSON shape consumed by the execution
system. Field names on the wire are the aliases below and must match
exactly. Use to_wire() (or model_dump(by_alias=True)) to serialize.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer

from .encodings import DEFAULT_SYMBOL_NAME, DEFAULT_SYMBOL_TIMEFRAME

PARAMETRIC_FIELDS = ("r1_md", "r1_op", "cr_op", "r2_md", "r2_op", "entry", "exit")


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CompiledArg(_WireModel):
    """An argument record. All value fields carry the same number at compile time."""

    key: str = Field(alias="Key")
    value: float = Field(alias="Value")
    base_value: float = Field(alias="BaseValue")
    base: float = Field(alias="Base")
    last: float = Field(alias="Last")
    min: float = Field(alias="Min")
    max: float = Field(alias="Max")
    step: float = Field(default=0.0, alias="Step")
    # Reserved, always 0
    type: int = Field(default=0, alias="Type")
    value_type: int = Field(default=0, alias="ValueType")


class SymbolRef(_WireModel):
    """Instrument reference attached to every compiled signal."""

    fn: str | None = Field(default=None, alias="Fn")
    gen_md: int = Field(default=0, alias="GenMd")
    id: str | None = Field(default=None, alias="ID")
    is_ss: bool = Field(default=False, alias="IsSS")
    name: str = Field(default=DEFAULT_SYMBOL_NAME, alias="Name")
    shift: int = Field(default=0, alias="Shift")
    tf: str = Field(default=DEFAULT_SYMBOL_TIMEFRAME, alias="Tf")
    var: str | None = Field(default=None, alias="Var")


class CompiledSignal(_WireModel):
    """A compiled signal node.

    Args and Children are omitted from the output when absent. The rule
    fields (R1Md .. Exit) are only present on parametric signals; R2Op may
    be null there.
    """

    signal_type: str = Field(alias="$type")
    key: str = Field(alias="Key")
    type_code: int = Field(alias="Type")
    args: list[CompiledArg] | None = Field(default=None, alias="Args")
    children: list[CompiledSignal] | None = Field(default=None, alias="Children")

    r1_md: int | None = Field(default=None, alias="R1Md")
    r1_op: str | None = Field(default=None, alias="R1Op")
    cr_op: int | None = Field(default=None, alias="CrOp")
    r2_md: int | None = Field(default=None, alias="R2Md")
    r2_op: str | None = Field(default=None, alias="R2Op")
    entry: bool | None = Field(default=None, alias="Entry")
    exit: bool | None = Field(default=None, alias="Exit")

    mkt_n: int = Field(default=1, alias="MktN")
    rqd: bool = Field(default=False, alias="Rqd")
    symbol_id: SymbolRef = Field(default_factory=SymbolRef, alias="SymbolId")

    @property
    def is_parametric(self) -> bool:
        return self.r1_md is not None

    @model_serializer(mode="wrap")
    def _omit_absent_fields(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        absent = [name for name in ("args", "children") if getattr(self, name) is None]
        if not self.is_parametric:
            absent.extend(PARAMETRIC_FIELDS)
        for name in absent:
            data.pop(name, None)
            data.pop(type(self).model_fields[name].alias, None)
        return data

    def to_wire(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict using wire field names."""
        return self.model_dump(mode="json", by_alias=True)


CompiledSignal.model_rebuild()
