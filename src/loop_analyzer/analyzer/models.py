"""Pydantic models for effect-loop reports."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field

ValueClass = Literal["breaking", "non_breaking"]
Risk = Literal["guarded", "risky"]


class SetterCall(BaseModel):
    setter: str          # "setCount"
    state: str           # "count"
    line: int
    value: ValueClass


class EffectVerdict(BaseModel):
    file: str
    line: int            # line of the hook call
    hook: str = "useEffect"
    dependencies: list[str] = Field(default_factory=list)
    setters: list[SetterCall] = Field(default_factory=list)
    risk: Risk
    snippet: str = ""


class ParseFailure(BaseModel):
    file: str
    reason: str


class EffectReport(BaseModel):
    files_scanned: int = 0
    verdicts: list[EffectVerdict] = Field(default_factory=list)
    parse_failures: list[ParseFailure] = Field(default_factory=list)

    @computed_field
    @property
    def guarded_count(self) -> int:
        return sum(1 for v in self.verdicts if v.risk == "guarded")

    @computed_field
    @property
    def risky_count(self) -> int:
        return sum(1 for v in self.verdicts if v.risk == "risky")
