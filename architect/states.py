"""
states.py — Guided Component Architect (client)
================================================
Pydantic models for the client-side generation session.

Field names are Pythonic; the generation service's wire names are kept as
aliases so a response body can be validated directly:

    typescript  → component_source
    iterations  → iteration_count
    passed      → passed_checks
    attempt     → attempt_number
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class Phase(str, Enum):
    """Lifecycle of one generation cycle: idle → pending → committed | rolled_back → idle."""
    IDLE = "idle"
    PENDING = "pending"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class ValidationReport(BaseModel):
    """
    Validation outcome as reported by the generation service.

    ``is_valid`` is kept exactly as reported; upstream payloads are not
    guaranteed to agree with ``errors``, see ``is_consistent``.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    is_valid: bool = Field(description="Service-reported validity flag")
    errors: list[str] = Field(
        default_factory=list,
        description="Blocking issues"
    )
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-blocking issues"
    )
    passed_checks: list[str] = Field(
        default_factory=list,
        alias="passed",
        description="Rules the component satisfied"
    )

    @field_validator("errors", "warnings", "passed_checks", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value

    @property
    def is_consistent(self) -> bool:
        return self.is_valid == (len(self.errors) == 0)


class AttemptRecord(BaseModel):
    """One self-correction iteration in the service's audit trail."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    attempt_number: int = Field(alias="attempt", ge=1)
    validation: ValidationReport


class GenerationResult(BaseModel):
    """
    The artifact produced by one generation call: HTML template, component
    class source, final validation and the per-attempt audit trail.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    template: str = Field(description="Generated Angular HTML template")
    component_source: str = Field(
        alias="typescript",
        description="Generated TypeScript component class"
    )
    success: bool = Field(description="True iff the final validation passed")
    iteration_count: int = Field(
        alias="iterations",
        ge=1,
        description="Self-correction attempts the service took"
    )
    validation: ValidationReport
    audit_trail: list[AttemptRecord] = Field(
        default_factory=list,
        description="Chronological validation outcome of every attempt"
    )

    @field_validator("audit_trail", mode="before")
    @classmethod
    def _missing_trail(cls, value):
        return [] if value is None else value

    @model_validator(mode="after")
    def _attempts_increase(self) -> "GenerationResult":
        numbers = [record.attempt_number for record in self.audit_trail]
        if numbers and numbers[0] != 1:
            raise ValueError(f"audit_trail must start at attempt 1, got {numbers[0]}")
        for previous, current in zip(numbers, numbers[1:]):
            if current <= previous:
                raise ValueError(
                    f"audit_trail attempts must strictly increase, got {current} after {previous}"
                )
        return self


class Turn(BaseModel):
    """
    One entry of the conversation log.

    User turns carry the raw prompt text; assistant turns carry the
    GenerationResult plus the prompt that produced it.
    """
    model_config = ConfigDict(frozen=True)

    role: Role
    content: Union[str, GenerationResult]
    prompt: Optional[str] = Field(
        None,
        description="Prompt that produced an assistant result (assistant turns only)"
    )

    @model_validator(mode="after")
    def _content_matches_role(self) -> "Turn":
        if self.role is Role.USER and not isinstance(self.content, str):
            raise ValueError("user turns must carry prompt text")
        if self.role is Role.ASSISTANT and not isinstance(self.content, GenerationResult):
            raise ValueError("assistant turns must carry a GenerationResult")
        return self

    @property
    def result(self) -> Optional[GenerationResult]:
        return self.content if isinstance(self.content, GenerationResult) else None


class GenerateRequest(BaseModel):
    """Request body for ``POST /generate``."""
    prompt: str
    session_id: str
