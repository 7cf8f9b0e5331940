"""
presenter.py — Validation presentation model
=============================================
Turns a ValidationReport and its audit trail into what the result panel
shows: a headline, the messages in display order (errors, warnings, passed
checks), and one summary line per self-correction attempt.

Validity is recomputed from the errors list. When the service's own
``is_valid`` flag disagrees, the model carries a ``discrepancy`` note instead
of trusting either side silently.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from architect.states import AttemptRecord, ValidationReport

ALL_PASSED = "all checks passed"
NO_REPORT = "no validation report"


class MessageCategory(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    PASSED = "passed"


class PresentedMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: MessageCategory
    text: str


class AttemptSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    attempt_number: int
    is_valid: bool
    error_count: int
    summary: str = Field(description="One-line summary, e.g. 'Attempt 2: invalid, 3 error(s)'")
    errors: list[str] = Field(default_factory=list)


class PresentationModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    headline: str
    is_valid: bool
    discrepancy: Optional[str] = None
    messages: list[PresentedMessage] = Field(default_factory=list)
    attempts: list[AttemptSummary] = Field(default_factory=list)
    audit_expanded: bool = False
    audit_label: str = ""

    @property
    def errors(self) -> list[str]:
        return [m.text for m in self.messages if m.category is MessageCategory.ERROR]

    @property
    def warnings(self) -> list[str]:
        return [m.text for m in self.messages if m.category is MessageCategory.WARNING]

    @property
    def passed_checks(self) -> list[str]:
        return [m.text for m in self.messages if m.category is MessageCategory.PASSED]


def _headline(error_count: int) -> str:
    if error_count == 0:
        return ALL_PASSED
    return f"{error_count} error(s) found"


def _summarize_attempt(record: AttemptRecord) -> AttemptSummary:
    errors = list(record.validation.errors)
    is_valid = not errors
    if is_valid:
        line = f"Attempt {record.attempt_number}: valid"
    else:
        line = f"Attempt {record.attempt_number}: invalid, {len(errors)} error(s)"
    return AttemptSummary(
        attempt_number=record.attempt_number,
        is_valid=is_valid,
        error_count=len(errors),
        summary=line,
        errors=errors,
    )


def audit_label(attempt_count: int) -> str:
    if attempt_count == 0:
        return ""
    plural = "s" if attempt_count > 1 else ""
    return f"Audit trail ({attempt_count} attempt{plural})"


def present(
    report: Optional[ValidationReport],
    audit_trail: Optional[Sequence[AttemptRecord]] = None,
    *,
    max_passed: Optional[int] = None,
    audit_expanded: bool = False,
) -> PresentationModel:
    """
    Builds the presentation model for one result.

    ``max_passed`` caps how many passed checks are listed (None lists all).
    """
    attempts = [_summarize_attempt(record) for record in (audit_trail or ())]
    label = audit_label(len(attempts))

    if report is None:
        return PresentationModel(
            headline=NO_REPORT,
            is_valid=False,
            attempts=attempts,
            audit_expanded=audit_expanded,
            audit_label=label,
        )

    errors = list(report.errors)
    is_valid = not errors

    discrepancy = None
    if report.is_valid != is_valid:
        discrepancy = (
            f"service reported is_valid={report.is_valid} "
            f"but listed {len(errors)} error(s)"
        )

    passed = list(report.passed_checks)
    if max_passed is not None:
        passed = passed[:max_passed]

    messages = (
        [PresentedMessage(category=MessageCategory.ERROR, text=e) for e in errors]
        + [PresentedMessage(category=MessageCategory.WARNING, text=w) for w in report.warnings]
        + [PresentedMessage(category=MessageCategory.PASSED, text=p) for p in passed]
    )

    return PresentationModel(
        headline=_headline(len(errors)),
        is_valid=is_valid,
        discrepancy=discrepancy,
        messages=messages,
        attempts=attempts,
        audit_expanded=audit_expanded,
        audit_label=label,
    )


def toggle_audit(model: PresentationModel) -> PresentationModel:
    """Returns a copy with the audit trail expanded/collapsed state flipped."""
    return model.model_copy(update={"audit_expanded": not model.audit_expanded})
