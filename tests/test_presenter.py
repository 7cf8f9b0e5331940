import pytest

from architect.presenter import (
    ALL_PASSED,
    NO_REPORT,
    MessageCategory,
    audit_label,
    present,
    toggle_audit,
)
from architect.states import AttemptRecord, ValidationReport


def test_valid_report_headline(login_result):
    model = present(login_result.validation, login_result.audit_trail)
    assert model.headline == ALL_PASSED == "all checks passed"
    assert model.is_valid
    assert model.discrepancy is None
    assert model.passed_checks == ["ok"]


def test_messages_ordered_errors_warnings_passed(retried_result):
    model = present(retried_result.validation, retried_result.audit_trail)

    categories = [m.category for m in model.messages]
    assert categories == (
        [MessageCategory.ERROR]
        + [MessageCategory.WARNING]
        + [MessageCategory.PASSED] * 4
    )
    assert model.headline == "1 error(s) found"
    assert model.passed_checks == retried_result.validation.passed_checks


def test_input_order_preserved_within_category():
    report = ValidationReport(is_valid=False, errors=["b", "a", "c"], warnings=["z", "y"])
    model = present(report)
    assert model.errors == ["b", "a", "c"]
    assert model.warnings == ["z", "y"]


def test_max_passed_caps_passed_checks(retried_result):
    model = present(retried_result.validation, max_passed=3)
    assert model.passed_checks == retried_result.validation.passed_checks[:3]
    assert model.errors and model.warnings


@pytest.mark.parametrize("reported", [True, False])
def test_validity_follows_errors_list(reported):
    with_errors = present(ValidationReport(is_valid=reported, errors=["boom"]))
    without = present(ValidationReport(is_valid=reported, errors=[]))

    assert with_errors.is_valid is False
    assert without.is_valid is True
    assert (with_errors.discrepancy is not None) == reported
    assert (without.discrepancy is not None) == (not reported)


def test_discrepancy_message_names_both_sides():
    model = present(ValidationReport(is_valid=True, errors=["x", "y"]))
    assert model.discrepancy == "service reported is_valid=True but listed 2 error(s)"
    assert model.headline == "2 error(s) found"


def test_empty_lists_and_absent_trail():
    model = present(ValidationReport(is_valid=True), None)
    assert model.messages == []
    assert model.attempts == []
    assert model.audit_label == ""
    assert present(ValidationReport(is_valid=True), []).attempts == []


def test_missing_report():
    model = present(None, None)
    assert model.headline == NO_REPORT
    assert model.messages == []


def test_attempt_summaries(retried_result):
    model = present(retried_result.validation, retried_result.audit_trail)

    assert [a.attempt_number for a in model.attempts] == [1, 2, 3]
    assert model.attempts[0].summary == "Attempt 1: invalid, 2 error(s)"
    assert model.attempts[0].error_count == 2
    assert model.audit_label == "Audit trail (3 attempts)"

    valid = AttemptRecord(attempt=1, validation=ValidationReport(is_valid=True))
    summary = present(ValidationReport(is_valid=True), [valid]).attempts[0]
    assert summary.summary == "Attempt 1: valid"
    assert summary.is_valid


def test_audit_toggle_defaults_collapsed(login_result):
    model = present(login_result.validation, login_result.audit_trail)
    assert model.audit_expanded is False

    expanded = toggle_audit(model)
    assert expanded.audit_expanded is True
    assert model.audit_expanded is False
    assert toggle_audit(expanded).audit_expanded is False


def test_audit_label_pluralization():
    assert audit_label(0) == ""
    assert audit_label(1) == "Audit trail (1 attempt)"
    assert audit_label(2) == "Audit trail (2 attempts)"
