"""Error Hierarchy — REST envelopes produced by domain errors."""

from sagenest.core.domain_types import ValidationResult
from sagenest.core.errors import (
    CalculationRejectedError,
    ContentTooLargeError,
    ErrorCategory,
    ErrorContext,
)


def test_calculation_rejected_carries_validation_message():
    err = CalculationRejectedError(
        ValidationResult.fail("Embryo age must be between 1 and 7 days."),
        ErrorContext(method="ivf"),
    )
    body = err.to_response()
    assert err.http_status == 400
    assert body["error"]["code"] == "CALCULATION_REJECTED"
    assert body["error"]["category"] == ErrorCategory.BUSINESS_RULE.value
    assert body["error"]["context"]["method"] == "ivf"
    assert body["validation"] == {
        "valid": False, "message": "Embryo age must be between 1 and 7 days.",
    }


def test_content_too_large_is_413():
    err = ContentTooLargeError(500, 100)
    assert err.http_status == 413
    assert err.limit == 100
    assert "500" in err.message
