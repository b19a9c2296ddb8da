# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence

from loan_calculators.amortization import AmortizationRow, LoanInputs, LoanResults

__version__ = "0.1.0"


# Chart widgets plot one point per year plus the final month
CHART_SAMPLE_EVERY = 12

# Currency and percent decoration accepted around a plain decimal number
_NUMBER_DECORATION = re.compile(r"[\s$,%]")
_PLAIN_NUMBER = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")


class FormParseError(ValueError):
    """A calculator form field could not be parsed as a number."""

    def __init__(self, field: str, value: object):
        self.field = field
        self.value = value
        super().__init__(f"{field} is not a valid number: {value!r}")


# =============================================================================
# Form Parsing
# =============================================================================

def _parse_number(form: Mapping[str, object], field: str, required: bool = True) -> float:
    value = form.get(field)
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise FormParseError(field, value)
        return 0.0
    if isinstance(value, bool):
        raise FormParseError(field, value)
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = _NUMBER_DECORATION.sub("", str(value))
        if not _PLAIN_NUMBER.match(text):
            raise FormParseError(field, value)
        number = float(text)
    if not math.isfinite(number):
        raise FormParseError(field, value)
    return number


def loan_inputs_from_form(form: Mapping[str, object]) -> LoanInputs:
    """
    Parse submitted calculator form values into LoanInputs.

    Expected fields: loanAmount, interestRate, loanTerm and optionally
    downPayment. Values may be numbers or strings; strings may carry "$",
    "%", thousands separators and whitespace. Nothing else is coerced:
    "12abc" is an error rather than 12.

    Range checks are not applied here; see validate_loan_inputs() and
    check_against_defaults().

    Raises:
        FormParseError: If a required field is missing or a value is not a number
        FormParseError: If loanTerm is not a whole number of months
    """
    loan_amount = _parse_number(form, "loanAmount")
    interest_rate = _parse_number(form, "interestRate")
    term = _parse_number(form, "loanTerm")
    down_payment = _parse_number(form, "downPayment", required=False)

    if not term.is_integer():
        raise FormParseError("loanTerm", form.get("loanTerm"))

    return LoanInputs(
        loan_amount=loan_amount,
        interest_rate=interest_rate,
        loan_term_months=int(term),
        down_payment=down_payment,
    )


# =============================================================================
# Presentation Helpers
# =============================================================================

def _round_half_up(amount: float) -> int:
    return math.floor(amount + 0.5)


def chart_points(
        schedule: Sequence[AmortizationRow],
        every: int = CHART_SAMPLE_EVERY
) -> list[dict[str, int]]:
    """
    Sample a schedule for charting.

    Keeps rows at index 0, every, 2*every, ... plus the final row, with
    amounts rounded to whole dollars (halves round up).
    """
    if every <= 0:
        raise ValueError(f"every must be positive, got {every}")
    last = len(schedule) - 1
    return [
        {
            "month": row.month,
            "balance": _round_half_up(row.balance),
            "principal": _round_half_up(row.principal),
            "interest": _round_half_up(row.interest),
        }
        for i, row in enumerate(schedule)
        if i % every == 0 or i == last
    ]


def calculation_record(
        product_key: str | None,
        inputs: LoanInputs,
        results: LoanResults,
        broker_id: str | None = None,
        session_id: str | None = None
) -> dict[str, object]:
    """
    Flat record of one calculation, keyed the way the platform stores it.

    calculatorType is the submitted product key, stored as given even when
    the calculator served it with the DEFAULT_PRODUCT configuration.
    """
    return {
        "brokerId": broker_id,
        "calculatorType": product_key,
        "loanAmount": inputs.loan_amount,
        "loanTerm": inputs.loan_term_months,
        "interestRate": inputs.interest_rate,
        "downPayment": inputs.down_payment,
        "monthlyPayment": results.monthly_payment,
        "totalInterest": results.total_interest,
        "totalCost": results.total_cost,
        "sessionId": session_id,
    }
