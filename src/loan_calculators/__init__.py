# Requires Python 3.12+
"""
Loan Calculators — level-payment amortization for embeddable broker calculators.

Rate convention: interest rates are annual percentages (11.5 = 11.5%),
amounts are dollars, terms are months.
"""

from __future__ import annotations

__version__ = "0.1.0"

# Amortization engine
from loan_calculators.amortization import (
    InvalidLoanInputs,
    LoanInputs,
    AmortizationRow,
    LoanResults,
    ScheduleArrays,
    monthly_payment,
    balance_factors,
    amortization_arrays,
    calculate_loan,
    validate_loan_inputs,
    principal_from_payment,
    rate_from_payment,
)

# Product defaults
from loan_calculators.products import (
    DEFAULT_PRODUCT,
    CALCULATOR_DEFAULTS,
    CalculatorDefaults,
    get_calculator_defaults,
    product_keys,
    default_inputs,
    check_against_defaults,
)

# Form boundary
from loan_calculators.forms import (
    CHART_SAMPLE_EVERY,
    FormParseError,
    loan_inputs_from_form,
    chart_points,
    calculation_record,
)

__all__ = [
    "__version__",
    # Amortization
    "InvalidLoanInputs",
    "LoanInputs",
    "AmortizationRow",
    "LoanResults",
    "ScheduleArrays",
    "monthly_payment",
    "balance_factors",
    "amortization_arrays",
    "calculate_loan",
    "validate_loan_inputs",
    "principal_from_payment",
    "rate_from_payment",
    # Products
    "DEFAULT_PRODUCT",
    "CALCULATOR_DEFAULTS",
    "CalculatorDefaults",
    "get_calculator_defaults",
    "product_keys",
    "default_inputs",
    "check_against_defaults",
    # Forms
    "CHART_SAMPLE_EVERY",
    "FormParseError",
    "loan_inputs_from_form",
    "chart_points",
    "calculation_record",
]
