# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

import math
import warnings
from dataclasses import dataclass

import numpy as np
from scipy.optimize import brentq

__version__ = "0.1.0"


class InvalidLoanInputs(ValueError):
    """Loan inputs rejected by validate_loan_inputs()."""


# =============================================================================
# Inputs and Results
# =============================================================================

@dataclass(frozen=True)
class LoanInputs:
    """
    Loan parameters as entered in a calculator widget.

    Rate convention: interest_rate is an annual percentage (e.g. 11.5 for 11.5%),
    matching the product defaults table.
    """
    loan_amount: float       # $ requested, before down payment
    interest_rate: float     # annual %
    loan_term_months: int    # n
    down_payment: float = 0.0

    @property
    def principal(self) -> float:
        """Financed principal (loan_amount - down_payment)."""
        return self.loan_amount - self.down_payment


@dataclass(frozen=True)
class AmortizationRow:
    """One month of a level-payment schedule. month is 1-based."""
    month: int
    payment: float
    principal: float
    interest: float
    balance: float


@dataclass(frozen=True)
class LoanResults:
    """Summary totals plus the full month-by-month schedule."""
    monthly_payment: float
    total_interest: float
    total_cost: float
    amortization_schedule: tuple[AmortizationRow, ...]


@dataclass
class ScheduleArrays:
    """
    Container for a schedule in vector form, one element per month.

    balance is the displayed (clamped) ending balance of each month.
    """
    month: np.ndarray
    payment: np.ndarray
    principal: np.ndarray
    interest: np.ndarray
    balance: np.ndarray

    def __len__(self) -> int:
        return len(self.month)

    def to_rows(self) -> tuple[AmortizationRow, ...]:
        return tuple(
            AmortizationRow(
                month=int(self.month[i]),
                payment=float(self.payment[i]),
                principal=float(self.principal[i]),
                interest=float(self.interest[i]),
                balance=float(self.balance[i]),
            )
            for i in range(len(self.month))
        )


# =============================================================================
# Level Payment
# =============================================================================

def monthly_payment(
        principal: float,
        interest_rate: float,
        loan_term_months: int
) -> float:
    """
    Calculate the level monthly payment that fully retires a fixed-rate loan.

    Formula (annuity):
        PAYMENT = P × [r × (1 + r)^n] / [(1 + r)^n - 1]

    Where:
        P = Financed principal
        r = Monthly rate (interest_rate / 100 / 12)
        n = Term in months

    When r = 0 the denominator vanishes and the payment is straight-line:
        PAYMENT = P / n

    No input is rejected. Degenerate terms (n <= 0) produce non-finite
    payments rather than an exception, so callers that need strict inputs
    should go through validate_loan_inputs() first.

    Args:
        principal: Financed principal ($)
        interest_rate: Annual rate as percentage (e.g., 11.5 for 11.5%)
        loan_term_months: Term in months (n)

    Returns:
        Monthly payment ($)

    Warns:
        UserWarning: If interest_rate is zero

    Example:
        >>> round(monthly_payment(500_000, 11.5, 120), 2)
        7029.77
    """
    r = np.float64(interest_rate) / 100.0 / 12.0
    n = np.float64(loan_term_months)
    with np.errstate(all="ignore"):
        if r == 0.0:
            warnings.warn("interest_rate is zero, returning straight-line amortization")
            return float(np.float64(principal) / n)
        compound = np.power(1.0 + r, n)
        return float(np.float64(principal) * (r * compound) / (compound - 1.0))


def _schedule_periods(loan_term_months: float) -> int:
    """Whole months in the schedule; non-finite and non-positive terms give none."""
    if not math.isfinite(loan_term_months) or loan_term_months <= 0:
        return 0
    return int(loan_term_months)


def balance_factors(interest_rate: float, loan_term_months: int) -> np.ndarray:
    """
    Scheduled balance as a fraction of principal at ages k = 0..n.

    Formula:
        BAL(k) = [1 - (1 + r)^-(n-k)] / [1 - (1 + r)^-n]

    Where:
        r = Monthly rate (interest_rate / 100 / 12)
        n = Term in months

    Each factor is computed directly from the closed form, evaluated as
    expm1(-(n-k)·log1p(r)) / expm1(-n·log1p(r)), so no rounding error is
    carried from one month to the next. BAL(0) = 1 and, for whole-month
    terms, BAL(n) = 0 exactly. Zero rate is straight-line: BAL(k) = (n-k)/n.

    Args:
        interest_rate: Annual rate as percentage
        loan_term_months: Term in months

    Returns:
        ndarray of length periods + 1 (index = age in months)
    """
    periods = _schedule_periods(loan_term_months)
    n = np.float64(loan_term_months)
    remaining = n - np.arange(periods + 1)
    r = np.float64(interest_rate) / 100.0 / 12.0
    with np.errstate(all="ignore"):
        if r == 0.0:
            return remaining / n
        log_growth = np.log1p(r)
        return np.expm1(-remaining * log_growth) / np.expm1(-n * log_growth)


def _level_payment_arrays(
        principal: float,
        interest_rate: float,
        loan_term_months: int,
        payment: float
) -> ScheduleArrays:
    periods = _schedule_periods(loan_term_months)
    with np.errstate(all="ignore"):
        scheduled = np.float64(principal) * balance_factors(interest_rate, loan_term_months)
        principal_paid = scheduled[:-1] - scheduled[1:]
        payments = np.full(periods, payment, dtype=float)
        interest = payments - principal_paid
        balance = np.maximum(0.0, scheduled[1:])

    return ScheduleArrays(
        month=np.arange(1, periods + 1),
        payment=payments,
        principal=principal_paid,
        interest=interest,
        balance=balance,
    )


def amortization_arrays(
        principal: float,
        interest_rate: float,
        loan_term_months: int,
        payment: float | None = None
) -> ScheduleArrays:
    """
    Build a month-by-month schedule.

    Level payment (payment is None): balances come from balance_factors(),
    and for month i = 1..n:
        PRINCIPAL(i) = BAL(i-1) - BAL(i)
        INTEREST(i)  = PAYMENT - PRINCIPAL(i)

    Explicit payment: the schedule is walked from BAL(0) = principal:
        INTEREST(i)  = BAL(i-1) × r
        PRINCIPAL(i) = PAYMENT - INTEREST(i)
        BAL(i)       = BAL(i-1) - PRINCIPAL(i)

    The reported balance is clamped at zero in both cases; the walked
    running balance itself is not clamped.

    Args:
        principal: Financed principal ($)
        interest_rate: Annual rate as percentage
        loan_term_months: Term in months; non-positive or non-finite terms give empty arrays
        payment: Payment to apply each month; the level payment when None

    Returns:
        ScheduleArrays with one element per whole month of the term
    """
    if payment is None:
        level = monthly_payment(principal, interest_rate, loan_term_months)
        return _level_payment_arrays(principal, interest_rate, loan_term_months, level)

    periods = _schedule_periods(loan_term_months)
    month = np.arange(1, periods + 1)
    payments = np.full(periods, payment, dtype=float)
    interest = np.zeros(periods)
    principal_paid = np.zeros(periods)
    balance = np.zeros(periods)

    monthly_rate = interest_rate / 100.0 / 12.0
    running = np.float64(principal)

    with np.errstate(all="ignore"):
        for i in range(periods):
            interest[i] = running * monthly_rate
            principal_paid[i] = payments[i] - interest[i]
            running = running - principal_paid[i]
            balance[i] = np.maximum(0.0, running)

    return ScheduleArrays(
        month=month,
        payment=payments,
        principal=principal_paid,
        interest=interest,
        balance=balance,
    )


# =============================================================================
# Calculator
# =============================================================================

def calculate_loan(inputs: LoanInputs, validate: bool = False) -> LoanResults:
    """
    Compute the level payment, totals and amortization schedule for a loan.

        principal      = loan_amount - down_payment
        total_paid     = PAYMENT × n
        total_interest = total_paid - principal
        total_cost     = total_paid + down_payment

    Out-of-range inputs are accepted and propagate into degenerate results
    (negative or non-finite amounts) unless validate is set, in which case
    validate_loan_inputs() runs first and may raise InvalidLoanInputs.

    Args:
        inputs: LoanInputs
        validate: Reject degenerate inputs instead of computing them

    Returns:
        LoanResults with one schedule row per month
    """
    if validate:
        inputs = validate_loan_inputs(inputs)

    principal = inputs.principal
    n = inputs.loan_term_months
    payment = monthly_payment(principal, inputs.interest_rate, n)

    with np.errstate(all="ignore"):
        total_paid = np.float64(payment) * n
        total_interest = total_paid - principal
        total_cost = total_paid + inputs.down_payment

    schedule = _level_payment_arrays(principal, inputs.interest_rate, n, payment)

    return LoanResults(
        monthly_payment=payment,
        total_interest=float(total_interest),
        total_cost=float(total_cost),
        amortization_schedule=schedule.to_rows(),
    )


def validate_loan_inputs(inputs: LoanInputs) -> LoanInputs:
    """
    Check that inputs describe a loan that can be amortized.

    Raises:
        InvalidLoanInputs: If any value is non-finite
        InvalidLoanInputs: If loan_term_months is not a positive integer
        InvalidLoanInputs: If interest_rate is negative
        InvalidLoanInputs: If down_payment is negative
        InvalidLoanInputs: If down_payment is not less than loan_amount
    """
    for field in ("loan_amount", "interest_rate", "loan_term_months", "down_payment"):
        value = getattr(inputs, field)
        if not math.isfinite(value):
            raise InvalidLoanInputs(f"{field} must be finite, got {value}")
    if int(inputs.loan_term_months) != inputs.loan_term_months:
        raise InvalidLoanInputs(
            f"loan_term_months must be a whole number of months, got {inputs.loan_term_months}"
        )
    if inputs.loan_term_months < 1:
        raise InvalidLoanInputs(f"loan_term_months must be positive, got {inputs.loan_term_months}")
    if inputs.interest_rate < 0:
        raise InvalidLoanInputs(f"interest_rate must be non-negative, got {inputs.interest_rate}")
    if inputs.down_payment < 0:
        raise InvalidLoanInputs(f"down_payment must be non-negative, got {inputs.down_payment}")
    if inputs.down_payment >= inputs.loan_amount:
        raise InvalidLoanInputs(
            f"down_payment ({inputs.down_payment}) must be less than "
            f"loan_amount ({inputs.loan_amount})"
        )
    return inputs


# =============================================================================
# Inverse Solves
# =============================================================================

def principal_from_payment(
        payment: float,
        interest_rate: float,
        loan_term_months: int
) -> float:
    """
    Largest principal a level payment retires over the term.

    Inverse of monthly_payment():
        P = PAYMENT × [1 - (1 + r)^-n] / r

    Returns PAYMENT × n when r = 0 and 0.0 for non-positive terms.
    """
    if loan_term_months <= 0:
        return 0.0
    r = interest_rate / 100.0 / 12.0
    if r == 0.0:
        return payment * loan_term_months
    return payment * (1 - (1 + r) ** (-loan_term_months)) / r


def rate_from_payment(
        principal: float,
        payment: float,
        loan_term_months: int,
        tolerance: float = 1e-10,
        max_iterations: int = 200
) -> float:
    """
    Solve for the annual rate (%) at which a level payment retires principal.

    Uses Brent's method (scipy.optimize.brentq) on the annual rate in
    [0%, 1000%]. The objective is monotonic in the rate, so a root exists
    whenever PAYMENT lies between the straight-line payment P / n and the
    payment at the upper bound.

    Args:
        principal: Financed principal ($)
        payment: Level monthly payment ($)
        loan_term_months: Term in months
        tolerance: Absolute tolerance on the rate (%)
        max_iterations: Iteration cap passed to brentq

    Returns:
        Annual interest rate as percentage

    Raises:
        ValueError: If principal, payment or loan_term_months is not positive
        ValueError: If no rate in [0%, 1000%] reproduces the payment
    """
    if principal <= 0:
        raise ValueError(f"principal must be positive, got {principal}")
    if payment <= 0:
        raise ValueError(f"payment must be positive, got {payment}")
    if loan_term_months <= 0:
        raise ValueError(f"loan_term_months must be positive, got {loan_term_months}")

    def objective(rate: float) -> float:
        return principal_from_payment(payment, rate, loan_term_months) - principal

    try:
        return brentq(objective, 0.0, 1000.0, xtol=tolerance, maxiter=max_iterations)
    except ValueError as e:
        # brentq raises ValueError when the bracket holds no sign change
        raise ValueError(
            f"Could not find a rate for payment {payment:,.2f} on principal "
            f"{principal:,.2f} over {loan_term_months} months. "
            f"Original error: {e}"
        ) from e
