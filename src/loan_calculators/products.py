# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

import warnings
from dataclasses import dataclass
from types import MappingProxyType

from loan_calculators.amortization import LoanInputs

__version__ = "0.1.0"


# =============================================================================
# Calculator Product Defaults
# =============================================================================
#
# One entry per embeddable calculator. Amounts are $, rates are annual %,
# terms are months. The ranges are advisory: the calculator accepts any
# input and check_against_defaults() only reports values outside them.
# =============================================================================

DEFAULT_PRODUCT = "sba-7a"


@dataclass(frozen=True)
class CalculatorDefaults:
    """Static configuration of one calculator product."""
    name: str
    default_amount: float
    default_term: int
    default_rate: float
    min_amount: float
    max_amount: float
    term_options: tuple[int, ...]


CALCULATOR_DEFAULTS: MappingProxyType[str, CalculatorDefaults] = MappingProxyType({
    "sba-7a": CalculatorDefaults(
        name="SBA 7(a) Loan Calculator",
        default_amount=500_000, default_term=120, default_rate=11.5,
        min_amount=5_000, max_amount=5_000_000,
        term_options=(60, 84, 120, 180, 300),
    ),
    "sba-504": CalculatorDefaults(
        name="SBA 504 Loan Calculator",
        default_amount=1_000_000, default_term=240, default_rate=6.5,
        min_amount=125_000, max_amount=5_500_000,
        term_options=(120, 180, 240, 300),
    ),
    "equipment": CalculatorDefaults(
        name="Equipment Financing Calculator",
        default_amount=250_000, default_term=60, default_rate=9.5,
        min_amount=10_000, max_amount=5_000_000,
        term_options=(36, 48, 60, 84),
    ),
    "working-capital": CalculatorDefaults(
        name="Working Capital Loan Calculator",
        default_amount=100_000, default_term=24, default_rate=15,
        min_amount=5_000, max_amount=500_000,
        term_options=(6, 12, 18, 24, 36),
    ),
    "franchise": CalculatorDefaults(
        name="Franchise Loan Calculator",
        default_amount=350_000, default_term=120, default_rate=11,
        min_amount=50_000, max_amount=5_000_000,
        term_options=(60, 84, 120, 180),
    ),
    "business-acquisition": CalculatorDefaults(
        name="Business Acquisition Loan Calculator",
        default_amount=750_000, default_term=120, default_rate=10.5,
        min_amount=50_000, max_amount=5_000_000,
        term_options=(60, 84, 120, 180, 240),
    ),
    "commercial-property": CalculatorDefaults(
        name="Commercial Property Loan Calculator",
        default_amount=2_000_000, default_term=300, default_rate=7.5,
        min_amount=100_000, max_amount=50_000_000,
        term_options=(120, 180, 240, 300, 360),
    ),
    "multi-family": CalculatorDefaults(
        name="Multi-Family Property Loan Calculator",
        default_amount=3_000_000, default_term=300, default_rate=7.25,
        min_amount=250_000, max_amount=50_000_000,
        term_options=(180, 240, 300, 360),
    ),
    "office-retail": CalculatorDefaults(
        name="Office/Retail Space Loan Calculator",
        default_amount=1_500_000, default_term=240, default_rate=7.75,
        min_amount=150_000, max_amount=25_000_000,
        term_options=(120, 180, 240, 300),
    ),
    "line-of-credit": CalculatorDefaults(
        name="Line of Credit Calculator",
        default_amount=250_000, default_term=12, default_rate=12,
        min_amount=10_000, max_amount=1_000_000,
        term_options=(6, 12, 18, 24, 36),
    ),
    "invoice-financing": CalculatorDefaults(
        name="Invoice Financing Calculator",
        default_amount=100_000, default_term=3, default_rate=18,
        min_amount=5_000, max_amount=500_000,
        term_options=(1, 3, 6, 12),
    ),
    "merchant-cash-advance": CalculatorDefaults(
        name="Merchant Cash Advance Calculator",
        default_amount=50_000, default_term=12, default_rate=35,
        min_amount=5_000, max_amount=500_000,
        term_options=(3, 6, 9, 12, 18),
    ),
    "construction-loan": CalculatorDefaults(
        name="Construction Loan Calculator",
        default_amount=2_500_000, default_term=24, default_rate=8.5,
        min_amount=100_000, max_amount=25_000_000,
        term_options=(12, 18, 24, 36),
    ),
    "bridge-loan": CalculatorDefaults(
        name="Bridge Loan Calculator",
        default_amount=1_000_000, default_term=12, default_rate=10,
        min_amount=50_000, max_amount=10_000_000,
        term_options=(6, 12, 18, 24),
    ),
    "land-loan": CalculatorDefaults(
        name="Land Loan Calculator",
        default_amount=500_000, default_term=180, default_rate=9,
        min_amount=25_000, max_amount=10_000_000,
        term_options=(60, 120, 180, 240),
    ),
    "term-loan": CalculatorDefaults(
        name="Term Loan Calculator",
        default_amount=300_000, default_term=60, default_rate=11,
        min_amount=10_000, max_amount=5_000_000,
        term_options=(12, 24, 36, 60, 84, 120),
    ),
    "asset-based": CalculatorDefaults(
        name="Asset-Based Lending Calculator",
        default_amount=500_000, default_term=36, default_rate=13,
        min_amount=50_000, max_amount=10_000_000,
        term_options=(12, 24, 36, 48, 60),
    ),
    "inventory-financing": CalculatorDefaults(
        name="Inventory Financing Calculator",
        default_amount=200_000, default_term=12, default_rate=14,
        min_amount=10_000, max_amount=2_000_000,
        term_options=(6, 12, 18, 24, 36),
    ),
})


def get_calculator_defaults(product_key: str | None) -> CalculatorDefaults:
    """
    Look up a calculator's configuration by product key.

    Unknown or missing keys fall back to the DEFAULT_PRODUCT entry; no error
    is raised.
    """
    return CALCULATOR_DEFAULTS.get(product_key, CALCULATOR_DEFAULTS[DEFAULT_PRODUCT])


def product_keys() -> list[str]:
    """All product keys in table order."""
    return list(CALCULATOR_DEFAULTS)


def default_inputs(product_key: str | None) -> LoanInputs:
    """Initial LoanInputs for a calculator widget (no down payment)."""
    config = get_calculator_defaults(product_key)
    return LoanInputs(
        loan_amount=config.default_amount,
        interest_rate=config.default_rate,
        loan_term_months=config.default_term,
    )


def check_against_defaults(inputs: LoanInputs, product_key: str | None) -> list[str]:
    """
    Advisory range check of inputs against a product's configuration.

    Reports a loan amount outside [min_amount, max_amount] and a term that is
    not one of term_options. Each finding is also emitted as a UserWarning.
    Nothing is rejected; the calculator still accepts these inputs.

    Args:
        inputs: LoanInputs to check
        product_key: Product key (unknown keys use DEFAULT_PRODUCT)

    Returns:
        List of messages, empty when inputs are within range
    """
    config = get_calculator_defaults(product_key)
    messages = []
    if not config.min_amount <= inputs.loan_amount <= config.max_amount:
        messages.append(
            f"loan_amount {inputs.loan_amount:,.2f} is outside the {config.name} range "
            f"{config.min_amount:,.0f} to {config.max_amount:,.0f}"
        )
    if inputs.loan_term_months not in config.term_options:
        messages.append(
            f"loan_term_months {inputs.loan_term_months} is not offered by the {config.name}, "
            f"expected one of {list(config.term_options)}"
        )
    for message in messages:
        warnings.warn(message)
    return messages
