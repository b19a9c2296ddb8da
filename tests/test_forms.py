"""
Unit tests for the calculator form boundary: strict parsing of submitted
values, chart sampling and calculation records.

Version: 0.1.0
Last Updated: 2026-10-19
Status: Active
"""

import unittest

from loan_calculators.amortization import AmortizationRow, LoanInputs, calculate_loan
from loan_calculators.forms import (
    FormParseError,
    calculation_record,
    chart_points,
    loan_inputs_from_form,
)


class TestLoanInputsFromForm(unittest.TestCase):

    def test_plain_strings(self):
        inputs = loan_inputs_from_form({
            "loanAmount": "500000",
            "interestRate": "11.5",
            "loanTerm": "120",
            "downPayment": "25000",
        })
        self.assertEqual(inputs, LoanInputs(500_000, 11.5, 120, 25_000))
        self.assertIsInstance(inputs.loan_term_months, int)

    def test_currency_and_percent_decoration(self):
        inputs = loan_inputs_from_form({
            "loanAmount": " $1,250,000.50 ",
            "interestRate": "7.25%",
            "loanTerm": "300",
        })
        self.assertEqual(inputs.loan_amount, 1_250_000.50)
        self.assertEqual(inputs.interest_rate, 7.25)

    def test_numeric_values_pass_through(self):
        inputs = loan_inputs_from_form({"loanAmount": 100_000, "interestRate": 0, "loanTerm": 12.0})
        self.assertEqual(inputs, LoanInputs(100_000, 0.0, 12, 0.0))

    def test_missing_or_blank_down_payment_is_zero(self):
        for down_payment in (None, "", "   "):
            with self.subTest(down_payment=down_payment):
                form = {"loanAmount": "1000", "interestRate": "5", "loanTerm": "12",
                        "downPayment": down_payment}
                self.assertEqual(loan_inputs_from_form(form).down_payment, 0.0)

    def test_malformed_values_rejected(self):
        base = {"loanAmount": "100000", "interestRate": "10", "loanTerm": "12"}
        cases = {
            "loanAmount": "abc",
            "interestRate": "12abc",
            "loanTerm": "1e2",
            "downPayment": "NaN",
        }
        for field, value in cases.items():
            with self.subTest(field=field):
                with self.assertRaises(FormParseError) as ctx:
                    loan_inputs_from_form({**base, field: value})
                self.assertEqual(ctx.exception.field, field)

    def test_required_field_missing(self):
        with self.assertRaises(FormParseError) as ctx:
            loan_inputs_from_form({"loanAmount": "100000", "interestRate": "10"})
        self.assertEqual(ctx.exception.field, "loanTerm")

    def test_fractional_term_rejected(self):
        with self.assertRaises(FormParseError):
            loan_inputs_from_form({"loanAmount": "100000", "interestRate": "10", "loanTerm": "12.5"})

    def test_boolean_rejected(self):
        with self.assertRaises(FormParseError):
            loan_inputs_from_form({"loanAmount": True, "interestRate": "10", "loanTerm": "12"})

    def test_parse_error_is_value_error(self):
        self.assertTrue(issubclass(FormParseError, ValueError))


class TestChartPoints(unittest.TestCase):

    def setUp(self):
        self.results = calculate_loan(LoanInputs(500_000, 11.5, 120))

    def test_yearly_samples_plus_final_month(self):
        points = chart_points(self.results.amortization_schedule)
        self.assertEqual([p["month"] for p in points], [1, 13, 25, 37, 49, 61, 73, 85, 97, 109, 120])

    def test_amounts_rounded_to_whole_dollars(self):
        first = chart_points(self.results.amortization_schedule)[0]
        row = self.results.amortization_schedule[0]
        self.assertEqual(first["interest"], round(row.interest))
        self.assertIsInstance(first["balance"], int)
        self.assertEqual(chart_points(self.results.amortization_schedule)[-1]["balance"], 0)

    def test_short_schedule_and_empty(self):
        short = calculate_loan(LoanInputs(100_000, 18.0, 3)).amortization_schedule
        self.assertEqual([p["month"] for p in chart_points(short)], [1, 3])
        self.assertEqual(chart_points(()), [])

    def test_halves_round_up(self):
        schedule = (
            AmortizationRow(month=1, payment=10.0, principal=2.5, interest=7.5, balance=12.5),
        )
        self.assertEqual(chart_points(schedule), [
            {"month": 1, "balance": 13, "principal": 3, "interest": 8},
        ])

    def test_custom_interval(self):
        points = chart_points(self.results.amortization_schedule, every=60)
        self.assertEqual([p["month"] for p in points], [1, 61, 120])
        with self.assertRaises(ValueError):
            chart_points(self.results.amortization_schedule, every=0)


class TestCalculationRecord(unittest.TestCase):

    def test_record_fields(self):
        inputs = LoanInputs(300_000, 9.5, 60, 50_000)
        results = calculate_loan(inputs)
        record = calculation_record("equipment", inputs, results,
                                    broker_id="broker-1", session_id="abc123")
        self.assertEqual(record, {
            "brokerId": "broker-1",
            "calculatorType": "equipment",
            "loanAmount": 300_000,
            "loanTerm": 60,
            "interestRate": 9.5,
            "downPayment": 50_000,
            "monthlyPayment": results.monthly_payment,
            "totalInterest": results.total_interest,
            "totalCost": results.total_cost,
            "sessionId": "abc123",
        })

    def test_unknown_product_key_stored_as_submitted(self):
        inputs = LoanInputs(500_000, 11.5, 120)
        record = calculation_record("unknown-key", inputs, calculate_loan(inputs))
        self.assertEqual(record["calculatorType"], "unknown-key")
        self.assertIsNone(record["brokerId"])
        self.assertIsNone(record["sessionId"])


if __name__ == "__main__":
    unittest.main(verbosity=2)
