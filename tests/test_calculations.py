"""Tests for appreciations, averages, invoice status and tuition allocation."""
import pytest

from school_docs.calculations import (
    allocate_fee_heads,
    allocate_installments,
    build_grade_lines,
    build_tuition_rows,
    compute_average,
    derive_payment_status,
    get_appreciation,
    month_name,
    summarize_invoice,
)
from school_docs.payloads import GradeLine, PaymentRecord, PaymentSchedule


# =========================================================================
# Bulletin
# =========================================================================

class TestAppreciation:
    @pytest.mark.parametrize("percentage,expected", [
        (100, "Excellent"),
        (90, "Excellent"),
        (89, "Très Bien"),
        (80, "Très Bien"),
        (79.9, "Bien"),
        (70, "Bien"),
        (60, "Satisfaisant"),
        (50, "Passable"),
        (49, "À Revoir"),
        (0, "À Revoir"),
    ])
    def test_thresholds(self, percentage, expected):
        assert get_appreciation(percentage) == expected

    def test_cutoff_boundaries(self):
        assert get_appreciation(90) == "Excellent"
        assert get_appreciation(50) == "Passable"
        assert get_appreciation(49) == "À Revoir"

    def test_89_is_below_excellent(self):
        assert get_appreciation(89) != "Excellent"


class TestGradeLines:
    def test_percentage_rounded_half_up(self):
        lines = build_grade_lines([{"subject": "Maths", "grade": 12.5}])
        assert lines[0].percentage == 63  # 62.5 rounds up
        assert lines[0].appreciation == "Satisfaisant"

    def test_appreciation_uses_unrounded_percentage(self):
        # 17.95/20 = 89.75%: displayed as 90 but appreciated as Très Bien
        line = build_grade_lines([{"subject": "SVT", "grade": 17.95}])[0]
        assert line.percentage == 90
        assert line.appreciation == "Très Bien"


class TestAverage:
    def test_unweighted_mean(self):
        grades = [GradeLine(subject="A", grade=15), GradeLine(subject="B", grade=12.5)]
        average, percentage = compute_average(grades)
        assert average == pytest.approx(13.75)
        assert percentage == 69

    def test_empty_grades(self):
        assert compute_average([]) == (0.0, 0)


# =========================================================================
# Invoice
# =========================================================================

class TestPaymentStatus:
    def test_paid(self):
        assert derive_payment_status(0, 1000) == "paid"

    def test_partial(self):
        assert derive_payment_status(500, 500) == "partial"

    def test_overdue(self):
        assert derive_payment_status(1000, 0) == "overdue"

    def test_nothing_due_nothing_paid_is_paid(self):
        assert derive_payment_status(0, 0) == "paid"


class TestSummarizeInvoice:
    def test_totals_and_item_status(self):
        summary = summarize_invoice(
            [{"fee_name": "Scolarité", "amount": 100000}, {"amount": 20000}],
            [{"amount": 50000}],
        )
        assert summary["total_amount"] == 120000
        assert summary["amount_paid"] == 50000
        assert summary["amount_due"] == 70000
        assert summary["payment_status"] == "partial"
        assert [i.status for i in summary["items"]] == ["En attente", "Payé"]
        assert summary["items"][1].description == "Frais de scolarité"

    def test_overpayment_clamps_due_to_zero(self):
        summary = summarize_invoice([{"amount": 1000}], [{"amount": 1500}])
        assert summary["amount_due"] == 0
        assert summary["payment_status"] == "paid"

    def test_no_fee_rows_single_item(self):
        summary = summarize_invoice([], [])
        assert len(summary["items"]) == 1
        assert summary["items"][0].status == "Pending"
        assert summary["payment_status"] == "paid"


# =========================================================================
# Tuition receipt
# =========================================================================

class TestTuitionAllocation:
    def test_no_payments_allocates_nothing(self):
        assert allocate_fee_heads(0, 25000, 10000, []) == (0, 0, 0)

    def test_fees_covered_remainder_to_tuition(self):
        payments = [PaymentRecord(amount=35000), PaymentRecord(amount=50000)]
        assert allocate_fee_heads(85000, 25000, 10000, payments) == (25000, 10000, 50000)

    def test_first_payment_applied_when_fees_not_covered(self):
        payments = [PaymentRecord(amount=20000)]
        assert allocate_fee_heads(20000, 25000, 10000, payments) == (20000, 0, 0)

    def test_installments_filled_in_order(self):
        schedules = [
            PaymentSchedule(installment_number=1, due_month=10, amount=50000),
            PaymentSchedule(installment_number=2, due_month=1, amount=50000),
        ]
        allocation = allocate_installments(70000, schedules)
        assert [paid for _, paid in allocation] == [50000, 20000]

    def test_month_name(self):
        assert month_name(1) == "Janvier"
        assert month_name(12) == "Décembre"
        assert month_name(13) == "Mois 13"

    def test_rows(self, tuition_payload):
        p = tuition_payload
        rows = build_tuition_rows(
            p.registration_fee, p.other_fees, p.tuition_fee, p.total_due, p.total_paid, p.balance,
            p.all_payments, p.payment_schedules,
        )
        natures = [r.nature for r in rows]
        assert natures[:3] == ["Frais d'inscription", "Frais annexe", "Frais de scolarité"]
        assert natures[3] == "  • Versement 1 (Octobre)"
        assert rows[2].paid is None and rows[2].balance is None
        assert rows[3].paid == 50000 and rows[3].balance == 0
        assert rows[4].paid == 0
        assert rows[-1].is_total
        assert rows[-1].due == 185000
