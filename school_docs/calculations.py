"""Derived Values

Values computed by the calling layer before a payload is built: grade
appreciations and averages for bulletins, invoice payment status, and the
split of tuition payments across fee heads and installments.

Builders never recompute these; they only render what they are given.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .config import MAX_GRADE
from .payloads import GradeLine, InvoiceItem, PaymentRecord, PaymentSchedule
from .utils import round_half_up

# (minimum percentage, label), checked in order
APPRECIATION_THRESHOLDS: Tuple[Tuple[int, str], ...] = (
    (90, "Excellent"),
    (80, "Très Bien"),
    (70, "Bien"),
    (60, "Satisfaisant"),
    (50, "Passable"),
)
APPRECIATION_FALLBACK = "À Revoir"

MONTHS_FR = (
    "Janvier", "Février", "Mars", "Avril", "Mai", "Juin",
    "Juillet", "Août", "Septembre", "Octobre", "Novembre", "Décembre",
)


def get_appreciation(percentage: float) -> str:
    """
    Map a percentage score to its bulletin appreciation.

    Examples:
        >>> get_appreciation(90)
        'Excellent'
        >>> get_appreciation(89)
        'Très Bien'
    """
    for minimum, label in APPRECIATION_THRESHOLDS:
        if percentage >= minimum:
            return label
    return APPRECIATION_FALLBACK


def build_grade_lines(grades: Iterable[Dict]) -> List[GradeLine]:
    """
    Turn raw grade rows ({"subject", "grade"}) into bulletin lines.

    The appreciation uses the unrounded percentage, the displayed percentage
    is rounded.
    """
    lines = []
    for row in grades:
        grade = float(row["grade"])
        percentage = grade / MAX_GRADE * 100
        lines.append(GradeLine(
            subject=row.get("subject", ""),
            grade=grade,
            max_grade=MAX_GRADE,
            percentage=round_half_up(percentage),
            appreciation=get_appreciation(percentage),
        ))
    return lines


def compute_average(grades: Sequence[GradeLine]) -> Tuple[float, int]:
    """
    Unweighted mean of raw grades and its rounded percentage.

    Coefficients are not applied. With no grades the average is 0.

    Returns:
        (average out of 20, average percentage)
    """
    if not grades:
        return 0.0, 0
    average = sum(g.grade for g in grades) / len(grades)
    return average, round_half_up(average / MAX_GRADE * 100)


def derive_payment_status(amount_due: int, amount_paid: int) -> str:
    """
    Three-state invoice status.

    Examples:
        >>> derive_payment_status(0, 1000)
        'paid'
        >>> derive_payment_status(500, 500)
        'partial'
        >>> derive_payment_status(1000, 0)
        'overdue'
    """
    if amount_due == 0:
        return "paid"
    if amount_due > 0 and amount_paid > 0:
        return "partial"
    return "overdue"


def summarize_invoice(fee_rows: Optional[Sequence[Dict]], payment_rows: Optional[Sequence[Dict]]):
    """
    Compute invoice totals, status and item lines from fee and payment rows.

    Args:
        fee_rows: Rows with "amount" and optional "fee_name"
        payment_rows: Rows with "amount"

    Returns:
        Dict with total_amount, amount_paid, amount_due, payment_status, items
    """
    total_amount = sum(row["amount"] for row in fee_rows or [])
    amount_paid = sum(row["amount"] for row in payment_rows or [])
    amount_due = max(0, total_amount - amount_paid)

    if fee_rows:
        items = [
            InvoiceItem(
                description=row.get("fee_name") or "Frais de scolarité",
                amount=row["amount"],
                status="Payé" if amount_paid >= row["amount"] else "En attente",
            )
            for row in fee_rows
        ]
    else:
        items = [InvoiceItem(
            description="Frais de scolarité",
            amount=total_amount,
            status="Partial" if amount_paid > 0 else "Pending",
        )]

    return {
        "total_amount": total_amount,
        "amount_paid": amount_paid,
        "amount_due": amount_due,
        "payment_status": derive_payment_status(amount_due, amount_paid),
        "items": items,
    }


@dataclass(frozen=True)
class TuitionRow:
    """One row of the tuition receipt summary table (None cells are left blank)."""

    nature: str
    due: Optional[int]
    paid: Optional[int]
    balance: Optional[int]
    is_total: bool = False


def allocate_fee_heads(
    total_paid: int,
    registration_fee: int,
    other_fees: int,
    payments: Sequence[PaymentRecord],
) -> Tuple[int, int, int]:
    """
    Split what has been paid between registration, other fees and tuition.

    Registration and other fees are due at enrollment. When the total paid
    covers both they are fully paid and the rest goes to tuition; otherwise
    the first payment is applied to registration, then other fees, and the
    remainder of the total to tuition.

    Returns:
        (registration_paid, other_paid, tuition_paid)
    """
    if not payments:
        return 0, 0, 0

    if total_paid >= registration_fee + other_fees:
        return registration_fee, other_fees, total_paid - registration_fee - other_fees

    first_payment = payments[0].amount
    registration_paid = min(first_payment, registration_fee)
    other_paid = min(first_payment - registration_paid, other_fees)
    tuition_paid = total_paid - registration_paid - other_paid
    return registration_paid, other_paid, tuition_paid


def allocate_installments(tuition_paid: int, schedules: Sequence[PaymentSchedule]) -> List[Tuple[PaymentSchedule, int]]:
    """Spread the tuition paid across installments in schedule order."""
    remaining = tuition_paid
    allocation = []
    for schedule in schedules:
        paid = max(0, min(remaining, schedule.amount))
        remaining -= paid
        allocation.append((schedule, paid))
    return allocation


def month_name(month: int) -> str:
    if 1 <= month <= 12:
        return MONTHS_FR[month - 1]
    return f"Mois {month}"


def build_tuition_rows(
    registration_fee: int,
    other_fees: int,
    tuition_fee: int,
    total_due: int,
    total_paid: int,
    balance: int,
    payments: Sequence[PaymentRecord],
    schedules: Sequence[PaymentSchedule],
) -> List[TuitionRow]:
    """
    Rows of the tuition receipt table: fee heads, installments, then TOTAL.
    """
    registration_paid, other_paid, tuition_paid = allocate_fee_heads(
        total_paid, registration_fee, other_fees, payments
    )

    rows = []
    if registration_fee > 0:
        rows.append(TuitionRow("Frais d'inscription", registration_fee, registration_paid,
                               registration_fee - registration_paid))
    if other_fees > 0:
        rows.append(TuitionRow("Frais annexe", other_fees, other_paid, other_fees - other_paid))
    if tuition_fee > 0:
        rows.append(TuitionRow("Frais de scolarité", tuition_fee, None, None))
        for schedule, paid in allocate_installments(tuition_paid, schedules):
            rows.append(TuitionRow(
                f"  • Versement {schedule.installment_number} ({month_name(schedule.due_month)})",
                schedule.amount, paid, schedule.amount - paid,
            ))

    rows.append(TuitionRow("TOTAL", total_due, total_paid, balance, is_total=True))
    return rows
