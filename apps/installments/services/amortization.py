"""
Payment plan arithmetic.

Everything in this module is pure: no database access and no clock. Money is
``Decimal`` quantized to cents with ROUND_HALF_UP.
"""

import math
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from dateutil.relativedelta import relativedelta

from .exceptions import InvalidPaymentPlanError


ALLOWED_PLAN_YEARS = (4, 5)
ALLOWED_FREQUENCY_MONTHS = (1, 2, 3, 4, 5, 6, 12)

CENT = Decimal('0.01')


def round2(value) -> Decimal:
    """Round to two decimals, halves away from zero."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class AmortizationTerms:
    plan_years: int
    frequency_months: int
    monthly_amount: Decimal
    installment_amount: Decimal
    total_installments: int


@dataclass(frozen=True)
class InstallmentDraft:
    installment_number: int
    due_date: date
    amount: Decimal


def validate_plan(
    *,
    unit_price,
    plan_years: int,
    frequency_months: int,
    start_date: Optional[date]
) -> None:
    """
    Reject plans the schedule generator cannot honor.

    Raises:
        InvalidPaymentPlanError: On an unsupported term, frequency,
            non-positive price or missing start date
    """
    if plan_years not in ALLOWED_PLAN_YEARS:
        raise InvalidPaymentPlanError(
            f"Payment plan must be one of {ALLOWED_PLAN_YEARS} years, got {plan_years}"
        )

    if frequency_months not in ALLOWED_FREQUENCY_MONTHS:
        raise InvalidPaymentPlanError(
            f"Payment frequency must be one of {ALLOWED_FREQUENCY_MONTHS} months, "
            f"got {frequency_months}"
        )

    if unit_price is None or Decimal(unit_price) <= 0:
        raise InvalidPaymentPlanError("Unit price must be greater than zero")

    if start_date is None:
        raise InvalidPaymentPlanError("Payment start date is required")


def calculate_terms(
    *,
    unit_price,
    plan_years: int,
    frequency_months: int
) -> AmortizationTerms:
    """
    Derive the per-month figure, per-installment figure and installment count.

    Example:
        120000 over 4 years paid every 3 months gives 2500.00 a month,
        7500.00 an installment and 16 installments.
    """
    unit_price = Decimal(unit_price)
    total_months = plan_years * 12

    monthly_amount = round2(unit_price / total_months)
    installment_amount = round2(monthly_amount * frequency_months)
    total_installments = math.ceil(total_months / frequency_months)

    return AmortizationTerms(
        plan_years=plan_years,
        frequency_months=frequency_months,
        monthly_amount=monthly_amount,
        installment_amount=installment_amount,
        total_installments=total_installments,
    )


def build_schedule(
    *,
    unit_price,
    terms: AmortizationTerms,
    start_date: date
) -> list[InstallmentDraft]:
    """
    Lay out numbered, dated installments for the given terms.

    Installment n falls ``frequency_months * (n - 1)`` months after the start
    date; a day that does not exist in the target month lands on that
    month's last day. The last installment absorbs rounding so the amounts
    add up exactly to ``unit_price``.

    Raises:
        InvalidPaymentPlanError: If the corrective last installment would
            be negative
    """
    unit_price = round2(unit_price)
    drafts = []
    allocated = Decimal('0.00')

    for number in range(1, terms.total_installments + 1):
        due_date = start_date + relativedelta(
            months=terms.frequency_months * (number - 1)
        )

        if number < terms.total_installments:
            amount = terms.installment_amount
            allocated += amount
        else:
            amount = unit_price - allocated

        drafts.append(InstallmentDraft(
            installment_number=number,
            due_date=due_date,
            amount=amount,
        ))

    if drafts[-1].amount < 0:
        raise InvalidPaymentPlanError(
            f"Price {unit_price} is too small for {terms.total_installments} installments"
        )

    return drafts
