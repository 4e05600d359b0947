# grocery/services/pricing.py
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Tuple

from grocery.utils.settings import TAX_RATE

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    tax: Decimal
    discount: Decimal
    total: Decimal


def round_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_totals(
    lines: Iterable[Tuple[Decimal, int]],
    discount_percentage: int | Decimal | None = None,
    tax_rate: Decimal = TAX_RATE,
) -> OrderTotals:
    """
    Liczy kwoty zamowienia z par (cena jednostkowa, ilosc).

    subtotal = suma cena * ilosc
    tax      = subtotal * tax_rate
    discount = subtotal * procent / 100, procent obciety do 0-100
    total    = subtotal + tax - discount

    Kazda kwota zaokraglona do centow (half-up). Pusta lista daje same zera.
    """
    subtotal = round_money(
        sum((Decimal(str(price)) * qty for price, qty in lines), ZERO)
    )
    tax = round_money(subtotal * tax_rate)

    pct = Decimal(str(discount_percentage)) if discount_percentage else ZERO
    pct = min(max(pct, Decimal(0)), Decimal(100))
    discount = round_money(subtotal * pct / Decimal(100))

    total = subtotal + tax - discount

    return OrderTotals(subtotal=subtotal, tax=tax, discount=discount, total=total)


def to_minor_units(amount: Decimal) -> int:
    """Kwota w dolarach -> centy dla bramki platniczej."""
    return int((Decimal(str(amount)) * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP))
