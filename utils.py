from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, localcontext

CENTS = Decimal("0.01")


def parse_decimal(value):
    normalized = str(value).strip().replace(",", ".")
    amount = Decimal(normalized)
    if not amount.is_finite():
        raise ValueError(f"Amount is not a finite number: {value!r}")
    return amount


def _digits_needed(value, places):
    digits = len(value.as_tuple().digits)
    return max(digits, value.adjusted() + 2 + places)


def round_cents(value):
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, _digits_needed(value, 2))
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def decimal_to_str(value):
    return f"{value:.2f}"


def decimal_to_plain(value):
    """Shortest plain rendering of an amount: 12.5, 10, 0.1 (never exponent form)."""
    if not value:
        return "0"
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, _digits_needed(value, 0))
        if value == value.to_integral_value():
            return str(value.quantize(Decimal("1")))
        return f"{value.normalize():f}"


def format_money(value, symbol="$"):
    return f"{symbol}{decimal_to_str(value)}"


def parse_date(date_str, formats=("%Y-%m-%d",)):
    raw = str(date_str).strip()
    for fmt in formats:
        try:
            return datetime.strptime(raw, fmt).date()
        except ValueError:
            continue
    return None


def today_iso(today=None):
    return (today or date.today()).isoformat()
