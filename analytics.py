from datetime import date
from decimal import Decimal

from data_store import CATEGORY_COLORS
from utils import round_cents

MONTHS_SHOWN = 6
FALLBACK_COLOR = "#C9CBCF"


def month_key(record):
    return record.date[:7]


def total(records):
    return sum((r.amount for r in records), Decimal("0"))


def current_month_total(records, now=None):
    now = now or date.today()
    key = f"{now.year:04d}-{now.month:02d}"
    return total(r for r in records if month_key(r) == key)


def by_category(records):
    totals = {}
    for r in records:
        totals[r.category] = totals.get(r.category, Decimal("0")) + r.amount
    return {name: round_cents(value) for name, value in totals.items()}


def by_month(records, limit=MONTHS_SHOWN):
    totals = {}
    for r in records:
        key = month_key(r)
        totals[key] = totals.get(key, Decimal("0")) + r.amount
    ranked = sorted(totals.items())
    if limit is not None:
        ranked = ranked[-limit:] if limit > 0 else []
    return [(month, round_cents(value)) for month, value in ranked]


def category_chart_data(records):
    totals = {name: value for name, value in by_category(records).items() if value > 0}
    grand = sum(totals.values(), Decimal("0"))
    data = []
    for name, value in totals.items():
        pct = (value / grand * 100) if grand else Decimal("0")
        data.append(
            {
                "name": name,
                "value": value,
                "color": CATEGORY_COLORS.get(name, FALLBACK_COLOR),
                "percent": pct,
            }
        )
    return data


def monthly_chart_data(records, limit=MONTHS_SHOWN):
    return [{"month": month, "total": value} for month, value in by_month(records, limit)]


def summary(records, now=None):
    records = list(records)
    return {
        "total": total(records),
        "month_total": current_month_total(records, now),
        "count": len(records),
    }
