import csv
import io
import json
import os
import time
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from logging_setup import get_logger
from utils import decimal_to_plain, parse_date, parse_decimal, today_iso

logger = get_logger("expense_tracker.data_store")

SETTINGS_FILE = "settings.json"

CATEGORIES = [
    "Food",
    "Travel",
    "Rent",
    "Entertainment",
    "Healthcare",
    "Shopping",
    "Utilities",
    "Other",
]
DEFAULT_CATEGORY = "Food"

CATEGORY_COLORS = {
    "Food": "#FF6384",
    "Travel": "#36A2EB",
    "Rent": "#FFCE56",
    "Entertainment": "#4BC0C0",
    "Healthcare": "#9966FF",
    "Shopping": "#FF9F40",
    "Utilities": "#FF6384",
    "Other": "#C9CBCF",
}

CSV_HEADERS = ["Date", "Category", "Description", "Amount"]
MAX_AMOUNT = Decimal("1e30")

DEFAULT_SETTINGS = {
    "currency_symbol": "$",
    "reject_negative": False,
    "quote_csv": False,
    "log_level": "INFO",
}


# ---------------- SETTINGS ----------------
def load_settings(path=None):
    path = path or SETTINGS_FILE
    settings = dict(DEFAULT_SETTINGS)
    if not os.path.exists(path):
        return settings
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return settings
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: expected a JSON object", path)
        return settings

    for key, default in DEFAULT_SETTINGS.items():
        if key in data and isinstance(data[key], type(default)):
            settings[key] = data[key]
        elif key in data:
            logger.warning("Ignoring setting %r with wrong type in %s", key, path)
    return settings


# ---------------- RECORDS ----------------
@dataclass(frozen=True)
class ExpenseRecord:
    id: int
    amount: Decimal
    category: str
    description: str
    date: str

    def as_row(self):
        return [self.date, self.category, self.description, decimal_to_plain(self.amount)]


class ExpenseStore:
    """In-memory expense records for one session. Records are only added or removed."""

    def __init__(self, reject_negative=False, clock=None):
        self.reject_negative = reject_negative
        self._clock = clock or (lambda: time.time_ns() // 1_000_000)
        self._records = []
        self._last_id = 0

    def __len__(self):
        return len(self._records)

    def __iter__(self):
        return iter(list(self._records))

    def _next_id(self):
        candidate = self._clock()
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate

    def add(self, amount, category, description, date=None):
        amount_raw = "" if amount is None else str(amount).strip()
        description = "" if description is None else str(description).strip()
        if not amount_raw or not description:
            logger.debug("Ignored add: amount and description are required")
            return None

        try:
            value = parse_decimal(amount_raw)
        except (ValueError, InvalidOperation):
            logger.debug("Ignored add: unparseable amount %r", amount_raw)
            return None
        if value.copy_abs() >= MAX_AMOUNT:
            logger.debug("Ignored add: amount %s out of range", amount_raw)
            return None
        if self.reject_negative and value < 0:
            logger.debug("Ignored add: negative amount %s", value)
            return None

        if category not in CATEGORIES:
            logger.debug("Ignored add: unknown category %r", category)
            return None

        date_raw = "" if date is None else str(date).strip()
        if date_raw:
            parsed = parse_date(date_raw)
            if parsed is None:
                logger.debug("Ignored add: invalid date %r", date_raw)
                return None
            date_str = parsed.isoformat()
        else:
            date_str = today_iso()

        record = ExpenseRecord(
            id=self._next_id(),
            amount=value,
            category=category,
            description=description,
            date=date_str,
        )
        self._records.append(record)
        logger.info("Added expense %s: %s %s on %s", record.id, record.category, value, record.date)
        return record.id

    def remove(self, record_id):
        kept = [r for r in self._records if r.id != record_id]
        if len(kept) == len(self._records):
            logger.debug("Ignored remove: no expense with id %r", record_id)
            return
        self._records = kept
        logger.info("Removed expense %s", record_id)

    def get(self, record_id):
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def list(self):
        return list(self._records)

    def sorted_by_date(self):
        return sorted(self._records, key=lambda r: r.date, reverse=True)

    def clear(self):
        count = len(self._records)
        self._records = []
        logger.info("Cleared %d expenses", count)


# ---------------- EXPORT ----------------
def to_csv(records, quote=False):
    rows = [record.as_row() for record in records]
    if not quote:
        return "\n".join([",".join(CSV_HEADERS)] + [",".join(row) for row in rows])

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    writer.writerows(rows)
    return buf.getvalue().rstrip("\n")


def export_filename(today=None):
    return f"expenses_{today_iso(today)}.csv"


def write_csv(path, records, quote=False):
    records = list(records)
    with open(path, "w", newline="", encoding="utf-8") as f:
        f.write(to_csv(records, quote=quote))
    logger.info("Exported %d expenses to %s", len(records), path)
    return len(records)
