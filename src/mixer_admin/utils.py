"""
Utility functions for formatting records in the admin dashboard.

Provides helpers for:
- Date parsing and display
- Indian rupee formatting, including lakh/crore grouping and K/L/Cr
  abbreviations
- Phone and GST number display
- Quotation line and document totals
- Initials for avatars and growth percentages for stat cards
"""

import re
from datetime import date, datetime
from typing import Any, Iterable, Mapping


def parse_date(value: Any) -> datetime | None:
    """
    Parse an API date or timestamp.

    Args:
        value: ISO date ("2024-01-05"), ISO timestamp (a trailing "Z" is
               accepted), a date/datetime, or None.

    Returns:
        datetime if parsing succeeds, None otherwise.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.strptime(text[:10], "%Y-%m-%d")
    except ValueError:
        return None


def format_date(value: Any, fmt: str = "%d %b %Y") -> str:
    """Format a date for display, e.g. "05 Jan 2024"; "-" when missing."""
    parsed = parse_date(value)
    return parsed.strftime(fmt) if parsed else "-"


def group_indian(integer: int) -> str:
    """Group digits the Indian way: 1234567 -> "12,34,567"."""
    digits = str(abs(integer))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups + [tail])
    return f"-{digits}" if integer < 0 else digits


def format_currency(value: Any, symbol: str = "₹", decimals: int = 2) -> str:
    """
    Format an amount in rupees with Indian digit grouping.

    Trailing ".00" is dropped, so 150000 renders as "₹1,50,000" and
    1234.5 as "₹1,234.50".
    """
    amount = to_number(value)
    negative = amount < 0
    rounded = round(abs(amount), decimals)
    integer = int(rounded)
    fraction = round(rounded - integer, decimals)
    text = group_indian(integer)
    if decimals and fraction:
        text += f"{fraction:.{decimals}f}"[1:]
    return f"-{symbol}{text}" if negative else f"{symbol}{text}"


def format_compact(value: Any) -> str:
    """Abbreviate large amounts: 1.5K, 2.3L (lakh), 1.2Cr (crore)."""
    amount = to_number(value)
    for threshold, suffix in ((1e7, "Cr"), (1e5, "L"), (1e3, "K")):
        if abs(amount) >= threshold:
            return f"{amount / threshold:.1f}".rstrip("0").rstrip(".") + suffix
    return f"{amount:g}"


def format_phone(phone: str | None) -> str:
    """Render 10-digit numbers as "98765 43210"; others unchanged."""
    if not phone:
        return ""
    digits = re.sub(r"\D", "", phone)
    if len(digits) == 10:
        return f"{digits[:5]} {digits[5:]}"
    return phone


def format_gst(gst_number: str | None) -> str:
    return gst_number.strip().upper() if gst_number else ""


def format_percent(value: Any, decimals: int = 1) -> str:
    return f"{to_number(value):.{decimals}f}%"


def initials(name: str | None, limit: int = 2) -> str:
    """First letters of the first ``limit`` words, upper-cased."""
    if not name:
        return "?"
    return "".join(word[0] for word in name.split()[:limit]).upper() or "?"


def growth_percentage(current: Any, previous: Any) -> float:
    """Relative change from ``previous`` to ``current`` in percent."""
    current, previous = to_number(current), to_number(previous)
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return round((current - previous) / previous * 100, 1)


def line_total(quantity: Any, unit_price: Any, gst_percentage: Any = 0) -> dict:
    """
    Totals of one quotation line.

    Returns:
        ``subtotal``, ``gst_amount`` and ``total`` rounded to 2 decimals.
    """
    subtotal = to_number(quantity) * to_number(unit_price)
    gst_amount = subtotal * to_number(gst_percentage) / 100
    return {
        "subtotal": round(subtotal, 2),
        "gst_amount": round(gst_amount, 2),
        "total": round(subtotal + gst_amount, 2),
    }


def quotation_totals(items: Iterable[Mapping[str, Any]], gst_percentage: Any = 18) -> dict:
    """Subtotal, GST and grand total of a quotation's items."""
    subtotal = sum(
        to_number(item.get("quantity")) * to_number(item.get("unit_price")) for item in items
    )
    gst_amount = subtotal * to_number(gst_percentage) / 100
    return {
        "subtotal": round(subtotal, 2),
        "gst_amount": round(gst_amount, 2),
        "grand_total": round(subtotal + gst_amount, 2),
    }


def matches_query(record: Mapping[str, Any], query: str, fields: Iterable[str]) -> bool:
    """Check if any of ``fields`` of a record contains the search query."""
    if not query or not query.strip():
        return True
    normalized = query.strip().lower()
    return any(normalized in str(record.get(name) or "").lower() for name in fields)


def to_number(value: Any) -> float:
    if value is None or value == "" or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0
