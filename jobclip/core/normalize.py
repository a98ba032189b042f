"""
Normalization routines for raw job posting values.

Makes values read from heterogeneous sources comparable:
- Markup to plain text and description truncation
- Absolute and relative (multi-locale) posted dates
- Compensation strings from structured salary data
- Work arrangement keywords
- Combined "Title - ... - Company" strings
"""

import re
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any, List, Optional, Union

from bs4 import BeautifulSoup
from dateutil import parser as date_parser

from .models import WorkArrangement

logger = logging.getLogger(__name__)

DESCRIPTION_LIMIT = 1000
MIN_DESCRIPTION_LENGTH = 100
ELLIPSIS = "..."
MAX_COMPANY_LENGTH = 100
MAX_LOCATION_LENGTH = 100
MAX_TITLE_LENGTH = 200

# Ordered: the first arrangement whose keyword appears wins
WORK_ARRANGEMENT_KEYWORDS = [
    (WorkArrangement.REMOTE, ("remote", "remoto")),
    (WorkArrangement.HYBRID, ("hybrid", "híbrido", "hibrido")),
    (WorkArrangement.ON_SITE, ("on-site", "onsite", "on site", "presencial")),
    (WorkArrangement.FREELANCE, ("freelance",)),
]

# Segments naming a work arrangement are never taken as a location
ARRANGEMENT_SEGMENT_PATTERN = re.compile(
    r'\b(?:' + "|".join(
        re.escape(keyword) for _, keywords in WORK_ARRANGEMENT_KEYWORDS for keyword in keywords
    ) + r')\b',
    re.IGNORECASE,
)

RELATIVE_DATE_PATTERNS = [
    re.compile(r'(?:posted\s+)?(\d+)\s+(days?|weeks?)\s+ago', re.IGNORECASE),
    re.compile(r'(?:publicado\s+)?hace\s+(\d+)\s+(d[ií]as?|semanas?)', re.IGNORECASE),
]
ISO_DATE_PATTERN = re.compile(r'\b(\d{4}-\d{2}-\d{2})')

# Missing month or day fall back to January and the 1st; a string parsed
# against both gives different years when it carries no year at all
DATE_DEFAULTS = (datetime(1900, 1, 1), datetime(1901, 1, 1))

CURRENCY_AMOUNT = re.compile(r'[$€£]\s*[\d,]+')
CURRENCY_RANGE = re.compile(r'[$€£]\s*[\d,]+[,\d]*\s*[-–—]\s*[$€£]\s*[\d,]+[,\d]*')
SALARY_KEYWORDS = ("$", "€", "£", "salary", "compensation", "salario", "remuneración")


def clean_text(value: Any) -> str:
    """Trimmed text for string values, empty string otherwise."""
    if isinstance(value, str):
        return value.strip()
    return ""


def has_text(value: Any) -> bool:
    return bool(clean_text(value))


def html_to_text(markup: Any) -> str:
    """
    Convert an HTML fragment to its plain text content.

    Parses into a detached document, so nothing on the page is touched.
    Text nodes are concatenated as-is (like DOM textContent) and trimmed.
    """
    if not isinstance(markup, str) or not markup.strip():
        return ""
    return BeautifulSoup(markup, "html.parser").get_text().strip()


def is_substantial_description(text: Any) -> bool:
    """Descriptions of 100 characters or fewer are boilerplate snippets."""
    return len(clean_text(text)) > MIN_DESCRIPTION_LENGTH


def truncate_description(text: str) -> str:
    """Cap at 1000 characters, marking truncation with '...'."""
    text = clean_text(text)
    if len(text) > DESCRIPTION_LIMIT:
        return text[:DESCRIPTION_LIMIT] + ELLIPSIS
    return text


# Dates

def parse_posted_date(value: Any) -> Optional[str]:
    """
    Reduce an absolute date (string, or epoch milliseconds) to its UTC
    calendar date in YYYY-MM-DD form. Unparseable input returns None.

    Partial dates resolve to the start of the period ("June 2024" ->
    2024-06-01); strings without a year ("10:00", "June 5") return None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            dt = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
        return dt.date().isoformat()

    text = clean_text(value)
    if not text:
        return None

    try:
        dt = date_parser.parse(text, default=DATE_DEFAULTS[0])
        check = date_parser.parse(text, default=DATE_DEFAULTS[1])
    except (ValueError, OverflowError, TypeError) as e:
        logger.debug(f"[normalize] Unparseable date {text[:40]!r}: {e}")
        return None

    if dt.year != check.year:
        logger.debug(f"[normalize] No year in date {text[:40]!r}")
        return None

    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.date().isoformat()


def resolve_relative_date(text: Any, today: Optional[date] = None) -> Optional[str]:
    """
    Resolve "Posted 5 days ago" / "hace 2 semanas" style phrases against today.

    Weeks count as 7 days. Returns None when no phrase is present.
    """
    text = clean_text(text)
    if not text:
        return None

    for pattern in RELATIVE_DATE_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        amount = int(match.group(1))
        unit = match.group(2).lower()
        days = amount * 7 if unit.startswith(("week", "semana")) else amount
        reference = today or datetime.now(timezone.utc).date()
        return (reference - timedelta(days=days)).isoformat()

    return None


def find_iso_date(text: Any) -> Optional[str]:
    """First YYYY-MM-DD token in the text that is a real calendar date."""
    for token in ISO_DATE_PATTERN.findall(clean_text(text)):
        try:
            return date.fromisoformat(token).isoformat()
        except ValueError:
            continue
    return None


def date_from_text(text: Any, today: Optional[date] = None) -> Optional[str]:
    """Relative phrase first, then an embedded ISO date."""
    return resolve_relative_date(text, today) or find_iso_date(text)


# Compensation

def _to_number(value: Any) -> Optional[Union[int, float]]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value.replace(",", "").strip())
        except ValueError:
            return None
    return None


def format_amount(value: Union[int, float]) -> str:
    """Thousands-separated amount: 120000 -> '120,000'."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value:,}"


def _currency_prefix(currency: Any) -> str:
    currency = clean_text(currency)
    if not currency:
        return ""
    # "USD 120,000" but "$120,000"
    return f"{currency} " if currency.isalpha() else currency


def format_compensation(
    currency: Any,
    min_value: Any,
    max_value: Any = None,
    unit_text: Any = None,
) -> Optional[str]:
    """
    Display string for a salary range.

    Examples:
        ("USD", 120000, 150000, "YEAR") -> "USD 120,000 – USD 150,000 YEAR"
        ("USD", 120000, None, "YEAR")   -> "USD 120,000 YEAR"
    """
    low = _to_number(min_value)
    if not low:
        return None
    high = _to_number(max_value)
    prefix = _currency_prefix(currency)

    text = f"{prefix}{format_amount(low)}"
    if high:
        text += f" – {prefix}{format_amount(high)}"
    unit = clean_text(unit_text)
    if unit:
        text += f" {unit}"
    return text.strip()


def format_base_salary(base_salary: Any) -> Optional[str]:
    """Compensation string from a schema.org MonetaryAmount (or list of them)."""
    if isinstance(base_salary, list):
        base_salary = next((item for item in base_salary if isinstance(item, dict)), None)
    if not isinstance(base_salary, dict):
        return None

    currency = base_salary.get("currency")
    value = base_salary.get("value")
    unit_text = base_salary.get("unitText")

    if isinstance(value, dict):
        low = value.get("minValue")
        if low is None:
            low = value.get("value")
        high = value.get("maxValue")
        unit_text = value.get("unitText") or unit_text
    else:
        low, high = value, None

    return format_compensation(currency, low, high, unit_text)


def find_currency_range(text: Any) -> Optional[str]:
    """A "$100,000 - $120,000" style range inside free text."""
    match = CURRENCY_RANGE.search(clean_text(text))
    return match.group(0) if match else None


def has_currency_amount(text: Any) -> bool:
    return bool(CURRENCY_AMOUNT.search(clean_text(text)))


def looks_like_salary(text: Any) -> bool:
    lowered = clean_text(text).lower()
    return any(keyword in lowered for keyword in SALARY_KEYWORDS)


# Work arrangement

def classify_work_arrangement(text: Any) -> Optional[WorkArrangement]:
    """Map free text ("Remote - Canada", "En remoto", "OnSite") to an arrangement."""
    lowered = clean_text(text).lower()
    if not lowered:
        return None
    for arrangement, keywords in WORK_ARRANGEMENT_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return arrangement
    return None


# Combined title strings

def split_segments(text: Any, separator: str = " - ") -> List[str]:
    return [part.strip() for part in clean_text(text).split(separator) if part.strip()]


def title_segment(text: Any, separator: str = " - ") -> Optional[str]:
    """"Engineer - Acme" -> "Engineer"."""
    segments = split_segments(text, separator)
    return segments[0] if segments else None


def company_segment(text: Any, separator: str = " - ") -> Optional[str]:
    """"Engineer - Berlin - Acme" -> "Acme"; needs at least two segments."""
    segments = split_segments(text, separator)
    if len(segments) < 2:
        return None
    company = segments[-1]
    return company if len(company) < MAX_COMPANY_LENGTH else None


def looks_like_location(segment: str) -> bool:
    if ARRANGEMENT_SEGMENT_PATTERN.search(segment):
        return False
    if len(segment) >= MAX_LOCATION_LENGTH:
        return False
    return bool(
        "," in segment
        or re.search(r'[A-Z]{2,}', segment)
        or re.search(r'\d', segment)
    )


def location_segment(text: Any, separator: str = " - ") -> Optional[str]:
    """Inner segment of a 3+ segment title that looks like a place."""
    segments = split_segments(text, separator)
    if len(segments) < 3:
        return None
    for segment in segments[1:-1]:
        if looks_like_location(segment):
            return segment
    return None
