"""Utilities Module

Formatting and filename helpers shared by the document builders.
"""
import math
import re
import unicodedata
from datetime import date, datetime
from typing import Optional, Union
from urllib.parse import quote

from .config import CURRENCY_SUFFIX

# Characters emitted by the fr grouping that the standard PDF fonts cannot encode
NARROW_NO_BREAK_SPACE = "\u202f"
NO_BREAK_SPACE = "\u00a0"

DateLike = Union[date, datetime, str, None]


def normalize_spaces(text: str) -> str:
    """
    Replace no-break spaces with ordinary spaces.

    The base-14 fonts use WinAnsi encoding, which has no glyph for U+202F.

    Args:
        text: Text produced by a locale-style formatter

    Returns:
        Text containing only ordinary spaces
    """
    return text.replace(NARROW_NO_BREAK_SPACE, " ").replace(NO_BREAK_SPACE, " ")


def group_thousands(amount: int) -> str:
    """
    Group digits the way the fr-FR locale does (narrow no-break space).

    Examples:
        >>> group_thousands(1234567) == "1\\u202f234\\u202f567"
        True
    """
    return f"{amount:,}".replace(",", NARROW_NO_BREAK_SPACE)


def round_half_up(value: float) -> int:
    """
    Round x.5 upwards, as the web client's Math.round does.

    Examples:
        >>> round_half_up(2.5)
        3
    """
    return int(math.floor(value + 0.5))


def format_xof(amount: Union[int, float]) -> str:
    """
    Format an amount in West African CFA francs.

    XOF has no subdivision, so amounts are rounded to whole units.

    Args:
        amount: Amount in XOF (may be negative for credits)

    Returns:
        Formatted string, e.g. "1 234 567 F CFA"

    Examples:
        >>> format_xof(0)
        '0 F CFA'
        >>> format_xof(1234567)
        '1 234 567 F CFA'
    """
    formatted = f"{group_thousands(round_half_up(amount))}{NO_BREAK_SPACE}{CURRENCY_SUFFIX}"
    return normalize_spaces(formatted)


def parse_date(value: DateLike) -> Optional[date]:
    """Parse an ISO date/datetime string; returns None when unparseable."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00")).date()
    except ValueError:
        return None


def format_date_fr(value: DateLike) -> str:
    """
    Format a date as dd/mm/yyyy.

    Strings that cannot be parsed are returned unchanged, empty values give "".
    """
    if value is None or value == "":
        return ""
    parsed = parse_date(value)
    if parsed is None:
        return str(value)
    return parsed.strftime("%d/%m/%Y")


def split_full_name(full_name: str):
    """
    Split "LASTNAME First Names" into (last_name, first_names).

    The first token is the family name, as written on Ivorian documents.
    """
    parts = full_name.split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


def safe_filename_component(value: str, default: str = "document") -> str:
    """
    Make a value safe for use in a filename and an HTTP header.

    Accents are folded to ASCII, anything outside [A-Za-z0-9._-] becomes an
    underscore, and leading or trailing dots and underscores are stripped.

    Args:
        value: Raw component (matricule, invoice number, ...)
        default: Returned when nothing usable remains

    Returns:
        Cleaned component
    """
    folded = unicodedata.normalize("NFKD", str(value)).encode("ascii", "ignore").decode("ascii")
    cleaned = re.sub(r"[^A-Za-z0-9._-]+", "_", folded).strip("._")

    # Limit length
    if len(cleaned) > 80:
        cleaned = cleaned[:80]

    return cleaned or default


def build_filename(label: str, identifier: str, subtype: Optional[str] = None) -> str:
    """
    Build a deterministic PDF filename: {label}_{identifier}[_{subtype}].pdf
    """
    parts = [safe_filename_component(label), safe_filename_component(identifier)]
    if subtype:
        parts.append(safe_filename_component(subtype))
    return "_".join(parts) + ".pdf"


def content_disposition(filename: str) -> str:
    """
    Build an attachment Content-Disposition header value.

    Carries an ASCII fallback plus an RFC 5987 percent-encoded filename*.
    """
    ascii_name = safe_filename_component(filename.rsplit(".pdf", 1)[0]) + ".pdf"
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename, safe='')}"
