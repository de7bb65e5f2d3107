"""Display helpers for event names, slugs and ratings."""

import math
import re
from datetime import datetime
from typing import Optional

import pandas as pd

# "(4/5/2024)" or "(04/05/2024)" anywhere in the event name
_EVENT_DATE_PATTERN = re.compile(r'\((\d{1,2}/\d{1,2}/\d{4})\)', re.ASCII)
_EVENT_DATE_WITH_SPACE_PATTERN = re.compile(r'\s*\([0-9]{1,2}/[0-9]{1,2}/[0-9]{4}\)')

_SLUG_SEPARATORS = re.compile(r'[\s/_]+')
_SLUG_INVALID_CHARS = re.compile(r'[^a-z0-9-]+')
_SLUG_REPEATED_DASHES = re.compile(r'-{2,}')


def slugify(text) -> str:
    """
    Convert an event name into a URL-safe slug.

    "Block Wars (4/5/2024)" → "block-wars-4-5-2024"

    Args:
        text: Event name (any value; falsy values give "")

    Returns:
        Slug containing only a-z, 0-9 and single dashes, never starting or ending with a dash
    """
    if not text:
        return ''

    slug = str(text).lower()
    slug = _SLUG_SEPARATORS.sub('-', slug)
    slug = _SLUG_INVALID_CHARS.sub('', slug)
    slug = _SLUG_REPEATED_DASHES.sub('-', slug)
    return slug.strip('-')


def extract_date_from_event_name(event_name) -> Optional[str]:
    """
    Extract the date string (e.g. "10/19/2025") embedded in an event name.

    Returns:
        The date exactly as written in the name, or None if there is none
    """
    if not event_name:
        return None
    match = _EVENT_DATE_PATTERN.search(str(event_name))
    return match.group(1) if match else None


def strip_date_from_event_name(event_name) -> str:
    """
    Remove the "(M/D/YYYY)" portion of an event name for a cleaner display.

    "Block Wars (4/5/2024)" → "Block Wars"
    """
    if not event_name:
        return ''

    stripped = str(event_name).strip()
    # Repeat until nothing is left to strip so that stripping twice is a no-op
    while True:
        cleaned = _EVENT_DATE_WITH_SPACE_PATTERN.sub('', stripped, count=1).strip()
        if cleaned == stripped:
            return cleaned
        stripped = cleaned


def parse_event_name_date(event_name) -> Optional[datetime]:
    """Parse the embedded event date into a datetime, None if absent or not a real date."""
    date_str = extract_date_from_event_name(event_name)
    if not date_str:
        return None
    try:
        return datetime.strptime(date_str, '%m/%d/%Y')
    except ValueError:
        # e.g. "13/45/2024"
        return None


def to_rating(value) -> Optional[float]:
    """
    Best-effort numeric parsing of a rating field.

    Handles: 1234.5, "1234.5", " 1234.5 " → 1234.5
    Returns None for empty, non-numeric, boolean or non-finite values.
    """
    if value is None or isinstance(value, bool):
        return None
    # float() accepts "1_200"; exported ratings never use digit separators
    if isinstance(value, str) and '_' in value:
        return None
    try:
        rating = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(rating):
        return None
    return rating


def to_rank(value) -> Optional[int]:
    """Coerce a rank field to a positive int, None when absent or invalid."""
    rating = to_rating(value)
    if rating is None:
        return None
    rank = int(rating)
    if rank != rating or rank < 1:
        return None
    return rank


def format_rating(value) -> str:
    """Format a rating with two decimals, "N/A" if it is not a number."""
    rating = to_rating(value)
    if rating is None:
        return 'N/A'
    return f"{rating:.2f}"


def format_rating_change(value) -> str:
    """Format a rating change as a signed whole number ("+12", "-7")."""
    change = to_rating(value)
    if change is None:
        return ''
    if change >= 0:
        return f"+{change:.0f}"
    return f"{change:.0f}"


def format_event_date(value) -> str:
    """Render an event date as "April 5, 2024", "" when it can't be parsed."""
    if value is None:
        return ''
    timestamp = pd.to_datetime(value, errors='coerce')
    if pd.isna(timestamp):
        return ''
    return f"{timestamp.strftime('%B')} {timestamp.day}, {timestamp.year}"
