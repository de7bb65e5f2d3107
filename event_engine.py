"""
Event Aggregation Engine

Groups the rating history by event and derives, for every event, the number of
rated participants, their average rating after the event and a difficulty tier.
"""

import functools
from typing import Dict, Iterable, List, Optional, Union

import pandas as pd

from config import Config
from utils.formatters import slugify, extract_date_from_event_name, parse_event_name_date, to_rating, to_rank

# Ordered from highest to lowest; the first threshold the average reaches wins
DIFFICULTY_TIERS = [
    (1600, 'Legendary'),
    (1500, 'Master'),
    (1400, 'Expert'),
    (1300, 'Skilled'),
    (1200, 'Advanced'),
    (1100, 'Proficient'),
    (1000, 'Intermediate'),
    (900, 'Developing'),
    (800, 'Apprentice'),
    (700, 'Beginner'),
    (600, 'Novice'),
]
LOWEST_TIER = 'Noob'
UNKNOWN_TIER = 'Unknown'

EVENT_COLUMNS = ['event_name', 'slug', 'event_date', 'participant_count', 'average_rating', 'difficulty_tier']

SORT_BY_DATE = 'date'
SORT_BY_RATING = 'rating'


def _to_records(history) -> List[Dict]:
    """Accept either a DataFrame or an iterable of dicts."""
    if history is None:
        return []
    if isinstance(history, pd.DataFrame):
        return history.to_dict('records')
    return list(history)


def is_competitive_event(event_name) -> bool:
    """True for real events; empty names and rating decay entries are excluded."""
    if not event_name or not isinstance(event_name, str):
        return False
    return event_name != Config.DECAY_EVENT_NAME


def get_difficulty_tier(average_rating) -> str:
    """
    Map an event's average rating to its difficulty tier.

    Args:
        average_rating: Average rating after the event (number or numeric string)

    Returns:
        Tier label, or "Unknown" when the average is zero/missing
    """
    rating = to_rating(average_rating)
    if not rating:
        return UNKNOWN_TIER

    for threshold, tier in DIFFICULTY_TIERS:
        if rating >= threshold:
            return tier
    return LOWEST_TIER


def aggregate_events(history: Union[pd.DataFrame, Iterable[Dict]]) -> pd.DataFrame:
    """
    Build the per-event summary table from the full rating history.

    Args:
        history: Rating history records (DataFrame or list of dicts)

    Returns:
        DataFrame with one row per event in order of first appearance and columns
        event_name, slug, event_date, participant_count, average_rating, difficulty_tier
    """
    totals = {}
    for record in _to_records(history):
        event_name = record.get('event_name')
        if not is_competitive_event(event_name):
            continue

        if event_name not in totals:
            totals[event_name] = {'rating_sum': 0.0, 'participant_count': 0}

        rating = to_rating(record.get('rating_after'))
        if rating is None:
            continue
        totals[event_name]['rating_sum'] += rating
        totals[event_name]['participant_count'] += 1

    rows = []
    for event_name, total in totals.items():
        count = total['participant_count']
        average_rating = total['rating_sum'] / count if count > 0 else 0.0
        rows.append({
            'event_name': event_name,
            'slug': slugify(event_name),
            'event_date': extract_date_from_event_name(event_name),
            'participant_count': count,
            'average_rating': average_rating,
            'difficulty_tier': get_difficulty_tier(average_rating),
        })

    return pd.DataFrame(rows, columns=EVENT_COLUMNS)


def _name_sort_key(name):
    """Case-insensitive name order, lowercase before uppercase on ties ("alpha" < "Alpha" < "beta")."""
    name = str(name)
    return (name.casefold(), name.swapcase())


def _compare_by_date(a: Dict, b: Dict) -> int:
    """Newest embedded date first, undated events last, ties by reverse name."""
    date_a = parse_event_name_date(a['event_name'])
    date_b = parse_event_name_date(b['event_name'])

    if date_a and date_b and date_a != date_b:
        return -1 if date_a > date_b else 1
    if date_a and not date_b:
        return -1
    if date_b and not date_a:
        return 1

    key_a = _name_sort_key(a['event_name'])
    key_b = _name_sort_key(b['event_name'])
    if key_a == key_b:
        return 0
    return -1 if key_a > key_b else 1


def _compare_by_rating(a: Dict, b: Dict) -> int:
    """Highest average rating first."""
    rating_a = to_rating(a['average_rating']) or 0.0
    rating_b = to_rating(b['average_rating']) or 0.0
    if rating_a == rating_b:
        return 0
    return -1 if rating_a > rating_b else 1


def sort_events(events: pd.DataFrame, sort_by: str = SORT_BY_DATE, ascending: bool = False) -> pd.DataFrame:
    """
    Sort the event table for the event list.

    Args:
        events: Output of aggregate_events
        sort_by: "date" (embedded event date) or "rating" (average rating)
        ascending: Flip the default newest/highest-first order

    Returns:
        New DataFrame in display order (the input is not modified)
    """
    if sort_by == SORT_BY_DATE:
        comparator = _compare_by_date
    elif sort_by == SORT_BY_RATING:
        comparator = _compare_by_rating
    else:
        raise ValueError(f"Unknown sort key '{sort_by}' (expected '{SORT_BY_DATE}' or '{SORT_BY_RATING}')")

    direction = -1 if ascending else 1
    records = events.to_dict('records')
    records.sort(key=functools.cmp_to_key(lambda a, b: direction * comparator(a, b)))

    return pd.DataFrame(records, columns=events.columns)


def filter_events(events: pd.DataFrame, query: Optional[str]) -> pd.DataFrame:
    """Case-insensitive substring search on the event name."""
    if not query:
        return events
    mask = events['event_name'].str.lower().str.contains(query.lower(), regex=False, na=False)
    return events[mask]


def get_event_results(history: Union[pd.DataFrame, Iterable[Dict]], event_name: str) -> pd.DataFrame:
    """
    Get every participation in an event, best placement first.

    Records without a rank (shouldn't happen for real events) are listed last.

    Returns:
        DataFrame with player_name, rank_at_event, rating_after, event_date
    """
    results = [
        record for record in _to_records(history)
        if event_name and record.get('event_name') == event_name
    ]
    # sorted() is stable, so equal ranks keep file order
    results = sorted(results, key=lambda r: (to_rank(r.get('rank_at_event')) is None,
                                             to_rank(r.get('rank_at_event')) or 0))

    results_df = pd.DataFrame(results, columns=['player_name', 'rank_at_event', 'rating_after', 'event_date'])
    results_df['rating_after'] = results_df['rating_after'].map(to_rating)
    results_df['rank_at_event'] = results_df['rank_at_event'].map(to_rank).astype('Int64')
    return results_df
