"""
Player Derivation Engine

Turns a player's rating history into the data shown on the profile page: peak
rating, the chronological rating chart series and the event history list.
"""

import json
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Union

import pandas as pd

from config import Config
from utils.formatters import format_rating, to_rating, to_rank

RANK_MEDALS = {1: 'gold', 2: 'silver', 3: 'bronze'}


@dataclass
class ChartPoint:
    """One point of the rating progression chart."""
    timestamp: Optional[pd.Timestamp]
    rating: Optional[float]
    event_name: Optional[str]
    rating_change: Optional[float]
    rank_at_event: Optional[int]


@dataclass
class PlayerProfile:
    """Everything the profile page derives from a player's history."""
    peak_rating: float
    chart_points: List[ChartPoint] = field(default_factory=list)
    history_newest_first: List[Dict] = field(default_factory=list)
    ranked_events: List[Dict] = field(default_factory=list)

    @property
    def peak_rating_display(self) -> str:
        return format_rating(self.peak_rating)

    def chart_dataframe(self) -> pd.DataFrame:
        """Chart series as a DataFrame for plotly."""
        return pd.DataFrame(
            [vars(point) for point in self.chart_points],
            columns=['timestamp', 'rating', 'event_name', 'rating_change', 'rank_at_event']
        )


def parse_event_date(value) -> Optional[pd.Timestamp]:
    """
    Parse an event_date field into a naive UTC timestamp.

    Returns None for missing or unparseable dates (rating decay entries often have none).
    """
    if value is None or value == '':
        return None
    try:
        timestamp = pd.to_datetime(value, errors='coerce')
    except (TypeError, ValueError, OverflowError):
        return None
    if pd.isna(timestamp):
        return None
    if timestamp.tzinfo is not None:
        timestamp = timestamp.tz_convert('UTC').tz_localize(None)
    return timestamp


def _chronological_key(record: Dict):
    timestamp = parse_event_date(record.get('event_date'))
    # Undated records go last; the serialized record breaks ties so input order never matters
    return (
        timestamp is None,
        timestamp if timestamp is not None else pd.Timestamp.min,
        json.dumps(record, sort_keys=True, default=str),
    )


def sort_history_chronologically(history: Union[pd.DataFrame, Iterable[Dict]]) -> List[Dict]:
    """Sort history records by event_date ascending, undated records last."""
    if history is None:
        return []
    if isinstance(history, pd.DataFrame):
        records = history.to_dict('records')
    else:
        records = list(history)
    return sorted(records, key=_chronological_key)


def get_rank_medal(rank) -> Optional[str]:
    """'gold', 'silver' or 'bronze' for podium finishes, None otherwise."""
    return RANK_MEDALS.get(to_rank(rank))


def derive_player_profile(history: Union[pd.DataFrame, Iterable[Dict]],
                          current_rating=None,
                          baseline: float = None) -> PlayerProfile:
    """
    Derive the profile data for one player.

    Args:
        history: The player's rating history records, in any order
        current_rating: The player's current leaderboard rating (used as the peak
                        when the history has no valid rating)
        baseline: Rating assumed before the player's first event (defaults to Config.BASELINE_RATING)

    Returns:
        PlayerProfile with peak rating, chart points (oldest first), the history
        newest first and the ranked subset of that history
    """
    if baseline is None:
        baseline = Config.BASELINE_RATING

    chronological = sort_history_chronologically(history)

    peak = 0.0
    has_valid_rating = False
    chart_points = []
    previous_rating = baseline

    for index, record in enumerate(chronological):
        rating = to_rating(record.get('rating_after'))
        if rating is not None:
            has_valid_rating = True
            peak = max(peak, rating)

        if index > 0:
            previous_rating = to_rating(chronological[index - 1].get('rating_after'))

        rating_change = None
        if rating is not None and previous_rating is not None:
            rating_change = rating - previous_rating

        chart_points.append(ChartPoint(
            timestamp=parse_event_date(record.get('event_date')),
            rating=rating,
            event_name=record.get('event_name'),
            rating_change=rating_change,
            rank_at_event=to_rank(record.get('rank_at_event')),
        ))

    if not has_valid_rating:
        peak = to_rating(current_rating) or 0.0

    history_newest_first = list(reversed(chronological))
    ranked_events = [
        record for record in history_newest_first
        if to_rank(record.get('rank_at_event')) is not None
    ]

    return PlayerProfile(
        peak_rating=peak,
        chart_points=chart_points,
        history_newest_first=history_newest_first,
        ranked_events=ranked_events,
    )
