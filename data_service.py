"""
Data access for the public site.

The two exported JSON files are read once into a SiteData object. The app
creates it a single time per server process (see get_site_data in app.py) and
hands it to every view; nothing here is module-level state.
"""

import json
import pathlib
from typing import Dict, List, Optional

import pandas as pd

from config import Config
from event_engine import aggregate_events, get_event_results, is_competitive_event
from exceptions import DataFileNotFoundError, DataFileFormatError
from player_engine import PlayerProfile, derive_player_profile
from utils.formatters import slugify
from utils.logger import setup_logger

logger = setup_logger(__name__)

LEADERBOARD_COLUMNS = ['Rank', 'Player_Name', 'Rating']
HISTORY_COLUMNS = ['player_name', 'event_name', 'event_date', 'rating_after', 'rank_at_event']


def read_json_records(path) -> List[Dict]:
    """
    Read a JSON file holding a list of records.

    An object of records ({"0": {...}, "1": {...}}) is accepted as well and
    read in value order.

    Raises:
        DataFileNotFoundError: The file does not exist
        DataFileFormatError: The file is not JSON or not a collection of objects
    """
    path = pathlib.Path(path)
    if not path.is_file():
        raise DataFileNotFoundError(path)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DataFileFormatError(path, str(e)) from e

    if isinstance(data, dict):
        data = list(data.values())
    if not isinstance(data, list):
        raise DataFileFormatError(path, f"expected a list of records, got {type(data).__name__}")
    if not all(isinstance(record, dict) for record in data):
        raise DataFileFormatError(path, "every record must be a JSON object")

    return data


class SiteData:
    """
    Immutable in-memory view of the leaderboard and rating history.

    Lookup maps are built once at construction:
        - player name → leaderboard record
        - player name → that player's history records (file order)
        - event slug → event name (first event in file order wins on slug collisions)
    """

    def __init__(self, leaderboard_records: List[Dict], history_records: List[Dict]):
        self.leaderboard_records = list(leaderboard_records)
        self.history_records = list(history_records)

        self.leaderboard_df = pd.DataFrame(self.leaderboard_records)
        for column in LEADERBOARD_COLUMNS:
            if column not in self.leaderboard_df.columns:
                self.leaderboard_df[column] = None
        self.leaderboard_df['Rating'] = pd.to_numeric(self.leaderboard_df['Rating'], errors='coerce')
        self.leaderboard_df['Rank'] = pd.to_numeric(self.leaderboard_df['Rank'], errors='coerce')
        self.leaderboard_df = self.leaderboard_df.sort_values('Rank', kind='mergesort', na_position='last')
        self.leaderboard_df = self.leaderboard_df.reset_index(drop=True)

        self.history_df = pd.DataFrame(self.history_records)
        for column in HISTORY_COLUMNS:
            if column not in self.history_df.columns:
                self.history_df[column] = None

        self._players_by_name = {}
        for record in self.leaderboard_records:
            name = record.get('Player_Name')
            if name is not None:
                self._players_by_name.setdefault(name, record)

        self._history_by_player = {}
        self._event_names_by_slug = {}
        for record in self.history_records:
            self._history_by_player.setdefault(record.get('player_name'), []).append(record)

            event_name = record.get('event_name')
            if is_competitive_event(event_name):
                slug = slugify(event_name)
                if slug:
                    self._event_names_by_slug.setdefault(slug, event_name)

        self._events_df = None

    @property
    def player_count(self) -> int:
        return len(self.leaderboard_records)

    @property
    def event_count(self) -> int:
        return len(self.get_events())

    def get_events(self) -> pd.DataFrame:
        """Per-event summary table (computed on first use, then reused)."""
        if self._events_df is None:
            self._events_df = aggregate_events(self.history_records)
        return self._events_df.copy()

    def search_players(self, query: Optional[str] = None) -> pd.DataFrame:
        """Leaderboard rows by rank, optionally filtered by a case-insensitive name search."""
        players_df = self.leaderboard_df
        if query:
            names = players_df['Player_Name'].astype(str).str.lower()
            players_df = players_df[names.str.contains(query.lower(), regex=False, na=False)]
        return players_df[LEADERBOARD_COLUMNS].copy()

    def get_player_names(self) -> List[str]:
        """Player names in leaderboard order."""
        return [name for name in self.leaderboard_df['Player_Name'].tolist() if name is not None]

    def get_player_summary(self, player_name: str) -> Optional[Dict]:
        """Leaderboard record for a player, None if they are not on the leaderboard."""
        return self._players_by_name.get(player_name)

    def get_player_history(self, player_name: str) -> List[Dict]:
        """A player's history records in file order (empty list if none)."""
        return list(self._history_by_player.get(player_name, []))

    def get_player_profile(self, player_name: str) -> Optional[PlayerProfile]:
        """Derived profile for a leaderboard player, None if the player is unknown."""
        summary = self.get_player_summary(player_name)
        if summary is None:
            return None
        return derive_player_profile(
            self.get_player_history(player_name),
            current_rating=summary.get('Rating'),
            baseline=Config.BASELINE_RATING,
        )

    def find_event_by_slug(self, slug: str) -> Optional[str]:
        """Original event name for a URL slug, None if no event has that slug."""
        if not slug:
            return None
        return self._event_names_by_slug.get(slug)

    def get_event_results(self, event_name: str) -> pd.DataFrame:
        """All participations in an event ordered by placement."""
        return get_event_results(self.history_records, event_name)


def load_site_data(data_dir=None) -> SiteData:
    """
    Read final_leaderboard.json and rating_history_full.json from data_dir.

    Args:
        data_dir: Directory holding both files (defaults to Config.DATA_DIR)

    Returns:
        SiteData ready to be shared by every page

    Raises:
        SiteDataError subclasses when a file is missing or malformed
    """
    data_dir = pathlib.Path(data_dir) if data_dir is not None else Config.DATA_DIR

    logger.info(f"Performing one-time data load from {data_dir}")
    leaderboard_records = read_json_records(data_dir / Config.LEADERBOARD_FILE)
    history_records = read_json_records(data_dir / Config.HISTORY_FILE)

    site_data = SiteData(leaderboard_records, history_records)
    logger.info(
        f"Loaded {site_data.player_count} players and {len(history_records)} history records "
        f"({site_data.event_count} events)"
    )
    return site_data
