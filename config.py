import os
import pathlib
from dotenv import load_dotenv

load_dotenv()

# Default paths are resolved from this file's location so the app works regardless of cwd
_ROOT_DIR = pathlib.Path(__file__).parent.resolve()


class Config:
    """Site configuration settings"""

    # Data settings
    DATA_DIR = pathlib.Path(os.getenv('ELO_DATA_DIR', str(_ROOT_DIR / 'public')))
    LEADERBOARD_FILE = os.getenv('ELO_LEADERBOARD_FILE', 'final_leaderboard.json')
    HISTORY_FILE = os.getenv('ELO_HISTORY_FILE', 'rating_history_full.json')

    # Static assets (logos, avatars) live under this directory as /logos/* and /avatars/*
    ASSET_DIR = pathlib.Path(os.getenv('ELO_ASSET_DIR', str(_ROOT_DIR / 'public')))

    # Rating settings
    BASELINE_RATING = 1000.0
    DECAY_EVENT_NAME = "Rating Decay"

    # Avatar download settings
    AVATAR_URL_TEMPLATE = os.getenv('ELO_AVATAR_URL', 'http://cravatar.eu/helmavatar/{name}/32')
    AVATAR_DOWNLOAD_DELAY = float(os.getenv('ELO_AVATAR_DELAY', '0.1'))

    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'

    @classmethod
    def validate(cls):
        """Validate that configuration values make sense"""
        if cls.BASELINE_RATING <= 0:
            raise ValueError(f"BASELINE_RATING must be positive (got {cls.BASELINE_RATING})")
        if cls.AVATAR_DOWNLOAD_DELAY < 0:
            raise ValueError(f"ELO_AVATAR_DELAY cannot be negative (got {cls.AVATAR_DOWNLOAD_DELAY})")
        return True
