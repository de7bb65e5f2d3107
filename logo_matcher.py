"""Event logo and player avatar lookup."""

import pathlib
from typing import Callable, List, Optional, Tuple

DEFAULT_LOGO = '/logos/default-event.png'
DEFAULT_AVATAR = '/avatars/default-avatar.png'

# Full event names that need a specific logo regardless of the keyword rules below
# e.g. "Minecraft Championship Pride 22": "/logos/mcc-pride.png"
SPECIFIC_LOGOS = {}


def _contains(keyword: str) -> Callable[[str], bool]:
    return lambda name: keyword in name


# Checked top to bottom against the lower-cased event name; first match wins.
# Keep more specific keywords above generic ones.
LOGO_RULES: List[Tuple[Callable[[str], bool], str]] = [
    (_contains('block wars'), '/logos/block-wars.png'),
    (_contains('minecraft championship'), '/logos/minecraft-championship.png'),
    (_contains('cube championships'), '/logos/cube-championships.png'),
    (_contains("pandora's box"), '/logos/pandoras-box.png'),
    (_contains('minecraft mayhem'), '/logos/minecraft-mayhem.png'),
    (_contains('blissful championships'), '/logos/blissful-championship.png'),
    (_contains('jackcas game nights'), '/logos/jackcas.png'),
    (_contains('chamber trials'), '/logos/chamber-trials.png'),
    (_contains('biome battle'), '/logos/biome-battle.png'),
    (_contains('klyx games'), '/logos/klyx-games.png'),
    (_contains('fusion frenzy'), '/logos/fusion-frenzy.png'),
    (_contains('showdown'), '/logos/showdown.png'),
]


def get_logo_for_event(event_name) -> str:
    """
    Find the logo path for an event.

    Exact overrides in SPECIFIC_LOGOS are checked first, then the keyword rules
    in order.

    Args:
        event_name: Full event name (e.g. "Block Wars (4/5/2024)")

    Returns:
        Web path of the logo (e.g. "/logos/block-wars.png"), DEFAULT_LOGO if nothing matches
    """
    if not event_name or not isinstance(event_name, str):
        return DEFAULT_LOGO

    if event_name in SPECIFIC_LOGOS:
        return SPECIFIC_LOGOS[event_name]

    name = event_name.lower()
    for matches, logo_path in LOGO_RULES:
        if matches(name):
            return logo_path

    return DEFAULT_LOGO


def get_avatar_for_player(player_name) -> str:
    """Web path of a player's downloaded avatar."""
    if not player_name:
        return DEFAULT_AVATAR
    return f"/avatars/{player_name}.png"


def resolve_asset_file(web_path: str, default_web_path: str, asset_dir) -> Optional[pathlib.Path]:
    """
    Map a web path like "/logos/block-wars.png" to the file under asset_dir.

    Falls back to the default asset when the file was never added (e.g. an avatar
    that failed to download), and to None when the default is missing too.
    """
    asset_dir = pathlib.Path(asset_dir).resolve()
    for candidate in (web_path, default_web_path):
        if not candidate:
            continue
        path = (asset_dir / candidate.lstrip('/')).resolve()
        # Player names end up in avatar paths; never serve anything outside asset_dir
        if asset_dir not in path.parents:
            continue
        if path.is_file():
            return path
    return None
