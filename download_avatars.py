"""
Download every leaderboard player's avatar into <asset dir>/avatars.

Run this before deploying so the profile pages can show local avatars:

    python download_avatars.py --delay 0.5
"""
import argparse
import pathlib
import time
from typing import Dict

import requests

from config import Config
from data_service import read_json_records
from utils.logger import setup_logger

logger = setup_logger(__name__)

REQUEST_TIMEOUT = 10


def download_avatars(leaderboard_records, output_dir, delay: float = None,
                     url_template: str = None, session=None) -> Dict[str, int]:
    """
    Fetch avatars one player at a time, in leaderboard order.

    Players whose file already exists are skipped. A failed download is logged
    and does not stop the run.

    Args:
        leaderboard_records: Leaderboard records (need 'Player_Name')
        output_dir: Directory the <name>.png files are written to
        delay: Seconds to wait between requests (defaults to Config.AVATAR_DOWNLOAD_DELAY)
        url_template: Avatar URL with a {name} placeholder (defaults to Config.AVATAR_URL_TEMPLATE)
        session: Optional requests.Session

    Returns:
        Counts of downloaded, skipped and failed avatars
    """
    if delay is None:
        delay = Config.AVATAR_DOWNLOAD_DELAY
    if url_template is None:
        url_template = Config.AVATAR_URL_TEMPLATE
    http = session or requests.Session()

    output_dir = pathlib.Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_root = output_dir.resolve()

    summary = {'downloaded': 0, 'skipped': 0, 'failed': 0}
    logger.info("Starting avatar download process...")

    for record in leaderboard_records:
        player_name = record.get('Player_Name')
        if not player_name:
            continue

        output_path = output_dir / f"{player_name}.png"
        if output_path.resolve().parent != output_root:
            logger.warning(f"Refusing to write avatar outside {output_dir} for player name '{player_name}'")
            summary['failed'] += 1
            continue

        if output_path.exists():
            logger.debug(f"Avatar for {player_name} already exists. Skipping.")
            summary['skipped'] += 1
            continue

        try:
            logger.info(f"Fetching avatar for {player_name}...")
            response = http.get(url_template.format(name=player_name), timeout=REQUEST_TIMEOUT)
            if not response.ok:
                logger.warning(f"Avatar not found for {player_name} (status: {response.status_code}). Skipping.")
                summary['failed'] += 1
            else:
                output_path.write_bytes(response.content)
                logger.info(f"Successfully downloaded avatar for {player_name}")
                summary['downloaded'] += 1
        except requests.RequestException as e:
            logger.error(f"Failed to download avatar for {player_name}: {e}")
            summary['failed'] += 1

        if delay > 0:
            time.sleep(delay)

    logger.info(
        f"Avatar download finished: {summary['downloaded']} downloaded, "
        f"{summary['skipped']} skipped, {summary['failed']} failed"
    )
    return summary


def main(argv=None):
    parser = argparse.ArgumentParser(description="Download player avatars for the leaderboard site.")
    parser.add_argument('--data-dir', type=pathlib.Path, default=Config.DATA_DIR,
                        help="Directory containing final_leaderboard.json")
    parser.add_argument('--output-dir', type=pathlib.Path, default=Config.ASSET_DIR / 'avatars',
                        help="Directory avatars are saved to")
    parser.add_argument('--delay', type=float, default=Config.AVATAR_DOWNLOAD_DELAY,
                        help="Seconds to wait between requests")
    args = parser.parse_args(argv)

    leaderboard_records = read_json_records(args.data_dir / Config.LEADERBOARD_FILE)
    download_avatars(leaderboard_records, args.output_dir, delay=args.delay)


if __name__ == "__main__":
    main()
