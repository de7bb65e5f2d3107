import json
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))


@pytest.fixture
def leaderboard_records():
    return [
        {"Rank": 2, "Player_Name": "Grian", "Rating": 1180.5},
        {"Rank": 1, "Player_Name": "Dream", "Rating": 1420.25},
        {"Rank": 3, "Player_Name": "Smajor", "Rating": 990.0},
        {"Rank": 4, "Player_Name": "Newcomer", "Rating": 1000.0},
    ]


@pytest.fixture
def history_records():
    return [
        {"player_name": "Dream", "event_name": "Block Wars (4/5/2024)", "event_date": "2024-04-05",
         "rating_after": "1200", "rank_at_event": 1},
        {"player_name": "Grian", "event_name": "Block Wars (4/5/2024)", "event_date": "2024-04-05",
         "rating_after": "1000", "rank_at_event": 2},
        {"player_name": "Smajor", "event_name": "Block Wars (4/5/2024)", "event_date": "2024-04-05",
         "rating_after": "not-a-number", "rank_at_event": 3},
        {"player_name": "Dream", "event_name": "Minecraft Championship 40 (10/19/2025)",
         "event_date": "2025-10-19", "rating_after": 1450.0, "rank_at_event": 1},
        {"player_name": "Grian", "event_name": "Minecraft Championship 40 (10/19/2025)",
         "event_date": "2025-10-19", "rating_after": 1200.0, "rank_at_event": 2},
        {"player_name": "Dream", "event_name": "Rating Decay", "rating_after": 1420.25},
        {"player_name": "Smajor", "event_name": "Showdown", "event_date": "2024-01-01",
         "rating_after": "990", "rank_at_event": 1},
    ]


@pytest.fixture
def data_dir(tmp_path, leaderboard_records, history_records):
    (tmp_path / "final_leaderboard.json").write_text(json.dumps(leaderboard_records), encoding="utf-8")
    (tmp_path / "rating_history_full.json").write_text(json.dumps(history_records), encoding="utf-8")
    return tmp_path
