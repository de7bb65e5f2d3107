"""Tests for loading the JSON exports and the SiteData lookups."""

import json

import pytest

from data_service import SiteData, load_site_data, read_json_records
from exceptions import DataFileFormatError, DataFileNotFoundError, SiteDataError


def test_load_site_data(data_dir):
    site_data = load_site_data(data_dir)

    assert site_data.player_count == 4
    # Block Wars, Minecraft Championship 40 and Showdown; decay is not an event
    assert site_data.event_count == 3
    assert site_data.get_player_names() == ["Dream", "Grian", "Smajor", "Newcomer"]


def test_missing_file_raises(tmp_path):
    with pytest.raises(DataFileNotFoundError) as excinfo:
        load_site_data(tmp_path)
    assert "final_leaderboard.json" in str(excinfo.value)
    assert isinstance(excinfo.value, SiteDataError)
    assert excinfo.value.user_message.startswith("❌")


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(DataFileFormatError):
        read_json_records(path)


@pytest.mark.parametrize("payload", ['"just a string"', '[1, 2, 3]', '42'])
def test_non_record_json_raises(tmp_path, payload):
    path = tmp_path / "weird.json"
    path.write_text(payload, encoding="utf-8")

    with pytest.raises(DataFileFormatError):
        read_json_records(path)


def test_object_of_records_is_accepted(tmp_path):
    path = tmp_path / "leaderboard.json"
    path.write_text(json.dumps({"0": {"Player_Name": "A"}, "1": {"Player_Name": "B"}}), encoding="utf-8")

    assert read_json_records(path) == [{"Player_Name": "A"}, {"Player_Name": "B"}]


def test_search_players(data_dir):
    site_data = load_site_data(data_dir)

    assert site_data.search_players()['Player_Name'].tolist() == ["Dream", "Grian", "Smajor", "Newcomer"]
    assert site_data.search_players("GRI")['Player_Name'].tolist() == ["Grian"]
    assert len(site_data.search_players("zzz")) == 0


def test_player_lookup_is_exact_match(data_dir):
    site_data = load_site_data(data_dir)

    assert site_data.get_player_summary("Dream")["Rank"] == 1
    assert site_data.get_player_summary("dream") is None
    assert site_data.get_player_profile("dream") is None


def test_player_profile(data_dir):
    site_data = load_site_data(data_dir)

    profile = site_data.get_player_profile("Dream")

    assert profile.peak_rating == 1450.0
    assert [p.event_name for p in profile.chart_points] == [
        "Block Wars (4/5/2024)",
        "Minecraft Championship 40 (10/19/2025)",
        "Rating Decay",
    ]
    assert [p.rating_change for p in profile.chart_points] == [200.0, 250.0, pytest.approx(-29.75)]
    assert len(profile.ranked_events) == 2


def test_player_without_history_uses_leaderboard_rating(data_dir):
    profile = load_site_data(data_dir).get_player_profile("Newcomer")

    assert profile.peak_rating_display == "1000.00"
    assert profile.chart_points == []


def test_find_event_by_slug(data_dir):
    site_data = load_site_data(data_dir)

    assert site_data.find_event_by_slug("block-wars-4-5-2024") == "Block Wars (4/5/2024)"
    assert site_data.find_event_by_slug("rating-decay") is None
    assert site_data.find_event_by_slug("missing") is None
    assert site_data.find_event_by_slug("") is None


def test_slug_collision_first_event_in_file_wins():
    history = [
        {"player_name": "A", "event_name": "Biome Battle!", "rating_after": 1000},
        {"player_name": "B", "event_name": "Biome Battle?", "rating_after": 1000},
    ]

    site_data = SiteData([], history)

    assert site_data.find_event_by_slug("biome-battle") == "Biome Battle!"


def test_event_results(data_dir):
    results = load_site_data(data_dir).get_event_results("Block Wars (4/5/2024)")

    assert results['player_name'].tolist() == ["Dream", "Grian", "Smajor"]
    assert results['rank_at_event'].tolist() == [1, 2, 3]


def test_get_events_returns_a_copy(data_dir):
    site_data = load_site_data(data_dir)

    events = site_data.get_events()
    events.drop(events.index, inplace=True)

    assert site_data.event_count == 3


def test_empty_data():
    site_data = SiteData([], [])

    assert site_data.player_count == 0
    assert site_data.event_count == 0
    assert len(site_data.search_players("x")) == 0
    assert site_data.get_player_history("Anyone") == []
