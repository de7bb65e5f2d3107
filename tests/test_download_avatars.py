"""Tests for the avatar download script (network stubbed)."""

import json

import requests

import download_avatars


class FakeResponse:
    def __init__(self, status_code, content=b""):
        self.status_code = status_code
        self.content = content

    @property
    def ok(self):
        return 200 <= self.status_code < 300


class FakeSession:
    def __init__(self, responses):
        self.responses = responses
        self.requested = []

    def get(self, url, timeout=None):
        self.requested.append(url)
        result = self.responses[url]
        if isinstance(result, Exception):
            raise result
        return result


def test_download_avatars(tmp_path):
    output_dir = tmp_path / "avatars"
    output_dir.mkdir()
    (output_dir / "Cached.png").write_bytes(b"old")

    session = FakeSession({
        "https://example.test/Dream": FakeResponse(200, b"dream-png"),
        "https://example.test/Ghost": FakeResponse(404),
        "https://example.test/Offline": requests.ConnectionError("boom"),
    })
    leaderboard = [
        {"Player_Name": "Dream"},
        {"Player_Name": "Cached"},
        {"Player_Name": "Ghost"},
        {"Player_Name": "Offline"},
        {"Player_Name": ""},
    ]

    summary = download_avatars.download_avatars(
        leaderboard, output_dir, delay=0, url_template="https://example.test/{name}", session=session
    )

    assert summary == {"downloaded": 1, "skipped": 1, "failed": 2}
    assert (output_dir / "Dream.png").read_bytes() == b"dream-png"
    assert (output_dir / "Cached.png").read_bytes() == b"old"
    assert not (output_dir / "Ghost.png").exists()
    assert "https://example.test/Cached" not in session.requested


def test_download_creates_output_dir(tmp_path):
    output_dir = tmp_path / "public" / "avatars"
    session = FakeSession({"u/A": FakeResponse(200, b"a")})

    download_avatars.download_avatars([{"Player_Name": "A"}], output_dir, delay=0, url_template="u/{name}",
                                      session=session)

    assert (output_dir / "A.png").exists()


def test_main_reads_leaderboard(tmp_path, monkeypatch):
    (tmp_path / "final_leaderboard.json").write_text(json.dumps([{"Player_Name": "A"}]), encoding="utf-8")
    calls = []
    monkeypatch.setattr(
        download_avatars, "download_avatars",
        lambda records, output_dir, delay=None: calls.append((records, output_dir, delay))
    )

    download_avatars.main(["--data-dir", str(tmp_path), "--output-dir", str(tmp_path / "out"), "--delay", "0"])

    assert calls == [([{"Player_Name": "A"}], tmp_path / "out", 0.0)]


def test_player_names_cannot_escape_output_dir(tmp_path):
    output_dir = tmp_path / "avatars"
    session = FakeSession({"u/Dream": FakeResponse(200, b"d")})
    leaderboard = [{"Player_Name": "../escaped"}, {"Player_Name": "nested/name"}, {"Player_Name": "Dream"}]

    summary = download_avatars.download_avatars(leaderboard, output_dir, delay=0, url_template="u/{name}",
                                                session=session)

    assert summary == {"downloaded": 1, "skipped": 0, "failed": 2}
    assert not (tmp_path / "escaped.png").exists()
    assert session.requested == ["u/Dream"]
