"""CLI smoke tests for the match, score and version commands."""

import json

import pytest
from typer.testing import CliRunner

from trackbridge.infrastructure.cli.app import app


@pytest.fixture
def runner():
    """CLI test runner."""
    return CliRunner()


@pytest.fixture
def spotify_playlist_file(tmp_path):
    """Source playlist export in Spotify's track-object shape."""
    tracks = [
        {
            "id": "0VjIjW4GlUZAMYd2vXMi3b",
            "name": "Blinding Lights",
            "artists": [{"name": "The Weeknd"}],
            "album": {"name": "After Hours"},
            "duration_ms": 200040,
            "external_ids": {"isrc": "USUM71703861"},
        },
        {
            "id": "63OQupATfueTdZMWTxW03A",
            "name": "Karma Police",
            "artists": [{"name": "Radiohead"}],
            "album": {"name": "OK Computer"},
            "duration_ms": 264066,
        },
        {
            "id": "5nujrmhLynf4yMoMtj8AQF",
            "name": "Levitating",
            "artists": [{"name": "Dua Lipa"}],
            "album": {"name": "Future Nostalgia"},
            "duration_ms": 203064,
        },
    ]
    path = tmp_path / "playlist.json"
    path.write_text(json.dumps(tracks), encoding="utf-8")
    return path


@pytest.fixture
def apple_catalog_file(tmp_path):
    """Target catalog in Apple Music's song-resource shape."""
    songs = [
        {
            "id": "1488408568",
            "attributes": {
                "name": "Blinding Lights",
                "artistName": "The Weeknd",
                "albumName": "After Hours",
                "durationInMillis": 201570,
                "isrc": "USUM71703861",
            },
        },
        {
            "id": "1440857786",
            "attributes": {
                "name": "Karma Police",
                "artistName": "Radiohead",
                "albumName": "OK Computer",
                "durationInMillis": 264066,
            },
        },
    ]
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"data": songs}), encoding="utf-8")
    return path


class TestMatchCommand:
    def test_match_writes_report(self, runner, spotify_playlist_file, apple_catalog_file, tmp_path):
        """Test an end-to-end match run with a JSON report."""
        report_path = tmp_path / "report.json"

        result = runner.invoke(
            app,
            [
                "match",
                str(spotify_playlist_file),
                "--catalog",
                str(apple_catalog_file),
                "--output",
                str(report_path),
            ],
        )

        assert result.exit_code == 0, result.output
        report = json.loads(report_path.read_text(encoding="utf-8"))
        assert report["summary"]["total"] == 3
        assert report["summary"]["matched"] == 2
        assert report["summary"]["unavailable"] == 1
        assert [m["match"]["method"] for m in report["matched"]] == ["ISRC", "METADATA"]
        assert report["unavailable"][0]["source_track"]["name"] == "Levitating"

    def test_match_with_concurrency(self, runner, spotify_playlist_file, apple_catalog_file):
        result = runner.invoke(
            app,
            [
                "match",
                str(spotify_playlist_file),
                "-c",
                str(apple_catalog_file),
                "--concurrency",
                "3",
                "--storefront",
                "gb",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Match Rate" in result.output

    def test_invalid_catalog_file_exits_with_error(self, runner, spotify_playlist_file, tmp_path):
        """Test that a broken catalog is reported and exits non-zero."""
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"name": "not a list"}), encoding="utf-8")

        result = runner.invoke(
            app, ["match", str(spotify_playlist_file), "--catalog", str(bad)]
        )

        assert result.exit_code == 1
        assert "Error during match command" in result.output

    def test_missing_source_file(self, runner, apple_catalog_file, tmp_path):
        result = runner.invoke(
            app,
            ["match", str(tmp_path / "missing.json"), "--catalog", str(apple_catalog_file)],
        )

        assert result.exit_code != 0


class TestScoreCommand:
    def test_score_identical_records(self, runner, tmp_path):
        """Test the evidence table for two identical records."""
        record = {
            "name": "Blinding Lights",
            "artists": ["The Weeknd"],
            "album_name": "After Hours",
            "duration_ms": 200040,
        }
        first = tmp_path / "a.json"
        second = tmp_path / "b.json"
        first.write_text(json.dumps(record), encoding="utf-8")
        second.write_text(json.dumps([record]), encoding="utf-8")

        result = runner.invoke(app, ["score", str(first), str(second)])

        assert result.exit_code == 0, result.output
        assert "100" in result.output
        assert "Score Evidence" in result.output

    def test_bracketed_titles_printed_literally(self, runner, tmp_path):
        """Test that square brackets in track names are not read as markup."""
        record = {"name": "Intro [/dim]", "artists": ["[bold]Collective"]}
        first = tmp_path / "a.json"
        first.write_text(json.dumps(record), encoding="utf-8")

        result = runner.invoke(app, ["score", str(first), str(first)])

        assert result.exit_code == 0, result.output
        assert "[bold]Collective - Intro [/dim]" in result.output


def test_version(runner):
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "Trackbridge" in result.output


def test_help_lists_commands(runner):
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    for command in ("match", "score", "version"):
        assert command in result.output
