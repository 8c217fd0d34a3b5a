"""Unit tests for the eventsift CLI."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from eventsift.cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run every command away from the repo's configs/ directory."""
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def venue_file(tmp_path):
    path = tmp_path / "venues.yaml"
    path.write_text(
        "venues:\n"
        "  - id: pump-house\n"
        "    name: Pump House Theatre & Arts Centre\n"
        "    address: Local Board Road, Watford\n"
        "  - id: globe\n"
        "    name: The Globe Theatre\n"
        "    address: 21 New Globe Walk, London\n",
        encoding="utf-8",
    )
    return str(path)


class TestMainCallback:
    """Tests for global options."""

    def test_version(self):
        """--version prints the version and exits cleanly."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "eventsift" in result.output

    def test_missing_explicit_config(self):
        """An explicit config path that does not exist is an error."""
        result = runner.invoke(app, ["--config", "nope.yaml", "parse-date", "2025-07-20"])
        assert result.exit_code == 1

    def test_invalid_config(self, tmp_path):
        """Invalid configuration values stop the CLI."""
        config = tmp_path / "app.yaml"
        config.write_text("extraction:\n  fuzzy_threshold: 10\n", encoding="utf-8")

        result = runner.invoke(app, ["--config", str(config), "parse-date", "2025-07-20"])

        assert result.exit_code == 1


class TestParseDateCommand:
    """Tests for parse-date."""

    def test_json_output(self):
        """JSON output carries the parsed fields."""
        result = runner.invoke(app, ["parse-date", "SUNDAY 20TH JULY 2025 - 3PM", "--format", "json"])

        assert result.exit_code == 0
        assert '"date": "2025-07-20"' in result.output
        assert '"start_time": "15:00"' in result.output

    def test_table_output(self):
        """The table shows the ISO date."""
        result = runner.invoke(app, ["parse-date", "July 20 2025 from 2PM to 5PM"])

        assert result.exit_code == 0
        assert "2025-07-20" in result.output
        assert "17:00" in result.output


class TestExtractCommand:
    """Tests for extract."""

    def test_json_output(self, write_json, scraped_event_data):
        """Events are printed as JSON."""
        path = write_json("scraped.json", scraped_event_data)

        result = runner.invoke(app, ["extract", path, "--url", "https://example.org/e/1", "--format", "json"])

        assert result.exit_code == 0
        assert '"id": "wrestling-fringe-2025-07-20"' in result.output

    def test_no_events_warning(self, write_json):
        """Payloads without events print a warning."""
        path = write_json("scraped.json", {"foo": "bar"})

        result = runner.invoke(app, ["extract", path])

        assert result.exit_code == 0
        assert "No events could be extracted" in result.output

    def test_missing_file(self):
        """A missing input file exits with an error."""
        result = runner.invoke(app, ["extract", "missing.json"])
        assert result.exit_code == 1


class TestProcessCommand:
    """Tests for process."""

    def test_json_output(self, write_json, flyer_event_data, venue_file):
        """Processing output includes the matched venue and quality."""
        path = write_json("flyer.json", {"success": True, "eventData": flyer_event_data, "confidence": {"overall": 85}})

        result = runner.invoke(app, ["process", path, "--venues", venue_file, "--format", "json"])

        assert result.exit_code == 0
        assert '"venue_id": "pump-house"' in result.output
        assert '"quality":' in result.output

    def test_table_output(self, write_json, flyer_event_data):
        """The table view shows the processing summary."""
        path = write_json("flyer.json", flyer_event_data)

        result = runner.invoke(app, ["process", path])

        assert result.exit_code == 0
        assert "improvements" in result.output

    def test_failed_extraction(self, write_json):
        """A failed LLM extraction exits with an error."""
        path = write_json("flyer.json", {"success": False, "eventData": None, "error": "No event found"})

        result = runner.invoke(app, ["process", path])

        assert result.exit_code == 1


class TestMatchVenueCommand:
    """Tests for match-venue."""

    def test_match(self, venue_file):
        """Candidates are listed with their scores."""
        result = runner.invoke(app, ["match-venue", "Globe Theater", "--venues", venue_file])

        assert result.exit_code == 0
        assert "globe" in result.output
        assert "86" in result.output

    def test_no_match(self, venue_file):
        """Unmatched text prints a notice."""
        result = runner.invoke(app, ["match-venue", "Somewhere Else Entirely", "--venues", venue_file])

        assert result.exit_code == 0
        assert "No venue matched" in result.output

    def test_no_venue_file(self):
        """Without a venue file the command fails."""
        result = runner.invoke(app, ["match-venue", "Globe Theater"])
        assert result.exit_code == 1
