from pathlib import Path
from unittest.mock import MagicMock

import pytest
from typer.testing import CliRunner

from osmbound.cli import app, decode_key, drive_wizard
from osmbound.domain.enums import Key, WizardState
from osmbound.pipeline.export import Exporter
from osmbound.domain.models import FeatureCollection
from osmbound.types import FetchResult, UpstreamStatusError
from osmbound.screens import render_outcome
from osmbound.wizard import FetchWizard

runner = CliRunner()


@pytest.fixture
def output_root(tmp_path, monkeypatch):
    root = tmp_path / "geojson"
    monkeypatch.setenv("OSMBOUND_OUTPUT_ROOT", str(root))
    return root


@pytest.mark.parametrize("sequence,key", [
    ("\x1b[A", Key.UP),
    ("\x1b[A\x1b[A\x1b[A", Key.UP),
    ("\x1b[B\x1b[B", Key.DOWN),
    ("\x1b[C", Key.OTHER),
    ("\x1b[B", Key.DOWN),
    ("\xe0H", Key.UP),
    ("\xe0P", Key.DOWN),
    ("\r", Key.ENTER),
    ("\x1b", Key.ESCAPE),
    ("q", Key.QUIT),
    ("x", Key.OTHER),
])
def test_decode_key(sequence, key):
    assert decode_key(sequence) == key


def test_levels_command():
    result = runner.invoke(app, ["levels"])

    assert result.exit_code == 0
    assert "Level  2: Countries" in result.output
    assert "Level 10: Eighth-level (city blocks)" in result.output


def test_countries_command_filters_bundled_catalog():
    result = runner.invoke(app, ["countries", "fran"])

    assert result.exit_code == 0
    assert "France (Q142)" in result.output


def test_countries_command_no_match():
    result = runner.invoke(app, ["countries", "atlantis"])

    assert result.exit_code == 0
    assert "No countries found." in result.output


def test_list_command_empty(output_root):
    result = runner.invoke(app, ["list"])

    assert result.exit_code == 0
    assert "No downloaded boundaries found." in result.output


def test_list_command_shows_downloads(output_root):
    Exporter(output_root).write(FeatureCollection(), "Q142", 6)

    result = runner.invoke(app, ["list"])

    assert result.exit_code == 0
    assert "France" in result.output
    assert "Q142" in result.output


def test_fetch_command_success(mocker, output_root):
    run = mocker.patch("osmbound.cli.BoundaryPipeline.run", return_value=FetchResult(
        country_code="Q142", admin_level=4, output_path=output_root / "Q142" / "4" / "boundary.geojson",
        elements_received=3, features_written=2,
    ))

    result = runner.invoke(app, ["fetch", "--country", "France", "--level", "4", "--yes"])

    assert result.exit_code == 0
    assert "Saved 2 features" in result.output
    run.assert_called_once_with("Q142", 4, "France")


def test_fetch_command_reports_failure(mocker, output_root):
    mocker.patch("osmbound.cli.BoundaryPipeline.run", side_effect=UpstreamStatusError(404, "Not Found"))

    result = runner.invoke(app, ["fetch", "--country", "Q142", "--level", "4"])

    assert result.exit_code == 1
    assert "status 404" in result.output


def test_fetch_command_unknown_country(output_root):
    result = runner.invoke(app, ["fetch", "--country", "Atlantis"])

    assert result.exit_code == 1
    assert "Unknown country" in result.output


def test_fetch_command_accepts_uncatalogued_code(mocker, output_root):
    run = mocker.patch("osmbound.cli.BoundaryPipeline.run", return_value=FetchResult(
        country_code="Q123456", admin_level=2, output_path=Path("x"),
    ))

    result = runner.invoke(app, ["fetch", "--country", "Q123456", "--level", "2", "--yes"])

    assert result.exit_code == 0
    run.assert_called_once_with("Q123456", 2, "Q123456")


def test_fetch_command_declined_overwrite(mocker, output_root):
    Exporter(output_root).write(FeatureCollection(), "Q142", 4)
    run = mocker.patch("osmbound.cli.BoundaryPipeline.run")

    result = runner.invoke(app, ["fetch", "--country", "Q142", "--level", "4"], input="n\n")

    assert result.exit_code == 0
    assert "Download cancelled." in result.output
    run.assert_not_called()


def test_menu_exits_nonzero_without_catalog(tmp_path, monkeypatch):
    monkeypatch.setenv("OSMBOUND_COUNTRY_LIST", str(tmp_path / "missing.json"))

    result = runner.invoke(app, ["menu"])

    assert result.exit_code == 1
    assert "Error loading country list" in result.output


def test_version_command():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "osmbound version" in result.output


def scripted(wizard, pipeline, lines, keys):
    screens = []
    drive_wizard(
        wizard,
        pipeline,
        read_key=iter(keys).__next__,
        read_line=iter(lines).__next__,
        show=screens.append,
    )
    return screens


def test_drive_wizard_runs_pipeline_once(catalog):
    pipeline = MagicMock()
    pipeline.run.return_value = FetchResult(country_code="Q142", admin_level=8, output_path=Path("x"))
    wizard = FetchWizard(catalog)

    screens = scripted(wizard, pipeline, ["", "france"], [Key.ENTER, Key.ENTER, Key.ENTER])

    assert wizard.state == WizardState.DONE
    pipeline.run.assert_called_once_with("Q142", 8, "France")
    assert "Please enter a search term." in screens[1]
    assert "Downloading Boundary" in screens[-1]


def test_drive_wizard_records_fetch_failure(catalog):
    pipeline = MagicMock()
    pipeline.run.side_effect = UpstreamStatusError(404)
    wizard = FetchWizard(catalog)

    scripted(wizard, pipeline, ["germany"], [Key.ENTER, Key.ENTER, Key.ENTER])

    assert wizard.state == WizardState.DONE
    assert isinstance(wizard.error, UpstreamStatusError)


def test_drive_wizard_cancel_skips_pipeline(catalog):
    pipeline = MagicMock()
    wizard = FetchWizard(catalog)

    scripted(wizard, pipeline, ["germany"], [Key.ENTER, Key.ESCAPE])

    assert wizard.state == WizardState.CANCELLED
    pipeline.run.assert_not_called()


def test_confirm_screen_warns_about_overwrite(catalog):
    pipeline = MagicMock()
    wizard = FetchWizard(catalog, exists=lambda code, level: True)

    screens = scripted(wizard, pipeline, ["germany"], [Key.ENTER, Key.ENTER, Key.DOWN, Key.ENTER])

    assert any("will be overwritten" in screen for screen in screens)
    assert wizard.cancel_reason == "Download cancelled"


def test_fetch_command_warns_about_remark(mocker, output_root):
    mocker.patch("osmbound.cli.BoundaryPipeline.run", return_value=FetchResult(
        country_code="Q142", admin_level=8, output_path=Path("x"),
        remark="runtime error: Query timed out in \"query\" at line 1 after 90 seconds.",
    ))

    result = runner.invoke(app, ["fetch", "--country", "Q142", "--yes"])

    assert result.exit_code == 0
    assert "timed out" in result.output
    assert "may be incomplete" in result.output


def test_outcome_screen_warns_about_remark(catalog):
    pipeline = MagicMock()
    pipeline.run.return_value = FetchResult(
        country_code="Q142", admin_level=8, output_path=Path("x"),
        remark="runtime error: Query timed out",
    )
    wizard = FetchWizard(catalog)
    scripted(wizard, pipeline, ["france"], [Key.ENTER, Key.ENTER, Key.ENTER])

    text = render_outcome(wizard)

    assert "timed out" in text
    assert "Success!" in text


def test_outcome_screen_without_remark(catalog):
    pipeline = MagicMock()
    pipeline.run.return_value = FetchResult(country_code="Q142", admin_level=8, output_path=Path("x"))
    wizard = FetchWizard(catalog)
    scripted(wizard, pipeline, ["france"], [Key.ENTER, Key.ENTER, Key.ENTER])

    assert "Warning" not in render_outcome(wizard)
